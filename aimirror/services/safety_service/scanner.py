"""Crisis scanner - the unconditional gate in front of the LLM.

Every conversation passes through here before anything is sent to the
completion service. A match bypasses the model entirely.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from aimirror.shared.models import Bucket, ClassifiedResponse
from aimirror.shared.utils import text_log_fields
from .config import CRISIS_MESSAGE, CRISIS_PHRASES, SafetyConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrisisScanResult:
    """Outcome of scanning one user message."""
    is_crisis: bool
    matched_phrases: Tuple[str, ...] = field(default_factory=tuple)
    scanner_version: str = ""


class CrisisScanner:
    """Lexical crisis detector.

    Lowercases the input and tests each phrase for containment. There is
    no stemming, negation handling, or surrounding-context window:
    "I don't want to die" still matches "want to die".
    """

    def __init__(
        self,
        config: Optional[SafetyConfig] = None,
        phrases: Iterable[str] = CRISIS_PHRASES,
    ):
        """Initialize scanner.

        Args:
            config: Scanner configuration
            phrases: Crisis phrases to match; lowercased on load
        """
        self.config = config or SafetyConfig()
        # dict preserves order while dropping duplicates
        self._phrases: Tuple[str, ...] = tuple(dict.fromkeys(p.lower() for p in phrases))

        logger.info(
            "CRISIS_SCANNER_INITIALIZED",
            extra={
                "pattern_version": self.config.pattern_version,
                "phrase_count": len(self._phrases),
            }
        )

    @property
    def phrases(self) -> Tuple[str, ...]:
        return self._phrases

    def scan(self, text: str) -> CrisisScanResult:
        """Scan the latest user message for acute-risk phrases.

        Args:
            text: Raw content of the most recent user message

        Returns:
            CrisisScanResult with every matched phrase

        Logs:
            - CRISIS_SCAN_MATCHED: critical, when any phrase matches
        """
        lowered = text.lower()
        matches = tuple(phrase for phrase in self._phrases if phrase in lowered)

        if matches:
            logger.critical(
                "CRISIS_SCAN_MATCHED",
                extra={
                    **text_log_fields(text),
                    "matched_phrases": list(matches),
                    "pattern_version": self.config.pattern_version,
                    "action": "LLM_BYPASSED",
                }
            )

        return CrisisScanResult(
            is_crisis=bool(matches),
            matched_phrases=matches,
            scanner_version=self.config.pattern_version,
        )

    def is_crisis(self, text: str) -> bool:
        """Boolean form of scan()."""
        return self.scan(text).is_crisis


def crisis_response() -> ClassifiedResponse:
    """The fixed reply returned whenever the crisis gate fires."""
    return ClassifiedResponse(
        bucket=Bucket.OUT_OF_SCOPE,
        crisis=True,
        response=CRISIS_MESSAGE,
    )
