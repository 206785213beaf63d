"""Safety Service: deterministic crisis gate.

The crisis scan runs on the latest user message BEFORE any content is sent
to the completion service. On a match the model is bypassed and a fixed
crisis reply is returned.

Components:
- scanner.py: CrisisScanner, lowercase substring matching
- config.py: crisis phrase list and the fixed crisis reply

Usage:
    from aimirror.services.safety_service import CrisisScanner
    scanner = CrisisScanner()
    result = scanner.scan(text)
"""

from .config import CRISIS_MESSAGE, CRISIS_PARAGRAPHS, CRISIS_PHRASES, SafetyConfig
from .scanner import CrisisScanner, CrisisScanResult, crisis_response

__all__ = [
    "CrisisScanner",
    "CrisisScanResult",
    "crisis_response",
    "SafetyConfig",
    "CRISIS_MESSAGE",
    "CRISIS_PARAGRAPHS",
    "CRISIS_PHRASES",
]
