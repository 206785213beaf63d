"""Chat pipeline - validate, gate, assemble, complete, check.

Sequence for one request:
1. Request validation (400 on failure)
2. Crisis gate on the latest user message (fixed reply, no model call)
3. Session digest + prompt assembly
4. Completion gateway call (500 if it raises)
5. Reply validation (fallback reply with 200 if off-contract)

No state is shared between requests; the gateway call is the only await.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from aimirror.services.llm_service import CompletionGateway, CompletionParams
from aimirror.services.safety_service import CrisisScanner, crisis_response
from aimirror.shared.models import latest_user_message
from aimirror.shared.utils import text_log_fields
from .digest import build_session_digest
from .prompt_assembler import assemble_messages
from .prompts import SERVER_ERROR_MESSAGE
from .response_validator import validate_model_reply
from .validation import RequestValidationError, validate_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """HTTP status and JSON body for one request."""
    status_code: int
    body: Dict[str, Any]


class ChatPipeline:
    """Single orchestrator for the chat endpoint.

    The session digest is a toggle rather than a second pipeline.
    """

    def __init__(
        self,
        gateway: CompletionGateway,
        scanner: Optional[CrisisScanner] = None,
        params: Optional[CompletionParams] = None,
        include_digest: bool = True,
    ):
        """Initialize pipeline.

        Args:
            gateway: External completion service
            scanner: Crisis gate; a default CrisisScanner if omitted
            params: Completion parameters sent on every call
            include_digest: Send the session digest as a second system message
        """
        self.gateway = gateway
        self.scanner = scanner or CrisisScanner()
        self.params = params or CompletionParams()
        self.include_digest = include_digest

    async def handle(self, payload: Any) -> PipelineResult:
        """Run one request through the pipeline.

        Args:
            payload: Parsed JSON body, or None if the body was not JSON

        Returns:
            PipelineResult; never raises for client or model-content errors
        """
        try:
            conversation = validate_request(payload)
        except RequestValidationError as e:
            return PipelineResult(400, e.to_dict())

        # validate_request guarantees a user turn
        latest = latest_user_message(conversation)

        logger.info(
            "CHAT_REQUEST_STARTED",
            extra={
                "message_count": len(conversation),
                **text_log_fields(latest.content, prefix="latest_user"),
            }
        )

        scan = self.scanner.scan(latest.content)
        if scan.is_crisis:
            return PipelineResult(200, crisis_response().to_dict())

        digest = build_session_digest(conversation) if self.include_digest else None
        messages = assemble_messages(conversation, digest=digest)

        try:
            raw = await self.gateway.submit(messages, self.params)
        except Exception as e:
            logger.error(
                "COMPLETION_GATEWAY_FAILED",
                extra={"error_type": type(e).__name__},
                exc_info=True,
            )
            return PipelineResult(500, {
                "error": "Internal server error",
                "message": SERVER_ERROR_MESSAGE,
            })

        result = validate_model_reply(raw)

        logger.info(
            "CHAT_REQUEST_COMPLETED",
            extra={
                "bucket": result.bucket.value,
                "crisis": result.crisis,
                "digest_included": digest is not None,
            }
        )

        return PipelineResult(200, result.to_dict())
