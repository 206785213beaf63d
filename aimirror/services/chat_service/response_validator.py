"""Validation of the completion service's reply, with a fixed fallback.

A malformed reply is not a server error from the caller's point of view:
it degrades to a short, safe message returned with HTTP 200.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from aimirror.services.safety_service import crisis_response
from aimirror.shared.models import Bucket, ClassifiedResponse
from .prompts import FALLBACK_MESSAGE
from .schemas import ClassifiedReplyModel

logger = logging.getLogger(__name__)


def fallback_response() -> ClassifiedResponse:
    """Fixed reply used whenever the model output fails validation."""
    return ClassifiedResponse(
        bucket=Bucket.OUT_OF_SCOPE,
        crisis=False,
        response=FALLBACK_MESSAGE,
    )


def parse_model_reply(raw: Optional[str]) -> Optional[ClassifiedResponse]:
    """Parse and schema-check the raw reply.

    Returns:
        ClassifiedResponse, or None if the text is empty, not a JSON
        object, or off-contract
    """
    if not raw:
        return None
    try:
        reply = ClassifiedReplyModel.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            "MODEL_REPLY_INVALID",
            extra={
                "error_count": e.error_count(),
                "error_types": sorted({err["type"] for err in e.errors(include_url=False)}),
                "reply_length": len(raw),
            }
        )
        return None

    if reply.crisis:
        # A model-raised crisis flag never carries model-written text.
        logger.critical(
            "MODEL_REPLY_CRISIS_FLAGGED",
            extra={"model_bucket": reply.bucket.value, "action": "CRISIS_RESPONSE_SUBSTITUTED"},
        )
        return crisis_response()

    return ClassifiedResponse(bucket=reply.bucket, crisis=False, response=reply.response)


def validate_model_reply(raw: Optional[str]) -> ClassifiedResponse:
    """Return the validated reply, or the fallback on any violation."""
    parsed = parse_model_reply(raw)
    if parsed is None:
        logger.info("FALLBACK_RESPONSE_USED")
        return fallback_response()
    return parsed
