"""Request validation for the chat endpoint.

Collects every violated constraint, not just the first, so the caller can
fix the whole request in one round trip.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from aimirror.shared.models import Conversation, Message, Role
from .schemas import ChatRequestModel

logger = logging.getLogger(__name__)

ROOT_FIELD = "body"


class RequestValidationError(ValueError):
    """Client sent a malformed or out-of-bounds request."""

    def __init__(self, error: str, details: Optional[Dict[str, List[str]]] = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingUserMessageError(RequestValidationError):
    """Structurally valid conversation with no user turn."""

    def __init__(self):
        super().__init__("Missing user message")


def flatten_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic errors by dotted field path.

    ('messages', 0, 'content') becomes "messages.0.content"; errors on the
    root value are reported under "body".
    """
    details: Dict[str, List[str]] = {}
    for error in exc.errors(include_url=False):
        path = ".".join(str(part) for part in error["loc"]) or ROOT_FIELD
        details.setdefault(path, []).append(error["msg"])
    return details


def validate_request(payload: Any) -> Conversation:
    """Turn a parsed JSON body into a Conversation.

    Args:
        payload: Any parsed JSON value (None if the body was not JSON)

    Returns:
        Conversation tuple, chronological order preserved

    Raises:
        RequestValidationError: Shape or bounds violated; details lists
            every violation
        MissingUserMessageError: No message has role=user
    """
    try:
        request = ChatRequestModel.model_validate(payload)
    except ValidationError as e:
        details = flatten_errors(e)
        logger.warning(
            "CHAT_REQUEST_INVALID",
            extra={"reason": "schema", "error_count": e.error_count(), "fields": sorted(details)},
        )
        raise RequestValidationError("Invalid request", details) from e

    conversation: Conversation = tuple(
        Message(role=m.role, content=m.content) for m in request.messages
    )

    if not any(m.role is Role.USER for m in conversation):
        logger.warning("CHAT_REQUEST_INVALID", extra={"reason": "missing_user_message"})
        raise MissingUserMessageError()

    return conversation
