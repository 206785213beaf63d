"""Chat Service: the classification and safety-gating endpoint.

Every conversation is validated, then scanned by the Safety Service crisis
gate BEFORE any content reaches the completion service. Model replies are
schema-checked; anything off-contract degrades to a fixed safe reply.

Components:
- validation.py: request shape and bounds (pydantic)
- digest.py: session-only summary of recent user turns
- prompt_assembler.py: instruction + digest + conversation ordering
- response_validator.py: model reply checks and fallback
- pipeline.py: ChatPipeline orchestrator
- handler.py: Flask app factory (/chat, /health, /ready)

Endpoints:
- POST /chat - classify a conversation and reply
"""

from .config import ChatServiceConfig
from .pipeline import ChatPipeline, PipelineResult
from .validation import MissingUserMessageError, RequestValidationError, validate_request

__all__ = [
    "ChatServiceConfig",
    "ChatPipeline",
    "PipelineResult",
    "MissingUserMessageError",
    "RequestValidationError",
    "validate_request",
]
