"""Shared domain models for AI Mirror."""
from .conversation import (
    MAX_CONTENT_LENGTH,
    MAX_CONVERSATION_LENGTH,
    MIN_CONVERSATION_LENGTH,
    Bucket,
    ClassifiedResponse,
    Conversation,
    Message,
    Role,
    latest_user_message,
)

__all__ = [
    "MAX_CONTENT_LENGTH",
    "MAX_CONVERSATION_LENGTH",
    "MIN_CONVERSATION_LENGTH",
    "Bucket",
    "ClassifiedResponse",
    "Conversation",
    "Message",
    "Role",
    "latest_user_message",
]
