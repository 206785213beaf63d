"""Pydantic models for the chat endpoint's request and the model's reply."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from aimirror.shared.models import (
    MAX_CONTENT_LENGTH,
    MAX_CONVERSATION_LENGTH,
    MIN_CONVERSATION_LENGTH,
    Bucket,
    Role,
)


class ChatMessageModel(BaseModel):
    """One conversation turn as submitted by the client."""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: StrictStr = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)


class ChatRequestModel(BaseModel):
    """Request body for POST /chat."""
    messages: List[ChatMessageModel] = Field(
        min_length=MIN_CONVERSATION_LENGTH,
        max_length=MAX_CONVERSATION_LENGTH,
    )


class ClassifiedReplyModel(BaseModel):
    """Shape the completion service must reply with.

    Unknown keys are ignored; the three contract fields are checked
    strictly so that e.g. "false" or 0 is not accepted for crisis.
    """
    bucket: Bucket
    crisis: StrictBool
    response: StrictStr = Field(min_length=1)
