"""Conversation and classification domain models.

Every entity here is request-local: built when a request arrives and
discarded when it returns. Nothing is persisted.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

MAX_CONTENT_LENGTH = 4000
MIN_CONVERSATION_LENGTH = 1
MAX_CONVERSATION_LENGTH = 20


class Role(Enum):
    """Author of a conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class Bucket(Enum):
    """Behavioral category of the user's latest concern."""
    URGE_LOOP = "URGE_LOOP"
    OVERWHELM = "OVERWHELM"
    SELF_DOUBT = "SELF_DOUBT"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"

    @property
    def label(self) -> str:
        """Human-readable name shown by clients."""
        return _BUCKET_LABELS[self]


_BUCKET_LABELS = {
    Bucket.URGE_LOOP: "Urge loop",
    Bucket.OVERWHELM: "Mental overwhelm",
    Bucket.SELF_DOUBT: "Self-doubt",
    Bucket.OUT_OF_SCOPE: "Out of scope",
}


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Immutable - the pipeline only reads and copies messages.
    """
    role: Role
    content: str

    def __post_init__(self):
        if not self.content:
            raise ValueError("Message content must not be empty")
        if len(self.content) > MAX_CONTENT_LENGTH:
            raise ValueError(
                f"Message content must be at most {MAX_CONTENT_LENGTH} characters, "
                f"got {len(self.content)}"
            )


# Chronological, most recent last.
Conversation = Tuple[Message, ...]


def latest_user_message(conversation: Sequence[Message]) -> Optional[Message]:
    """Return the most recent user turn, or None if there is none."""
    for message in reversed(conversation):
        if message.role is Role.USER:
            return message
    return None


@dataclass(frozen=True)
class ClassifiedResponse:
    """The pipeline's sole output contract."""
    bucket: Bucket
    crisis: bool
    response: str

    def __post_init__(self):
        if not self.response:
            raise ValueError("Classified response text must not be empty")
        if self.crisis and self.bucket is not Bucket.OUT_OF_SCOPE:
            raise ValueError("Crisis responses must use the OUT_OF_SCOPE bucket")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "bucket": self.bucket.value,
            "crisis": self.crisis,
            "response": self.response,
        }
