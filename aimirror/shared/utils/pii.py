"""Log-safe handling of user text.

Conversation content is sensitive and must never reach application logs.
Log a fingerprint of the text instead, which can be matched against a
known message without exposing its content.
"""
import hashlib
from typing import Dict, Union


def hash_text_for_audit(text: str) -> str:
    """Hash message text for logging without exposing content.

    Args:
        text: Raw message text

    Returns:
        SHA-256 hex digest of the text

    Example:
        >>> hash_text_for_audit("hello")[:12]
        '2cf24dba5fb0'
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def text_log_fields(text: str, prefix: str = "text") -> Dict[str, Union[str, int]]:
    """Build ``extra`` logging fields describing a text without its content."""
    return {
        f"{prefix}_hash": hash_text_for_audit(text),
        f"{prefix}_length": len(text),
    }
