"""Shared utilities for AI Mirror."""
from .pii import hash_text_for_audit, text_log_fields

__all__ = ["hash_text_for_audit", "text_log_fields"]
