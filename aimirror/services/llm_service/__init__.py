"""LLM Service for AI Mirror.

Wraps the external completion service behind a small async interface so
the chat pipeline never depends on a live network call in tests.
"""

from .base_llm import (
    ChatMessage,
    CompletionGateway,
    CompletionParams,
    LLMConfig,
    OpenAICompletionGateway,
    create_gateway,
)

__version__ = "0.1.0"

__all__ = [
    "ChatMessage",
    "CompletionGateway",
    "CompletionParams",
    "LLMConfig",
    "OpenAICompletionGateway",
    "create_gateway",
]
