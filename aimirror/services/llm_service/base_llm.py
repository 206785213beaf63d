"""Completion gateway interface and implementations.

The chat pipeline only depends on CompletionGateway.submit(), so the
provider can be swapped for a deterministic double in tests.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Role vocabulary of the chat-completions API.
ChatMessage = Dict[str, str]


@dataclass(frozen=True)
class CompletionParams:
    """Per-call parameters for a completion request."""
    max_tokens: int = 700
    temperature: float = 0.35
    json_object: bool = True


@dataclass
class LLMConfig:
    """Configuration for the OpenAI gateway."""
    model_name: str = "gpt-4.1-mini"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = None


class CompletionGateway(ABC):
    """Capability interface for the external completion service."""

    @abstractmethod
    async def submit(self, messages: List[ChatMessage], params: CompletionParams) -> str:
        """Send an assembled message sequence and return the raw reply text.

        Args:
            messages: Ordered chat messages, each {"role": ..., "content": ...}
            params: Output bound, temperature and response format

        Returns:
            Raw reply text; empty string when the service returned no content

        Raises:
            Exception: Any transport, auth or quota failure propagates as-is
        """


class OpenAICompletionGateway(CompletionGateway):
    """OpenAI chat-completions implementation.

    Without an injected client, a fresh AsyncOpenAI client is opened and
    closed inside every submit() call. Each async Flask view runs on its
    own event loop, so pooled connections must not outlive the call.
    """

    def __init__(self, config: LLMConfig, client=None):
        """Initialize OpenAI gateway.

        Args:
            config: Gateway configuration with API key
            client: Pre-built AsyncOpenAI client (tests)
        """
        if client is None and not config.api_key:
            raise ValueError("OpenAI API key required")

        self.config = config
        self.client = client

        logger.info("LLM initialized", extra={"provider": "openai", "model": config.model_name})

    def client_kwargs(self) -> Dict[str, object]:
        """Constructor arguments for a per-call AsyncOpenAI client."""
        # No automatic retries
        kwargs: Dict[str, object] = {"api_key": self.config.api_key, "max_retries": 0}
        if self.config.base_url is not None:
            kwargs["base_url"] = self.config.base_url
        if self.config.timeout_seconds is not None:
            kwargs["timeout"] = self.config.timeout_seconds
        return kwargs

    async def submit(self, messages: List[ChatMessage], params: CompletionParams) -> str:
        if self.client is not None:
            return await self._complete(self.client, messages, params)

        import openai
        async with openai.AsyncOpenAI(**self.client_kwargs()) as client:
            return await self._complete(client, messages, params)

    async def _complete(self, client, messages: List[ChatMessage], params: CompletionParams) -> str:
        request = {
            "model": self.config.model_name,
            "messages": messages,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
        }
        if params.json_object:
            request["response_format"] = {"type": "json_object"}

        start_time = time.time()

        try:
            response = await client.chat.completions.create(**request)
        except Exception as e:
            logger.error(
                "OpenAI generation failed",
                extra={
                    "model": self.config.model_name,
                    "error_type": type(e).__name__,
                }
            )
            raise

        latency_ms = (time.time() - start_time) * 1000

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        tokens_used = response.usage.total_tokens if response.usage else None

        logger.info(
            "OpenAI generation successful",
            extra={
                "model": self.config.model_name,
                "latency_ms": latency_ms,
                "tokens_used": tokens_used,
                "reply_length": len(text),
            }
        )

        return text


def create_gateway(config: LLMConfig) -> CompletionGateway:
    """Factory function to create the production gateway.

    Raises:
        ValueError: If the API key is missing
    """
    return OpenAICompletionGateway(config)
