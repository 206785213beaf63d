"""Chat Service configuration.

Values come from environment variables; defaults match the deployed
service. API credentials are a deployment concern and are only read here.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from aimirror.services.llm_service import CompletionParams, LLMConfig


def _env_flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ChatServiceConfig:
    """Configuration for the chat pipeline and its gateway."""

    openai_api_key: Optional[str] = field(default=None, repr=False)
    model_name: str = "gpt-4.1-mini"
    # Alternate OpenAI-compatible endpoint; the public API when unset
    base_url: Optional[str] = None
    temperature: float = 0.35
    max_tokens: int = 700

    # Send the session digest as a second system message
    include_digest: bool = True

    port: int = 8000

    params: CompletionParams = field(init=False)

    def __post_init__(self):
        if not 0.0 < self.temperature <= 2.0:
            raise ValueError(f"Temperature must be in (0.0, 2.0], got {self.temperature}")
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        object.__setattr__(
            self,
            "params",
            CompletionParams(max_tokens=self.max_tokens, temperature=self.temperature),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ChatServiceConfig":
        env = os.environ if environ is None else environ
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            model_name=env.get("OPENAI_MODEL", "gpt-4.1-mini"),
            base_url=env.get("OPENAI_BASE_URL") or None,
            temperature=float(env.get("OPENAI_TEMPERATURE", "0.35")),
            max_tokens=int(env.get("OPENAI_MAX_TOKENS", "700")),
            include_digest=_env_flag(env.get("SESSION_DIGEST_ENABLED", "true")),
            port=int(env.get("PORT", "8000")),
        )

    def llm_config(self) -> LLMConfig:
        return LLMConfig(
            model_name=self.model_name,
            api_key=self.openai_api_key,
            base_url=self.base_url,
        )
