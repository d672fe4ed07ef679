# src/llm_blocks/llms/config.py

from dataclasses import dataclass
from typing import Literal

DEFAULT_MAX_TOKENS = 4096


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for streaming LLM clients.

    Immutable. Explicit. No magic defaults from environment.
    """

    provider: Literal["openai", "anthropic"]
    model: str
    api_key: str | None = None  # Falls back to provider's env var
    timeout: float = 30.0
    max_retries: int = 3
    max_tokens: int = DEFAULT_MAX_TOKENS
