# src/llm_blocks/llms/base.py

from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from llm_blocks.observability.base import MetricsHook


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message sent to the model.

    Immutable. Stateless. Provider-agnostic.
    """

    role: Role
    content: str


class LLMStreamClient(Protocol):
    """Protocol for streaming LLM clients.

    Design principles:
    - Stateless: Every call receives the full message list
    - Text only: Yields plain text fragments, nothing provider-specific
    - Transport retries: Only while opening the stream, never mid-stream
    """

    metrics_hook: MetricsHook

    def stream(
        self,
        *,
        messages: list[Message],
        system: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        """Stream one completion as text fragments.

        Args:
            messages: Complete conversation history. No internal state.
            system: Optional system prompt.
            temperature: Sampling temperature (0.0 = deterministic).
            max_tokens: Maximum tokens in response.

        Yields:
            Non-empty text fragments, in order.

        Raises:
            Provider-specific errors after retry exhaustion, or any error
            raised once the stream has started.
        """
        ...
