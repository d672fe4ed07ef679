# src/llm_blocks/llms/anthropic.py

import logging
from collections.abc import AsyncIterator
from time import monotonic
from typing import Any

from anthropic import NOT_GIVEN, APIError, AsyncAnthropic
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from llm_blocks.observability import names
from llm_blocks.observability.base import MetricsHook, NoOpMetricsHook, elapsed_ms

from .base import LLMStreamClient, Message, Role
from .config import DEFAULT_MAX_TOKENS

logger = logging.getLogger(__name__)


class AnthropicLLMClient(LLMStreamClient):
    """Anthropic streaming client.

    Stateless. Transport-only retries. Yields text deltas only.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-haiku-4-5-20251001",
        timeout: float = 30.0,
        max_retries: int = 3,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self._max_tokens = max_tokens
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized AnthropicLLMClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def stream(
        self,
        *,
        messages: list[Message],
        system: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> AsyncIterator[str]:
        start = monotonic()

        # Anthropic takes the system prompt as a separate parameter
        system_content, non_system_messages = self._extract_system(messages, system)
        anthropic_messages = self._convert_messages(non_system_messages)

        logger.debug(
            "Streaming from Anthropic: model=%s, messages=%d",
            self._model,
            len(messages),
        )

        fragments = 0
        stop_reason = None
        try:
            raw = await self._open_stream(
                system=system_content,
                messages=anthropic_messages,
                temperature=temperature,
                max_tokens=max_tokens or self._max_tokens,
            )
            async with raw:
                async for event in raw:
                    if event.type == "content_block_delta":
                        if event.delta.type == "text_delta" and event.delta.text:
                            fragments += 1
                            yield event.delta.text
                    elif event.type == "message_delta":
                        stop_reason = event.delta.stop_reason
        except APIError:
            self.metrics_hook.increment(
                names.LLM_ERRORS_TOTAL, labels={"provider": "anthropic"}
            )
            raise

        elapsed = elapsed_ms(start)
        self.metrics_hook.record_latency(names.LLM_STREAM_DURATION, elapsed)
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "anthropic", "model": self._model},
        )
        self.metrics_hook.increment(names.LLM_STREAM_FRAGMENTS_TOTAL, fragments)

        logger.info(
            "Anthropic stream finished: stop=%s, fragments=%d, latency=%.0fms",
            stop_reason,
            fragments,
            elapsed,
        )

    async def _open_stream(
        self,
        *,
        system: str | None,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        """Open the event stream with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(APIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.messages.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                    system=system if system else NOT_GIVEN,
                    stream=True,
                )

    def _extract_system(
        self, messages: list[Message], system: str | None
    ) -> tuple[str | None, list[Message]]:
        """Split system messages from the rest.

        An explicit ``system`` argument comes first, then any SYSTEM
        messages, joined by blank lines.
        """
        system_parts = [system] if system else []
        non_system = []

        for m in messages:
            if m.role == Role.SYSTEM:
                system_parts.append(m.content)
            else:
                non_system.append(m)

        return "\n\n".join(system_parts) or None, non_system

    def _convert_messages(self, messages: list[Message]) -> list[dict]:
        """Convert Message objects to Anthropic format.

        Internal only. Provider format never leaks outside.
        """
        return [{"role": m.role.value, "content": m.content} for m in messages]
