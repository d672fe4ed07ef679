# src/llm_blocks/llms/openai.py

import logging
from collections.abc import AsyncIterator
from time import monotonic
from typing import Any

from openai import NOT_GIVEN, AsyncOpenAI, OpenAIError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from llm_blocks.observability import names
from llm_blocks.observability.base import MetricsHook, NoOpMetricsHook, elapsed_ms

from .base import LLMStreamClient, Message
from .config import DEFAULT_MAX_TOKENS

logger = logging.getLogger(__name__)


class OpenAILLMClient(LLMStreamClient):
    """OpenAI streaming client.

    Stateless. Transport-only retries. Yields content deltas only.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        timeout: float = 30.0,
        max_retries: int = 3,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model = model
        self._max_retries = max_retries
        self._max_tokens = max_tokens
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized OpenAILLMClient with model=%s, timeout=%s",
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

        # Convert to provider format (internal only - never leaks)
        openai_messages = self._convert_messages(messages, system)

        logger.debug(
            "Streaming from OpenAI: model=%s, messages=%d",
            self._model,
            len(messages),
        )

        fragments = 0
        finish_reason = None
        try:
            raw = await self._open_stream(
                messages=openai_messages,
                temperature=temperature,
                max_tokens=max_tokens or self._max_tokens,
            )
            async with raw:
                async for chunk in raw:
                    if not chunk.choices:
                        continue
                    choice = chunk.choices[0]
                    if choice.delta.content:
                        fragments += 1
                        yield choice.delta.content
                    if choice.finish_reason:
                        finish_reason = choice.finish_reason
        except OpenAIError:
            self.metrics_hook.increment(
                names.LLM_ERRORS_TOTAL, labels={"provider": "openai"}
            )
            raise

        elapsed = elapsed_ms(start)
        self.metrics_hook.record_latency(names.LLM_STREAM_DURATION, elapsed)
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "openai", "model": self._model},
        )
        self.metrics_hook.increment(names.LLM_STREAM_FRAGMENTS_TOTAL, fragments)

        logger.info(
            "OpenAI stream finished: finish=%s, fragments=%d, latency=%.0fms",
            finish_reason,
            fragments,
            elapsed,
        )

    async def _open_stream(
        self,
        *,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int | None,
    ) -> Any:
        """Open the chunk stream with transport-only retries."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=retry_if_exception_type(OpenAIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens if max_tokens else NOT_GIVEN,
                    stream=True,
                )

    def _convert_messages(
        self, messages: list[Message], system: str | None
    ) -> list[dict]:
        """Convert Message objects to OpenAI format.

        Internal only. Provider format never leaks outside.
        """
        result: list[dict] = []
        if system:
            result.append({"role": "system", "content": system})
        for m in messages:
            result.append({"role": m.role.value, "content": m.content})
        return result
