# src/llm_blocks/agent/agent.py

import logging
from collections.abc import Callable
from contextlib import aclosing
from time import monotonic

from llm_blocks.blocks.models import BlockEvent
from llm_blocks.llms.base import LLMStreamClient
from llm_blocks.observability import names
from llm_blocks.observability.base import MetricsHook, NoOpMetricsHook, elapsed_ms
from llm_blocks.parsing.stream import parse_blocks
from llm_blocks.transcript.models import ChatMessage
from llm_blocks.transcript.transcript import Transcript

from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class Agent:
    """Runs assistant turns against a transcript.

    Each :meth:`step` streams one completion for the current history and
    writes the parsed blocks into a new assistant message as they arrive.
    Running or storing the blocks' payloads is left to the caller.
    """

    def __init__(
        self,
        client: LLMStreamClient,
        transcript: Transcript,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.client = client
        self.transcript = transcript
        self.system_prompt = system_prompt
        self.metrics_hook = metrics_hook
        self.in_progress = False

    async def step(
        self, on_event: Callable[[BlockEvent], None] | None = None
    ) -> ChatMessage:
        """Generate one assistant message from the current history.

        Args:
            on_event: Called with every block event after it was applied
                to the transcript.

        Returns:
            The assistant message, with all blocks complete.

        Raises:
            Whatever the client raises. The placeholder message is removed
            first if no block was written to it.
        """
        self.in_progress = True
        start = monotonic()

        placeholder = self.transcript.add_message("assistant")
        history = self.transcript.to_llm_messages(exclude={placeholder.id})
        logger.info("Agent step: %d messages of history", len(history))

        try:
            async with (
                aclosing(
                    self.client.stream(messages=history, system=self.system_prompt)
                ) as stream,
                aclosing(
                    parse_blocks(stream, metrics_hook=self.metrics_hook)
                ) as events,
            ):
                async for event in events:
                    self.transcript.apply_event(placeholder.id, event)
                    if on_event is not None:
                        on_event(event)
        except Exception:
            self.metrics_hook.increment(names.AGENT_STEP_ERRORS_TOTAL)
            if not placeholder.blocks:
                self.transcript.remove_message(placeholder.id)
            logger.warning("Agent step failed after %d blocks", len(placeholder.blocks))
            raise
        finally:
            self.in_progress = False

        self.metrics_hook.record_latency(names.AGENT_STEP_DURATION, elapsed_ms(start))
        self.metrics_hook.increment(names.AGENT_STEPS_TOTAL)
        logger.info("Agent step finished: %d blocks", len(placeholder.blocks))
        return placeholder
