# src/llm_blocks/parsing/stream.py

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from time import monotonic

from llm_blocks.blocks.models import Block, BlockEvent, EventType
from llm_blocks.observability import names
from llm_blocks.observability.base import MetricsHook, NoOpMetricsHook, elapsed_ms

from .machine import BlockStateMachine

logger = logging.getLogger(__name__)


async def parse_blocks(
    stream: AsyncIterable[str],
    *,
    id_factory: Callable[[], str] | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> AsyncIterator[BlockEvent]:
    """Parse an async stream of text fragments into block events.

    A new fragment is pulled only after every event produced by the
    previous one has been consumed. Errors raised by ``stream`` propagate
    unchanged, and nothing more is pulled once the caller stops iterating.

    Example:
        >>> async for event in parse_blocks(client.stream(messages=messages)):
        ...     transcript.apply_event(message.id, event)
    """
    machine = BlockStateMachine(id_factory=id_factory)
    start = monotonic()
    fragments = 0

    async for fragment in stream:
        fragments += 1
        for event in machine.feed(fragment):
            _record(event, metrics_hook)
            yield event

    for event in machine.finish():
        _record(event, metrics_hook)
        yield event

    metrics_hook.record_latency(names.PARSER_STREAM_DURATION, elapsed_ms(start))
    metrics_hook.increment(names.PARSER_FRAGMENTS_TOTAL, fragments)
    logger.debug("Parsed %d fragments", fragments)


def iter_blocks(
    fragments: Iterable[str],
    *,
    id_factory: Callable[[], str] | None = None,
) -> Iterator[BlockEvent]:
    """Synchronous counterpart of :func:`parse_blocks`."""
    machine = BlockStateMachine(id_factory=id_factory)
    for fragment in fragments:
        yield from machine.feed(fragment)
    yield from machine.finish()


def parse_text(
    text: str, *, id_factory: Callable[[], str] | None = None
) -> list[Block]:
    """Return the completed blocks of a whole string."""
    return [
        event.block
        for event in iter_blocks([text], id_factory=id_factory)
        if event.type == EventType.COMPLETE
    ]


def _record(event: BlockEvent, metrics_hook: MetricsHook) -> None:
    if event.type == EventType.COMPLETE:
        metrics_hook.increment(
            names.PARSER_BLOCKS_COMPLETED, labels={"type": event.block.type}
        )
