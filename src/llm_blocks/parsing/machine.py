# src/llm_blocks/parsing/machine.py

import logging
import uuid
from collections.abc import Callable
from enum import Enum

from llm_blocks.blocks.models import Block, BlockEvent, DataBlock, EventType, TextBlock

from .attributes import parse_attributes
from .buffer import ChunkBuffer
from .tags import ScanMode, find_partial_prefix, match_close_tag, match_open_tag

logger = logging.getLogger(__name__)


class ParserMode(str, Enum):
    TEXT = "text"
    DATA = "data"


def _new_block_id() -> str:
    return str(uuid.uuid4())


class BlockStateMachine:
    """Incremental parser turning text fragments into block events.

    Feed fragments with :meth:`feed` and call :meth:`finish` once the
    stream is exhausted. Each call returns the events that became certain
    with the input seen so far, in order. At most one block is open at a
    time; its id is fixed at ``create`` and its content only grows.

    Content is never emitted while it could still turn out to be tag
    markup, so the completed blocks are the same however the input was
    split into fragments.
    """

    def __init__(self, id_factory: Callable[[], str] | None = None) -> None:
        self._id_factory = id_factory or _new_block_id
        self._buffer = ChunkBuffer()
        self._mode = ParserMode.TEXT
        self._finished = False
        # The withheld tail is a partial open tag inside an attribute value
        self._in_attribute_value = False

        # Open block
        self._block_id: str | None = None
        self._tag = ""
        self._attributes: dict[str, str] = {}
        self._content = ""  # raw accumulation, untrimmed
        self._visible = ""  # content of the last emitted snapshot

    @property
    def mode(self) -> ParserMode:
        return self._mode

    @property
    def open_block(self) -> Block | None:
        """Snapshot of the block currently being built, if any."""
        if self._block_id is None:
            return None
        return self._snapshot()

    @property
    def pending(self) -> str:
        """Input withheld because it may still become tag markup."""
        return self._buffer.peek()

    def feed(self, fragment: str) -> list[BlockEvent]:
        if self._finished:
            raise RuntimeError("Cannot feed a finished parser")

        self._buffer.append(fragment)
        if self._in_attribute_value and '"' not in fragment:
            # Still inside the value: the tail stays a partial tag.
            return []

        events: list[BlockEvent] = []
        self._drain(events, final=False)
        self._in_attribute_value = (
            self._mode == ParserMode.TEXT and self._buffer.peek().count('"') % 2 == 1
        )
        return events

    def finish(self) -> list[BlockEvent]:
        """Flush withheld input and complete the open block, if any.

        An unclosed data block is completed with whatever content it has.
        """
        if self._finished:
            return []
        self._finished = True

        events: list[BlockEvent] = []
        self._drain(events, final=True)

        rest = self._buffer.drain()
        if self._mode == ParserMode.DATA:
            logger.debug("Stream ended inside <%s>, completing as-is", self._tag)
            self._append(rest, events)
        elif rest:
            self._append_text(rest, events)

        if self._block_id is not None:
            self._complete(events)
        return events

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _drain(self, events: list[BlockEvent], *, final: bool) -> None:
        """Consume the buffer until only an undecidable tail remains."""
        while self._buffer:
            if self._mode == ParserMode.TEXT:
                progressed = self._scan_text(events, final=final)
            else:
                progressed = self._scan_data(events, final=final)
            if not progressed:
                return

    def _scan_text(self, events: list[BlockEvent], *, final: bool) -> bool:
        buffer = self._buffer.peek()
        match = match_open_tag(buffer)

        if match is None:
            if final:
                # Nothing can grow any more; leave the rest to finish().
                return False
            cut = find_partial_prefix(buffer, ScanMode.OPEN)
            safe = self._buffer.consume(len(buffer) if cut is None else cut)
            if safe:
                self._append_text(safe, events)
            return False

        self._buffer.consume(match.matched_length)
        if match.text_before:
            self._append_text(match.text_before, events)
        if self._block_id is not None:
            self._complete(events)

        self._mode = ParserMode.DATA
        self._tag = match.tag_name
        self._attributes = parse_attributes(match.attributes_raw)
        self._create(events)
        return True

    def _scan_data(self, events: list[BlockEvent], *, final: bool) -> bool:
        buffer = self._buffer.peek()
        match = match_close_tag(buffer, self._tag, final=final)

        if match is None:
            if final:
                return False
            cut = find_partial_prefix(buffer, ScanMode.CLOSE, self._tag)
            safe = self._buffer.consume(len(buffer) if cut is None else cut)
            self._append(safe, events)
            return False

        self._buffer.consume(match.matched_length)
        self._append(match.data_before, events)
        self._complete(events)
        self._mode = ParserMode.TEXT
        return True

    # ------------------------------------------------------------------
    # Block lifecycle
    # ------------------------------------------------------------------

    def _append_text(self, text: str, events: list[BlockEvent]) -> None:
        if self._block_id is None:
            self._create(events)
        self._append(text, events)

    def _append(self, text: str, events: list[BlockEvent]) -> None:
        self._content += text
        visible = self._visible_content()
        if visible != self._visible:
            self._visible = visible
            events.append(BlockEvent(EventType.UPDATE, self._snapshot()))

    def _visible_content(self) -> str:
        # Data content is trimmed. Stripping the growing accumulation keeps
        # every snapshot a prefix of the next one.
        if self._mode == ParserMode.DATA:
            return self._content.strip()
        return self._content

    def _create(self, events: list[BlockEvent]) -> None:
        self._block_id = self._id_factory()
        self._content = ""
        self._visible = ""
        block = self._snapshot()
        logger.debug("Created %s block %s", block.type, block.id)
        events.append(BlockEvent(EventType.CREATE, block))

    def _complete(self, events: list[BlockEvent]) -> None:
        block = self._snapshot()
        logger.debug(
            "Completed %s block %s (%d chars)", block.type, block.id, len(block.content)
        )
        events.append(BlockEvent(EventType.COMPLETE, block))
        self._block_id = None
        self._tag = ""
        self._attributes = {}
        self._content = ""
        self._visible = ""

    def _snapshot(self) -> Block:
        assert self._block_id is not None
        if self._mode == ParserMode.DATA:
            return DataBlock(
                id=self._block_id,
                tag=self._tag,
                attributes=dict(self._attributes),
                content=self._visible,
            )
        return TextBlock(id=self._block_id, content=self._visible)
