# src/llm_blocks/blocks/models.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


@dataclass(frozen=True)
class TextBlock:
    """Free-form narrative text between data blocks."""

    id: str
    content: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class DataBlock:
    """Content delimited by a named ``<tag ...>`` / ``</tag>`` pair.

    ``result`` and ``error`` are written by consumers after the block is
    complete. The parser never sets them.
    """

    id: str
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    content: str = ""
    result: Any = None
    error: str | None = None
    type: Literal["data"] = "data"

    def __hash__(self) -> int:
        # attributes and result may be unhashable; equal blocks share an id
        return hash((self.type, self.id))


Block = TextBlock | DataBlock


class EventType(str, Enum):
    """Lifecycle stage of a block."""

    CREATE = "create"
    UPDATE = "update"
    COMPLETE = "complete"


@dataclass(frozen=True)
class BlockEvent:
    """A lifecycle event carrying a full snapshot of one block.

    Consumers can replace their local copy of ``block`` by id without
    keeping any prior state.
    """

    type: EventType
    block: Block

    @property
    def block_id(self) -> str:
        return self.block.id
