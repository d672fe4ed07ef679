"""Block data model and markup serialization."""

from .markup import block_to_markup, blocks_to_string, format_attributes
from .models import Block, BlockEvent, DataBlock, EventType, TextBlock

__all__ = [
    # Types
    "Block",
    "BlockEvent",
    "DataBlock",
    "EventType",
    "TextBlock",
    # Serialization
    "block_to_markup",
    "blocks_to_string",
    "format_attributes",
]
