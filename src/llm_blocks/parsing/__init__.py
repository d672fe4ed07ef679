"""Incremental block parser.

Turns an arbitrarily fragmented stream of model output into text and data
blocks, with lifecycle events emitted while the stream is still arriving.

Example:
    >>> from llm_blocks.parsing import parse_text
    >>> parse_text('Hi <script description="x">return 1</script>')
    [TextBlock(id=..., content='Hi '), DataBlock(id=..., tag='script', ...)]
"""

from .attributes import parse_attributes
from .buffer import ChunkBuffer
from .machine import BlockStateMachine, ParserMode
from .stream import iter_blocks, parse_blocks, parse_text
from .tags import (
    CloseTagMatch,
    OpenTagMatch,
    ScanMode,
    find_partial_prefix,
    match_close_tag,
    match_open_tag,
)

__all__ = [
    # Drivers
    "parse_blocks",
    "iter_blocks",
    "parse_text",
    # State machine
    "BlockStateMachine",
    "ParserMode",
    # Scanning
    "ChunkBuffer",
    "CloseTagMatch",
    "OpenTagMatch",
    "ScanMode",
    "find_partial_prefix",
    "match_close_tag",
    "match_open_tag",
    "parse_attributes",
]
