# src/llm_blocks/parsing/tags.py

"""Side-effect-free tag scanning over a text buffer.

Grammar:
    open tag   = "<" name ( whitespace key '="' value '"' )* ">"
    close tag  = "</" name ">" [ "\\n" ]
    name       = [a-zA-Z][a-zA-Z0-9-]*
    key        = [\\w-]+
    value      = any characters except '"'

A buffer may end in the middle of a tag. Such a tail is a *partial prefix*:
it must be withheld until more input decides whether it is markup or text.
"""

import re
from dataclasses import dataclass
from enum import Enum

TAG_NAME = r"[a-zA-Z][a-zA-Z0-9-]*"
_ATTRIBUTE = r'\s+[\w-]+="[^"]*"'

OPEN_TAG_RE = re.compile(rf"<({TAG_NAME})((?:{_ATTRIBUTE})*)>")

# Everything an opening tag can look like before its closing ">" arrives.
PARTIAL_OPEN_TAG_RE = re.compile(
    rf'<(?:{TAG_NAME}(?:{_ATTRIBUTE})*(?:\s+(?:[\w-]+(?:="[^"]*|=)?)?)?)?'
)


class ScanMode(str, Enum):
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class OpenTagMatch:
    text_before: str
    tag_name: str
    attributes_raw: str
    matched_length: int


@dataclass(frozen=True)
class CloseTagMatch:
    data_before: str
    matched_length: int


def close_tag_literal(tag_name: str) -> str:
    return f"</{tag_name}>"


def _scan_open(buffer: str) -> tuple[int, re.Match[str] | None] | None:
    """Find the first "<" that is a complete tag or may still become one.

    Returns ``(index, match)`` for a complete tag, ``(index, None)`` for a
    partial prefix, and ``None`` when the buffer holds no tag candidate.
    """
    index = buffer.find("<")
    while index != -1:
        match = OPEN_TAG_RE.match(buffer, index)
        if match:
            return index, match
        if PARTIAL_OPEN_TAG_RE.fullmatch(buffer, index):
            return index, None
        index = buffer.find("<", index + 1)
    return None


def match_open_tag(buffer: str) -> OpenTagMatch | None:
    """Match the first complete opening tag in ``buffer``.

    Returns None if there is none, or if an earlier "<" could still grow
    into a tag; in that case nothing after it can be classified yet.
    """
    found = _scan_open(buffer)
    if found is None or found[1] is None:
        return None

    index, match = found
    return OpenTagMatch(
        text_before=buffer[:index],
        tag_name=match.group(1),
        attributes_raw=match.group(2),
        matched_length=match.end(),
    )


def match_close_tag(
    buffer: str, tag_name: str, final: bool = False
) -> CloseTagMatch | None:
    """Match ``</tag_name>`` plus one optional trailing newline.

    Unless ``final`` is set, a close tag at the very end of the buffer is
    not matched yet: the next fragment may start with the newline that
    belongs to it.
    """
    literal = close_tag_literal(tag_name)
    index = buffer.find(literal)
    if index == -1:
        return None

    end = index + len(literal)
    if end == len(buffer) and not final:
        return None
    if buffer.startswith("\n", end):
        end += 1

    return CloseTagMatch(data_before=buffer[:index], matched_length=end)


def find_partial_prefix(
    buffer: str, mode: ScanMode, tag_name: str | None = None
) -> int | None:
    """Index from which ``buffer`` must be withheld, or None if all is safe.

    Everything before the returned index can be flushed as content now.
    """
    if mode == ScanMode.OPEN:
        found = _scan_open(buffer)
        if found is None:
            return None
        return found[0]

    if tag_name is None:
        raise ValueError("tag_name is required in close mode")

    literal = close_tag_literal(tag_name)
    for length in range(min(len(literal), len(buffer)), 0, -1):
        if buffer.endswith(literal[:length]):
            return len(buffer) - length
    return None
