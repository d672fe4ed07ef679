# src/llm_blocks/parsing/attributes.py

import re

ATTRIBUTE_RE = re.compile(r'([\w-]+)="([^"]*)"')


def parse_attributes(raw: str) -> dict[str, str]:
    """Parse ``key="value"`` pairs from the attribute part of an opening tag.

    Pairs are read left to right and keep first-seen order. Fragments that
    are not a complete pair are skipped.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_RE.finditer(raw):
        attributes[match.group(1)] = match.group(2)
    return attributes
