# src/llm_blocks/blocks/markup.py

"""Serialize blocks back into the tag markup the parser reads.

Used to replay a transcript to the model: data blocks are written as
``<tag key="value">`` / ``</tag>`` pairs, followed by the consumer-supplied
result or error so the model can see what happened.
"""

import json

from .models import Block, DataBlock

RESULT_TAG = "result"
ERROR_TAG = "error"


def format_attributes(attributes: dict[str, str]) -> str:
    """Render a mapping as `` key="value"`` pairs, in insertion order.

    Values containing a double quote cannot be represented in the tag
    grammar, so the quote is replaced with ``&quot;``.
    """
    return "".join(
        f' {key}="{value.replace(chr(34), "&quot;")}"'
        for key, value in attributes.items()
    )


def block_to_markup(block: Block) -> str:
    if not isinstance(block, DataBlock):
        return block.content

    parts = [
        f"<{block.tag}{format_attributes(block.attributes)}>\n"
        f"{block.content}\n"
        f"</{block.tag}>"
    ]
    if block.error is not None:
        parts.append(f"<{ERROR_TAG}>\n{block.error}\n</{ERROR_TAG}>")
    elif block.result is not None:
        payload = json.dumps(block.result, ensure_ascii=False, default=str)
        parts.append(f"<{RESULT_TAG}>\n{payload}\n</{RESULT_TAG}>")
    return "\n".join(parts)


def blocks_to_string(blocks: list[Block]) -> str:
    """Serialize a block list into a single message body."""
    return "\n".join(block_to_markup(block) for block in blocks)
