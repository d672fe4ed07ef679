# src/llm_blocks/transcript/transcript.py

import dataclasses
import logging
import uuid
from typing import Any, Literal

from llm_blocks.blocks.markup import blocks_to_string
from llm_blocks.blocks.models import Block, BlockEvent, DataBlock, EventType, TextBlock
from llm_blocks.llms.base import Message, Role

from .models import ChatMessage

logger = logging.getLogger(__name__)


class Transcript:
    """Ordered chat messages whose blocks are kept current from block events.

    Events carry full snapshots, so applying one only needs the block id.
    """

    def __init__(self, messages: list[ChatMessage] | None = None) -> None:
        self._messages: list[ChatMessage] = []
        for message in messages or []:
            self._append(message)

    @property
    def messages(self) -> list[ChatMessage]:
        # shallow copy, the list itself is owned by the transcript
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def add_message(
        self,
        role: Literal["user", "assistant"],
        blocks: list[Block] | None = None,
        message_id: str | None = None,
    ) -> ChatMessage:
        fields: dict[str, Any] = {"role": role, "blocks": list(blocks or [])}
        if message_id is not None:
            fields["id"] = message_id
        message = ChatMessage(**fields)
        self._append(message)
        logger.debug("Added %s message %s", role, message.id)
        return message

    def add_user_text(self, text: str, block_id: str | None = None) -> ChatMessage:
        """Append a user message holding a single text block."""
        block = TextBlock(id=block_id or str(uuid.uuid4()), content=text)
        return self.add_message("user", [block])

    def get(self, message_id: str) -> ChatMessage:
        for message in self._messages:
            if message.id == message_id:
                return message
        logger.error("Message not found: %s", message_id)
        raise KeyError(f"Message '{message_id}' not found")

    def remove_message(self, message_id: str) -> ChatMessage:
        message = self.get(message_id)
        self._messages.remove(message)
        logger.debug("Removed message %s", message_id)
        return message

    def apply_event(self, message_id: str, event: BlockEvent) -> None:
        """Apply a parser event to the blocks of a message.

        ``create`` appends the block; ``update`` and ``complete`` replace
        the block with the same id.
        """
        message = self.get(message_id)

        if event.type == EventType.CREATE:
            if self._index_of(message, event.block.id) is not None:
                raise ValueError(f"Block '{event.block.id}' already exists")
            message.blocks.append(event.block)
            return

        index = self._index_of(message, event.block.id)
        if index is None:
            logger.error(
                "Block not found for %s: %s in message %s",
                event.type.value,
                event.block.id,
                message_id,
            )
            raise KeyError(
                f"Block '{event.block.id}' not found in message '{message_id}'"
            )
        message.blocks[index] = event.block

    def set_block_result(
        self,
        message_id: str,
        block_id: str,
        *,
        result: Any = None,
        error: str | None = None,
    ) -> DataBlock:
        """Record the outcome a consumer produced for a data block."""
        message = self.get(message_id)
        index = self._index_of(message, block_id)
        if index is None:
            logger.error("Block not found: %s in message %s", block_id, message_id)
            raise KeyError(f"Block '{block_id}' not found in message '{message_id}'")

        block = message.blocks[index]
        if not isinstance(block, DataBlock):
            raise ValueError(f"Block '{block_id}' is not a data block")

        updated = dataclasses.replace(block, result=result, error=error)
        message.blocks[index] = updated
        return updated

    def to_llm_messages(self, exclude: set[str] | None = None) -> list[Message]:
        """Serialize the transcript into provider-agnostic messages.

        Messages without blocks are skipped, as are ids in ``exclude``.
        """
        exclude = exclude or set()
        return [
            Message(role=Role(m.role), content=blocks_to_string(m.blocks))
            for m in self._messages
            if m.id not in exclude and m.blocks
        ]

    def _append(self, message: ChatMessage) -> None:
        if any(m.id == message.id for m in self._messages):
            raise ValueError(f"Message '{message.id}' already exists")
        self._messages.append(message)

    @staticmethod
    def _index_of(message: ChatMessage, block_id: str) -> int | None:
        for index, block in enumerate(message.blocks):
            if block.id == block_id:
                return index
        return None
