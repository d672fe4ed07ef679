# src/llm_blocks/transcript/models.py

import uuid
from typing import Literal

from pydantic import BaseModel, Field

from llm_blocks.blocks.models import Block


class ChatMessage(BaseModel):
    """A chat message made of structured blocks."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: Literal["user", "assistant"]
    blocks: list[Block] = Field(default_factory=list)

    class Config:
        extra = "forbid"
