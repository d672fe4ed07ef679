# src/llm_blocks/llms/__init__.py

"""Streaming LLM client layer for llm-blocks.

Supplies the ordered async sequence of text fragments the block parser
consumes.

Design principles:
- Stateless: Every call receives full message list
- Transport only: Retries only on network/rate-limit errors
- No leakage: Provider objects never escape the adapter

Example:
    >>> from llm_blocks.llms import create_llm_client, LLMConfig, Message, Role
    >>>
    >>> config = LLMConfig(provider="anthropic", model="claude-haiku-4-5-20251001")
    >>> client = create_llm_client(config)
    >>>
    >>> async for text in client.stream(
    ...     messages=[Message(role=Role.USER, content="Hello!")]
    ... ):
    ...     print(text, end="")
"""

from .base import LLMStreamClient, Message, Role
from .config import LLMConfig
from .factory import create_llm_client

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMStreamClient",
    # Config
    "LLMConfig",
    # Types
    "Message",
    "Role",
]
