# Blocks
from .blocks import (
    Block,
    BlockEvent,
    DataBlock,
    EventType,
    TextBlock,
    block_to_markup,
    blocks_to_string,
)

# Parsing
from .parsing import BlockStateMachine, iter_blocks, parse_blocks, parse_text

# LLMs
from .llms import LLMConfig, LLMStreamClient, Message, Role, create_llm_client

# Transcript
from .transcript import ChatMessage, Transcript

# Agent
from .agent import SYSTEM_PROMPT, Agent

# Observability
from .observability import MetricsHook, NoOpMetricsHook

__all__ = [
    # Blocks
    "Block",
    "BlockEvent",
    "DataBlock",
    "EventType",
    "TextBlock",
    "block_to_markup",
    "blocks_to_string",
    # Parsing
    "BlockStateMachine",
    "iter_blocks",
    "parse_blocks",
    "parse_text",
    # LLMs
    "LLMConfig",
    "LLMStreamClient",
    "Message",
    "Role",
    "create_llm_client",
    # Transcript
    "ChatMessage",
    "Transcript",
    # Agent
    "Agent",
    "SYSTEM_PROMPT",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
]
