from .agent import Agent
from .prompts import SYSTEM_PROMPT

__all__ = [
    "Agent",
    "SYSTEM_PROMPT",
]
