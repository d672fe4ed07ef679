from .models import ChatMessage
from .transcript import Transcript

__all__ = [
    "ChatMessage",
    "Transcript",
]
