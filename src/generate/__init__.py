# Generator package

# Makes generate/ importable and exposes key interfaces.

from .generator import ChatGenerator
from .types import (
    Message,
    ChatResponse,
    ModelParams,
    CitationSource,
    TextBlock,
    CitedTextBlock,
    GenerationError,
)
from .clients.echo_dev_client import EchoDevClient

__all__ = [
    "ChatGenerator",
    "Message",
    "ChatResponse",
    "ModelParams",
    "CitationSource",
    "TextBlock",
    "CitedTextBlock",
    "GenerationError",
    "EchoDevClient",
]
