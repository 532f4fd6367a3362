# AI INSTRUCTION:
# Define simple, typed dataclasses shared across generator modules.
# Provider content is modelled as tagged variants (TextBlock | CitedTextBlock).

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Union


@dataclass
class Message:
    """Single chat turn: user or assistant."""
    role: str
    content: str


@dataclass
class ModelParams:
    """LLM parameters per request."""
    max_tokens: int = 500


@dataclass(frozen=True)
class CitationSource:
    """A cited web page. Two sources are the same source when their url matches."""
    title: str
    url: str


@dataclass
class TextBlock:
    text: str


@dataclass
class CitedTextBlock:
    text: str
    citations: List[CitationSource] = field(default_factory=list)


ContentBlock = Union[TextBlock, CitedTextBlock]


@dataclass
class ChatResponse:
    """Final response from the generator."""
    text: str
    usage: Dict[str, Any]
    searches_used: int = 0
    sources: List[CitationSource] = field(default_factory=list)


class GenerationError(Exception):
    """Raised when the generation provider fails or returns an unusable payload."""
