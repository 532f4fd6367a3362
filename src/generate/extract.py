# AI INSTRUCTION:
# Fold provider content blocks into one user-facing string.
#  - text is concatenated in the order received
#  - citations are deduplicated by url (first title wins, first-seen order)
#  - a "Sources:" section is appended only when citations exist
#  - searches_used is read from usage["server_tool_use"]["web_search_requests"]

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .types import CitationSource, CitedTextBlock, ContentBlock, TextBlock

SOURCES_HEADER = "Sources:"
BULLET = "•"


def merge_text(blocks: Iterable[ContentBlock]) -> str:
    parts: List[str] = []
    for block in blocks:
        if isinstance(block, (TextBlock, CitedTextBlock)):
            parts.append(block.text)
        else:
            raise TypeError(f"Unsupported content block: {type(block).__name__}")
    return "".join(parts)


def collect_citations(blocks: Iterable[ContentBlock]) -> List[CitationSource]:
    citations: List[CitationSource] = []
    for block in blocks:
        if isinstance(block, CitedTextBlock):
            citations.extend(block.citations)
    return citations


def dedupe_sources(citations: Iterable[CitationSource]) -> List[CitationSource]:
    """Keep the first source seen for each url, in order of first appearance."""
    seen: Dict[str, CitationSource] = {}
    for c in citations:
        if c.url not in seen:
            seen[c.url] = c
    return list(seen.values())


def format_sources(sources: List[CitationSource]) -> str:
    if not sources:
        return ""
    lines = [f"{BULLET} {s.title}: {s.url}" for s in sources]
    return "\n\n" + SOURCES_HEADER + "\n" + "\n".join(lines)


def extract_response(blocks: List[ContentBlock]) -> Tuple[str, List[CitationSource]]:
    """Return (final_text, deduplicated_sources)."""
    blocks = list(blocks)
    text = merge_text(blocks)
    sources = dedupe_sources(collect_citations(blocks))
    return text + format_sources(sources), sources


def searches_used(usage: Optional[Dict[str, Any]]) -> int:
    """Web searches the provider reports for this request; 0 when not reported."""
    if not isinstance(usage, dict):
        return 0
    server_tool_use = usage.get("server_tool_use")
    if not isinstance(server_tool_use, dict):
        return 0
    count = server_tool_use.get("web_search_requests")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        return 0
    return count
