# AI INSTRUCTION:
# Define a client for the Anthropic Messages API with the server-side web search tool.
# It follows the same interface as EchoDevClient: generate(...) -> (blocks, usage).
# One atomic call per request, no retries; every failure surfaces as GenerationError.

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import anthropic

from ..types import CitationSource, CitedTextBlock, ContentBlock, GenerationError, Message, ModelParams, TextBlock

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL_TYPE = "web_search_20250305"
WEB_SEARCH_MAX_USES = 3
DEFAULT_USER_LOCATION = {
    "city": "Peoria",
    "region": "Illinois",
    "country": "US",
    "timezone": "America/Chicago",
}


def web_search_tool(max_uses: int = WEB_SEARCH_MAX_USES, user_location: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Tool declaration for provider-side web search, capped per request.

    The location is only a hint for localising results.
    """
    location = dict(DEFAULT_USER_LOCATION if user_location is None else user_location)
    return {
        "type": WEB_SEARCH_TOOL_TYPE,
        "name": "web_search",
        "max_uses": int(max_uses),
        "user_location": {"type": "approximate", **location},
    }


def _to_citation(raw: Any) -> Optional[CitationSource]:
    url = getattr(raw, "url", None)
    if not url:
        return None
    return CitationSource(title=getattr(raw, "title", None) or url, url=url)


def _to_blocks(content: Any) -> List[ContentBlock]:
    if not isinstance(content, list):
        raise GenerationError("Malformed provider response: content is not a list")
    blocks: List[ContentBlock] = []
    for raw in content:
        # server_tool_use / web_search_tool_result blocks carry no user-facing text
        if getattr(raw, "type", None) != "text":
            continue
        text = getattr(raw, "text", None)
        if not isinstance(text, str):
            raise GenerationError("Malformed provider response: text block without text")
        raw_citations = getattr(raw, "citations", None) or []
        citations = [c for c in (_to_citation(r) for r in raw_citations) if c is not None]
        if citations:
            blocks.append(CitedTextBlock(text=text, citations=citations))
        else:
            blocks.append(TextBlock(text=text))
    return blocks


def _usage_dict(usage: Any) -> Dict[str, Any]:
    if isinstance(usage, dict):
        return dict(usage)
    dump = getattr(usage, "model_dump", None)
    if dump is None:
        raise GenerationError("Malformed provider response: missing usage")
    return dump(mode="json", exclude_none=True)


class AnthropicClient:
    def __init__(self, model: str = "claude-haiku-4-5-20251001", api_key: Optional[str] = None, client: Any = None):
        self.model = model
        self.client = client or anthropic.Anthropic(
            api_key=api_key or os.getenv("ANTHROPIC_API_KEY"),
            max_retries=0,
        )

    def generate(
        self,
        messages: List[Message],
        params: ModelParams,
        system: str = "",
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> Tuple[List[ContentBlock], Dict[str, Any]]:
        formatted = [{"role": m.role, "content": m.content} for m in messages]
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": params.max_tokens,
            "messages": formatted,
        }
        if system:
            kwargs["system"] = system
        if tools:
            kwargs["tools"] = tools

        try:
            resp = self.client.messages.create(**kwargs)
        except anthropic.AnthropicError as e:
            raise GenerationError(str(e)) from e

        blocks = _to_blocks(getattr(resp, "content", None))
        usage = _usage_dict(getattr(resp, "usage", None))
        logger.info(
            "model=%s stop_reason=%s input_tokens=%s output_tokens=%s",
            getattr(resp, "model", self.model),
            getattr(resp, "stop_reason", None),
            usage.get("input_tokens"),
            usage.get("output_tokens"),
        )
        return blocks, usage
