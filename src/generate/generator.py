# AI INSTRUCTION:
# Provide a ChatGenerator class that:
# - accepts any model client (Anthropic, Echo)
# - loads the system prompt + generation settings once from config.yaml
# - builds the message list from history + the new user message
# - declares the capped web search tool
# - merges the provider output and returns ChatResponse

from __future__ import annotations
import yaml
import os
from typing import Any, Dict, List, Optional
from .types import Message, ChatResponse, ModelParams
from .prompts import DEFAULT_SYSTEM_PROMPT, build_messages
from .extract import extract_response, searches_used
from .clients.anthropic_client import WEB_SEARCH_MAX_USES, web_search_tool

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


class ChatGenerator:
    def __init__(self, model_client, config_path: Optional[str] = None):
        self.model_client = model_client
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.cfg = self._load_config()
        self.system_prompt = self._compose_system_message()
        self.tools = self._compose_tools()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _compose_system_message(self) -> str:
        base_prompt = self.cfg.get("system_prompt") or DEFAULT_SYSTEM_PROMPT
        return base_prompt.strip()

    def _compose_tools(self) -> List[Dict[str, Any]]:
        ws_cfg = self.cfg.get("web_search") or {}
        if ws_cfg.get("enabled", True) is False:
            return []
        return [
            web_search_tool(
                max_uses=ws_cfg.get("max_uses", WEB_SEARCH_MAX_USES),
                user_location=ws_cfg.get("user_location"),
            )
        ]

    def chat(
        self,
        user_message: str,
        history: List[Message],
    ) -> ChatResponse:
        """Main entry point for generation."""
        messages = build_messages(user_message, history)
        params = ModelParams(max_tokens=self.cfg.get("max_tokens", 500))

        blocks, usage = self.model_client.generate(
            messages,
            params,
            system=self.system_prompt,
            tools=self.tools,
        )
        text, sources = extract_response(blocks)
        return ChatResponse(text=text, usage=usage, searches_used=searches_used(usage), sources=sources)
