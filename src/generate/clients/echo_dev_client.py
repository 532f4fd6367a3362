# AI INSTRUCTION:
# Provide a dummy model client for local dev and testing without API calls.

from typing import Any, Dict, List, Optional, Tuple
from ..types import ContentBlock, Message, ModelParams, TextBlock

class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def generate(
        self,
        messages: List[Message],
        params: ModelParams,
        system: str = "",
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> Tuple[List[ContentBlock], Dict[str, Any]]:
        user_inputs = [m.content for m in messages if m.role == "user"]
        text = f"[ECHO RESPONSE]\n{user_inputs[-1] if user_inputs else '(no user input)'}"
        usage = {"engine": "echo", "model": self.model, "max_tokens": params.max_tokens, "input_tokens": 0, "output_tokens": 0}
        return [TextBlock(text=text)], usage
