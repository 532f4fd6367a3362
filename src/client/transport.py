# AI INSTRUCTION:
# Define the HTTP transport the chat controller uses to reach POST /chat.
# One request per send; no retries. Timeout is left to the caller (None = library default).

from typing import Any, Dict, List, Optional

import requests


class ChatTransportError(Exception):
    """The gateway could not be reached or did not return a usable reply."""


class HttpChatTransport:
    def __init__(self, url: str = "http://localhost:8000/chat", session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, message: str, history: List[Dict[str, str]]) -> str:
        payload = {"message": message, "history": history}
        try:
            resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ChatTransportError(f"Chat request failed: {e}") from e

        if not resp.ok:
            raise ChatTransportError(f"Failed to get response (HTTP {resp.status_code})")

        try:
            data: Any = resp.json()
        except ValueError as e:
            raise ChatTransportError("Chat response was not JSON") from e

        reply = data.get("message") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ChatTransportError("Chat response has no message")
        return reply
