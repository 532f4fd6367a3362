# AI INSTRUCTION:
# Browser-side chat widget logic as a small state machine.
# - sign-in gate (identity provider is opaque: current_session/sign_in/sign_out)
# - optimistic display of the user's message
# - one request in flight at a time (SENDING disables send)
# - any failure becomes one fixed fallback message

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

GREETING = "I'm the Distillery AI. Ask me anything about our programs, resources, or how we can help your startup."
FALLBACK_MESSAGE = "Sorry, I encountered an error. Please try again."


class ChatState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    IDLE = "idle"
    SENDING = "sending"
    ERROR = "error"


TRANSITIONS: Dict[ChatState, frozenset] = {
    ChatState.UNAUTHENTICATED: frozenset({ChatState.IDLE}),
    ChatState.IDLE: frozenset({ChatState.IDLE, ChatState.SENDING, ChatState.UNAUTHENTICATED}),
    ChatState.SENDING: frozenset({ChatState.IDLE, ChatState.ERROR, ChatState.UNAUTHENTICATED}),
    ChatState.ERROR: frozenset({ChatState.IDLE}),
}


class InvalidTransition(Exception):
    pass


class AuthProvider(Protocol):
    def current_session(self) -> Optional[Any]: ...
    def sign_in(self) -> Any: ...
    def sign_out(self) -> None: ...


class ChatTransport(Protocol):
    def send(self, message: str, history: List[Dict[str, str]]) -> str: ...


@dataclass
class DisplayMessage:
    """A line in the widget transcript. role is "user" or "agent"."""
    role: str
    content: str


class ChatController:
    def __init__(self, auth: AuthProvider, transport: ChatTransport):
        self.auth = auth
        self.transport = transport
        self.messages: List[DisplayMessage] = [DisplayMessage(role="agent", content=GREETING)]
        self.session = auth.current_session()
        self.state = ChatState.IDLE if self.session else ChatState.UNAUTHENTICATED

    # -------------------------
    # State
    # -------------------------
    def _transition(self, target: ChatState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {target.value}")
        self.state = target

    @property
    def is_authenticated(self) -> bool:
        return self.state is not ChatState.UNAUTHENTICATED

    @property
    def can_send(self) -> bool:
        return self.state is ChatState.IDLE

    def history(self) -> List[Dict[str, str]]:
        """Wire history: the transcript without the local greeting."""
        return [
            {"role": "user" if m.role == "user" else "assistant", "content": m.content}
            for m in self.messages[1:]
        ]

    # -------------------------
    # Auth
    # -------------------------
    def sign_in(self) -> None:
        if self.state not in (ChatState.UNAUTHENTICATED, ChatState.IDLE):
            raise InvalidTransition(f"cannot sign in while {self.state.value}")
        session = self.auth.sign_in()
        if not session:
            return
        self.session = session
        self._transition(ChatState.IDLE)

    def sign_out(self) -> None:
        if self.state is ChatState.UNAUTHENTICATED:
            return
        self.auth.sign_out()
        self.session = None
        self._transition(ChatState.UNAUTHENTICATED)

    # -------------------------
    # Send / receive
    # -------------------------
    def send(self, text: str) -> bool:
        """Send one message. Returns False (and does nothing) when sending is disabled."""
        if not self.can_send or not text or not text.strip():
            return False

        history = self.history()
        self.messages.append(DisplayMessage(role="user", content=text))
        self._transition(ChatState.SENDING)

        try:
            reply = self.transport.send(text, history)
        except Exception:
            logger.warning("Chat error", exc_info=True)
            self._fail()
            return True

        self.messages.append(DisplayMessage(role="agent", content=reply))
        if self.state is ChatState.SENDING:
            self._transition(ChatState.IDLE)
        return True

    def _fail(self) -> None:
        if self.state is ChatState.SENDING:
            self._transition(ChatState.ERROR)
        self.messages.append(DisplayMessage(role="agent", content=FALLBACK_MESSAGE))
        if self.state is ChatState.ERROR:
            self._transition(ChatState.IDLE)
