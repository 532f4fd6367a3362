# Chat widget client: state machine + HTTP transport to the gateway.

from .controller import ChatController, ChatState, DisplayMessage, InvalidTransition, GREETING, FALLBACK_MESSAGE
from .transport import HttpChatTransport, ChatTransportError

__all__ = [
    "ChatController",
    "ChatState",
    "DisplayMessage",
    "InvalidTransition",
    "GREETING",
    "FALLBACK_MESSAGE",
    "HttpChatTransport",
    "ChatTransportError",
]
