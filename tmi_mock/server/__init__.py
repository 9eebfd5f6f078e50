"""WebSocket server, per-client connection loop and shutdown handling."""

from .app import MockChatServer
from .connection import ClientConnection
from .signal_handler import SignalHandler
from .transport import WebSocketTransport, split_lines

__all__ = [
    "ClientConnection",
    "MockChatServer",
    "SignalHandler",
    "WebSocketTransport",
    "split_lines",
]
