from .registry import Connection, ConnectionRegistry
from .relay import SignalingRelay, SocketIOTransport, Transport

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "SignalingRelay",
    "SocketIOTransport",
    "Transport",
]
