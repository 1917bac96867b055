from typing import Optional

import socketio
from django.conf import settings

from .namespace import SignalingNamespace
from .registry import ConnectionRegistry
from .relay import SignalingRelay, SocketIOTransport

# Registry backing the process's Socket.IO server
connection_registry = ConnectionRegistry()


def create_server(registry: Optional[ConnectionRegistry] = None) -> socketio.Server:
    """Build the Socket.IO server with the signaling handlers on the default namespace."""
    if registry is None:
        registry = connection_registry

    sio = socketio.Server(
        async_mode=settings.SOCKETIO_ASYNC_MODE,
        cors_allowed_origins=settings.SOCKETIO_CORS_ORIGINS,
        logger=False,
        engineio_logger=False,
    )
    relay = SignalingRelay(registry, SocketIOTransport(sio))
    sio.register_namespace(SignalingNamespace("/", registry, relay))
    return sio
