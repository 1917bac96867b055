"""
Call signaling relay.

Forwards call invites and answers to the addressed connection, unchanged.
Delivery is fire-and-forget: a target that is not live drops the message and
the sender is never told.
"""
import logging
from typing import Any, Dict, Optional, Protocol

from .registry import ConnectionRegistry

logger = logging.getLogger("signaling")

INCOMING_CALL = "incomingCall"
CALL_ANSWERED = "callAnswered"


class Transport(Protocol):
    def send(self, sid: str, event: str, data: Dict[str, Any]) -> None:
        ...


class SocketIOTransport:
    """Delivers events through a python-socketio server"""

    def __init__(self, sio):
        self.sio = sio

    def send(self, sid: str, event: str, data: Dict[str, Any]) -> None:
        self.sio.emit(event, data, to=sid)


class SignalingRelay:

    def __init__(self, registry: ConnectionRegistry, transport: Transport):
        self.registry = registry
        self.transport = transport

    def invite(self, target_id: Optional[str], signal_data: Any, originator_id: Any) -> bool:
        """Forward a call offer to target_id as incomingCall."""
        return self._forward(target_id, INCOMING_CALL, {
            "from": originator_id,
            "signalData": signal_data,
        })

    def answer(self, target_id: Optional[str], signal: Any) -> bool:
        """Forward a call answer to target_id as callAnswered."""
        return self._forward(target_id, CALL_ANSWERED, {"signal": signal})

    def _forward(self, target_id, event: str, data: Dict[str, Any]) -> bool:
        connection = self.registry.lookup(target_id)
        if connection is None:
            logger.debug(f"[RELAY] {event} dropped, target {target_id} not connected")
            return False

        self.transport.send(connection.sid, event, data)
        logger.debug(f"[RELAY] {event} -> {connection.sid}")
        return True
