import logging

import socketio

from .registry import ConnectionRegistry
from .relay import SignalingRelay

logger = logging.getLogger("signaling")


class SignalingNamespace(socketio.Namespace):
    """
    Socket.IO event handlers for call signaling.

    Event names are part of the client contract: callUser / answerCall in,
    incomingCall / callAnswered out.
    """

    def __init__(self, namespace: str, registry: ConnectionRegistry, relay: SignalingRelay):
        super().__init__(namespace)
        self.registry = registry
        self.relay = relay

    def on_connect(self, sid, environ, auth=None):
        self.registry.insert(sid, remote_addr=environ.get("REMOTE_ADDR"))
        logger.info(f"Client connected: {sid}")

    def on_disconnect(self, sid, reason=None):
        self.registry.remove(sid)
        logger.info(f"Client disconnected: {sid}")

    def on_callUser(self, sid, data):
        if not isinstance(data, dict):
            logger.debug(f"[CALL_USER] ignoring non-object payload from {sid}")
            return
        self.relay.invite(data.get("to"), data.get("signalData"), data.get("from"))

    def on_answerCall(self, sid, data):
        if not isinstance(data, dict):
            logger.debug(f"[ANSWER_CALL] ignoring non-object payload from {sid}")
            return
        self.relay.answer(data.get("to"), data.get("signal"))
