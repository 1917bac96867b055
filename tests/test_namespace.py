import pytest
import socketio

from signaling.namespace import SignalingNamespace
from signaling.relay import CALL_ANSWERED, INCOMING_CALL
from signaling.server import create_server


@pytest.fixture
def namespace(registry, relay):
    return SignalingNamespace("/", registry, relay)


def test_connect_registers_sid(namespace, registry):
    namespace.on_connect("A1", {"REMOTE_ADDR": "192.168.0.2"})

    assert registry.lookup("A1").remote_addr == "192.168.0.2"


def test_disconnect_unregisters_sid(namespace, registry):
    namespace.on_connect("A1", {})
    namespace.on_disconnect("A1", "client disconnect")

    assert "A1" not in registry


def test_call_and_answer_round_trip(namespace, transport):
    namespace.on_connect("A1", {})
    namespace.on_connect("B1", {})

    namespace.on_callUser("A1", {"to": "B1", "signalData": {"sdp": "x"}, "from": "A1"})
    namespace.on_answerCall("B1", {"to": "A1", "signal": {"sdp": "y"}})

    assert transport.sent == [
        ("B1", INCOMING_CALL, {"from": "A1", "signalData": {"sdp": "x"}}),
        ("A1", CALL_ANSWERED, {"signal": {"sdp": "y"}}),
    ]


def test_call_to_unknown_sid_delivers_nothing(namespace, transport):
    namespace.on_connect("A1", {})

    result = namespace.on_callUser("A1", {"to": "Z9", "signalData": {"sdp": "x"}, "from": "A1"})

    assert result is None
    assert transport.sent == []


def test_call_after_target_disconnects(namespace, transport):
    namespace.on_connect("A1", {})
    namespace.on_connect("B1", {})
    namespace.on_disconnect("B1")

    namespace.on_callUser("A1", {"to": "B1", "signalData": "offer", "from": "A1"})

    assert transport.sent == []


@pytest.mark.parametrize("data", [None, "B1", ["B1"], 42])
def test_non_object_payloads_are_ignored(namespace, transport, data):
    namespace.on_connect("B1", {})

    namespace.on_callUser("A1", data)
    namespace.on_answerCall("A1", data)

    assert transport.sent == []


def test_create_server_registers_signaling_namespace(registry):
    sio = create_server(registry)

    assert isinstance(sio, socketio.Server)
    handler = sio.namespace_handlers["/"]
    assert isinstance(handler, SignalingNamespace)
    assert handler.registry is registry
    assert handler.relay.transport.sio is sio
