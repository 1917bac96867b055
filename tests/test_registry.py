import threading

from signaling.registry import Connection, ConnectionRegistry


class TestConnectionRegistry:

    def test_insert_then_lookup(self, registry):
        connection = registry.insert("A1", remote_addr="10.0.0.5")
        assert registry.lookup("A1") is connection
        assert connection.remote_addr == "10.0.0.5"
        assert "A1" in registry
        assert len(registry) == 1

    def test_lookup_unknown_sid(self, registry):
        assert registry.lookup("Z9") is None
        assert "Z9" not in registry

    def test_lookup_non_string_sid(self, registry):
        registry.insert("A1")
        assert registry.lookup(None) is None
        assert registry.lookup({"sid": "A1"}) is None

    def test_remove_makes_sid_unaddressable(self, registry):
        registry.insert("A1")
        removed = registry.remove("A1")
        assert isinstance(removed, Connection)
        assert registry.lookup("A1") is None
        assert len(registry) == 0

    def test_remove_unknown_is_noop(self, registry):
        registry.insert("A1")
        assert registry.remove("B1") is None
        assert registry.sids() == ["A1"]

    def test_reinsert_replaces_entry(self, registry):
        first = registry.insert("A1", remote_addr="1.1.1.1")
        second = registry.insert("A1", remote_addr="2.2.2.2")
        assert first is not second
        assert registry.lookup("A1") is second
        assert len(registry) == 1


def test_concurrent_lookup_sees_whole_entry_or_nothing():
    registry = ConnectionRegistry()
    sids = [f"sid-{i}" for i in range(200)]
    bad = []
    stop = threading.Event()

    def churn():
        for _ in range(20):
            for sid in sids:
                registry.insert(sid, remote_addr=sid)
            for sid in sids:
                registry.remove(sid)
        stop.set()

    def read():
        while not stop.is_set():
            for sid in sids:
                connection = registry.lookup(sid)
                if connection is not None and (connection.sid != sid or connection.remote_addr != sid):
                    bad.append(connection)

    writer = threading.Thread(target=churn)
    readers = [threading.Thread(target=read) for _ in range(4)]
    for thread in readers + [writer]:
        thread.start()
    for thread in readers + [writer]:
        thread.join()

    assert bad == []
    assert len(registry) == 0
