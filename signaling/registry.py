"""
Registry of live Socket.IO connections, keyed by the transport-assigned sid.
"""
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

logger = logging.getLogger("signaling")


@dataclass(frozen=True)
class Connection:
    """One live transport session"""
    sid: str
    remote_addr: Optional[str] = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConnectionRegistry:
    """
    Thread-safe map of sid -> Connection.

    Entries are immutable and every operation runs under one lock, so a lookup
    that races a remove sees either the whole entry or None.
    """

    def __init__(self):
        self._connections: Dict[str, Connection] = {}
        self._lock = threading.Lock()

    def insert(self, sid: str, remote_addr: Optional[str] = None) -> Connection:
        connection = Connection(sid=sid, remote_addr=remote_addr)
        with self._lock:
            replaced = sid in self._connections
            self._connections[sid] = connection
        if replaced:
            logger.warning(f"[REGISTRY] sid {sid} was already live, entry replaced")
        return connection

    def remove(self, sid: str) -> Optional[Connection]:
        with self._lock:
            return self._connections.pop(sid, None)

    def lookup(self, sid) -> Optional[Connection]:
        if not isinstance(sid, str):
            return None
        with self._lock:
            return self._connections.get(sid)

    def sids(self) -> List[str]:
        with self._lock:
            return list(self._connections)

    def __contains__(self, sid) -> bool:
        return self.lookup(sid) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)
