"""
Connection registry for live observers.

Holds the set of open real-time connections. Accessed concurrently from
the event loop (connect/disconnect, broadcast ticks) and from threadpool
workers, so it is guarded by a reader/writer lock:
- for_each() / count() take the shared read lock
- add() / remove() take the exclusive write lock

for_each() copies the entries under the read lock and invokes the callback
after releasing it, so a callback may remove the entry it was handed.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

ConnT = TypeVar("ConnT")


class ReadWriteLock:
    """
    Many readers or one writer.

    Writers are preferred: once a writer is waiting, new readers block
    until it has finished, so a steady stream of broadcasts cannot starve
    connects and disconnects.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ConnectionRegistry(Generic[ConnT]):
    """
    Concurrency-safe set of observer connections.

    Entries are keyed by identity, so connection objects need not be hashable.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._connections: Dict[int, ConnT] = {}

    def add(self, conn: ConnT) -> bool:
        """Register a connection. Returns False if it was already present."""
        with self._lock.write():
            if id(conn) in self._connections:
                return False
            self._connections[id(conn)] = conn
            return True

    def remove(self, conn: ConnT) -> bool:
        """
        Unregister a connection.

        Idempotent: removing an absent connection is a no-op.

        Returns:
            True if this call removed it, False if it was already gone
        """
        with self._lock.write():
            if id(conn) not in self._connections:
                return False
            del self._connections[id(conn)]
            return True

    def snapshot(self) -> List[ConnT]:
        """Copy of the current connections."""
        with self._lock.read():
            return list(self._connections.values())

    def for_each(self, fn: Callable[[ConnT], None]) -> None:
        """Call fn for every connection registered when the call started."""
        for conn in self.snapshot():
            fn(conn)

    def count(self) -> int:
        with self._lock.read():
            return len(self._connections)

    def __contains__(self, conn: object) -> bool:
        with self._lock.read():
            return id(conn) in self._connections


# Global registry instance
_connection_registry: Optional[ConnectionRegistry] = None


def get_connection_registry() -> ConnectionRegistry:
    """
    Get or create the global connection registry.

    Returns:
        ConnectionRegistry instance
    """
    global _connection_registry
    if _connection_registry is None:
        _connection_registry = ConnectionRegistry()
    return _connection_registry


def reset_connection_registry() -> None:
    """Drop the global registry. Called on application shutdown."""
    global _connection_registry
    _connection_registry = None
