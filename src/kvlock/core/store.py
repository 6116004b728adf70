"""Store client interface and an in-memory implementation.

A lock only ever talks to the store through four atomic primitives. Anything
that implements them (a Redis connection, a test double) can back a lock.
A store may also define ``close()``; managers call it when present.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol


class StoreClient(Protocol):
    def try_insert(self, key: str, value: str) -> bool:
        """Set ``key`` to ``value`` only if it has no value; True if it was set."""
        ...

    def read(self, key: str) -> Optional[str]:
        ...

    def swap(self, key: str, value: str) -> Optional[str]:
        """Atomically replace the value of ``key`` and return the previous one."""
        ...

    def delete(self, key: str) -> int:
        ...


class InMemoryStore:
    """Process-local store with explicit atomicity, mostly useful in tests."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def try_insert(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def swap(self, key: str, value: str) -> Optional[str]:
        with self._lock:
            previous = self._data.get(key)
            self._data[key] = value
            return previous

    def delete(self, key: str) -> int:
        with self._lock:
            if key in self._data:
                del self._data[key]
                return 1
            return 0

    def close(self) -> None:
        """Nothing to release; kept for interface parity with network stores."""
