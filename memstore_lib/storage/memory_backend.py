"""Simple memory-backed persistence backend

Keeps the last written snapshot as bytes in memory. Useful for tests and for
stores that only need snapshot semantics within one process.
"""
from threading import RLock
from typing import Optional

from .base import PersistenceBackend
from memstore_lib.errors import SnapshotNotFound


class MemoryBackend(PersistenceBackend):
    def __init__(self, initial: Optional[bytes] = None):
        self._lock = RLock()
        self._data: Optional[bytes] = bytes(initial) if initial is not None else None
        self.writes = 0

    def read(self) -> bytes:
        with self._lock:
            if self._data is None:
                raise SnapshotNotFound("memory")
            return self._data

    def write(self, data: bytes) -> None:
        with self._lock:
            self._data = bytes(data)
            self.writes += 1

    def exists(self) -> bool:
        with self._lock:
            return self._data is not None

    def clear(self) -> None:
        with self._lock:
            self._data = None

    def describe(self) -> str:
        return "memory"
