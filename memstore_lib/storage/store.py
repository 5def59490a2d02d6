"""Concurrency-safe in-memory key-value store with periodic snapshots.

`Store` keeps every entry in a plain dict guarded by a single reader/writer
lock. The whole mapping is written to a persistence backend by `flush`,
optionally on a timer (see `FlushScheduler`), and once more by `close`.
On construction the last snapshot, if any, is loaded back.

Typical use:

    with Store('data/cache.json', flush_period=5) as store:
        store.set('name', 'Alice')
        value, found = store.get('name')
"""
from __future__ import annotations
import logging
import math
import os
import threading
from datetime import timedelta
from typing import Dict, Generic, Optional, Tuple, TypeVar, Union

from .base import PersistenceBackend
from .scheduler import FlushScheduler
from .serializer import JSONSerializer, Serializer
from .single_file_backend import SingleFileBackend
from .rwlock import RWLock
from memstore_lib.errors import PersistenceError, SerializationError, SnapshotNotFound, StoreError

logger = logging.getLogger(__name__)

V = TypeVar("V")

Target = Union[str, "os.PathLike[str]", PersistenceBackend]
Period = Union[int, float, timedelta]


def _period_seconds(period: Period) -> float:
    if isinstance(period, timedelta):
        seconds = period.total_seconds()
    elif isinstance(period, bool) or not isinstance(period, (int, float)):
        raise TypeError(f"flush period must be seconds or a timedelta, got {type(period).__name__}")
    else:
        seconds = float(period)
    if math.isnan(seconds):
        raise ValueError("flush period must be a number, got NaN")
    if seconds < 0:
        raise ValueError("flush period must not be negative")
    # Event.wait rejects longer timeouts with OverflowError.
    if seconds > threading.TIMEOUT_MAX:
        raise ValueError(f"flush period must not exceed {threading.TIMEOUT_MAX} seconds")
    return seconds


class Store(Generic[V]):
    """In-memory mapping of string keys to values of type `V`.

    Parameters
    - target: file path of the snapshot, or a `PersistenceBackend`.
    - flush_period: seconds (or timedelta) between background flushes.
      Zero disables the background thread; only `flush`/`close` persist.
    - serializer: encoding of the snapshot, JSON when omitted.
    - ignore_load_errors: when True an unreadable or undecodable snapshot is
      logged and the store starts empty; the error is kept on `load_error`.
      The next flush then overwrites the bad snapshot.

    set/get/delete/all never touch the backend. flush and close raise
    `PersistenceError` or `SerializationError`.
    """

    def __init__(
        self,
        target: Target,
        flush_period: Period = 0,
        serializer: Optional[Serializer] = None,
        *,
        ignore_load_errors: bool = False,
    ) -> None:
        self._flush_period = _period_seconds(flush_period)
        if isinstance(target, PersistenceBackend):
            self._backend = target
        else:
            self._backend = SingleFileBackend(target)
        self._serializer: Serializer = serializer or JSONSerializer()
        self._lock = RWLock()
        # Serializes writers of the persistence target, not of the mapping.
        self._io_lock = threading.Lock()
        self._data: Dict[str, V] = {}
        self._closed = False
        self.load_error: Optional[StoreError] = None

        try:
            self._data = self._load()
        except StoreError as e:
            if not ignore_load_errors:
                raise
            logger.exception("Failed to load snapshot from %s; starting empty", self._backend.describe())
            self.load_error = e

        self._scheduler: Optional[FlushScheduler] = None
        if self._flush_period > 0:
            self._scheduler = FlushScheduler(self.flush, self._flush_period)
            self._scheduler.start()

    @property
    def target(self) -> PersistenceBackend:
        return self._backend

    @property
    def flush_period(self) -> float:
        return self._flush_period

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, key: str, value: V) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        with self._lock.write_locked():
            self._data[key] = value

    def get(self, key: str) -> Tuple[Optional[V], bool]:
        """Return `(value, True)`, or `(None, False)` when the key is absent."""
        with self._lock.read_locked():
            if key in self._data:
                return self._data[key], True
            return None, False

    def delete(self, key: str) -> None:
        with self._lock.write_locked():
            self._data.pop(key, None)

    def all(self) -> Dict[str, V]:
        """Return a shallow copy of every entry.

        The copy is independent of the store in both directions; values
        themselves are shared, not cloned.
        """
        with self._lock.read_locked():
            return dict(self._data)

    def flush(self) -> None:
        """Write a consistent snapshot of the mapping, replacing the previous one."""
        with self._lock.read_locked():
            try:
                payload = self._serializer.dump(self._data)
            except Exception as e:
                raise SerializationError(f"cannot encode snapshot: {e}") from e
            with self._io_lock:
                try:
                    self._backend.write(payload)
                except OSError as e:
                    raise PersistenceError(f"cannot write snapshot to {self._backend.describe()}: {e}") from e
            size = len(self._data)
        logger.debug("Flushed %d entries to %s (%d bytes)", size, self._backend.describe(), len(payload))

    def close(self) -> None:
        """Stop background flushing and write one final snapshot.

        Calling close again is allowed; it flushes again.
        """
        if self._scheduler is not None:
            self._scheduler.stop()
        self._closed = True
        self.flush()

    def _load(self) -> Dict[str, V]:
        try:
            raw = self._backend.read()
        except SnapshotNotFound:
            logger.debug("No snapshot at %s; starting empty", self._backend.describe())
            return {}
        except OSError as e:
            raise PersistenceError(f"cannot read snapshot from {self._backend.describe()}: {e}") from e

        try:
            data = self._serializer.load(raw)
        except Exception as e:
            raise SerializationError(f"cannot decode snapshot from {self._backend.describe()}: {e}") from e
        if not isinstance(data, dict):
            raise SerializationError(f"snapshot is not a mapping (got {type(data).__name__})")
        if not all(isinstance(k, str) for k in data):
            raise SerializationError("snapshot contains non-string keys")
        logger.debug("Loaded %d entries from %s", len(data), self._backend.describe())
        return dict(data)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._data

    def __enter__(self) -> "Store[V]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Store(target={self._backend.describe()!r}, flush_period={self._flush_period}, closed={self._closed})"
