"""Persistence backend interface definitions.

Defines the PersistenceBackend abstract class used by the store to read and
write the serialized snapshot. Backends deal in raw bytes only; turning the
mapping into bytes is the serializer's job.
"""
from __future__ import annotations
from abc import ABC, abstractmethod


class PersistenceBackend(ABC):
    """Abstract single-target persistence backend.

    A backend addresses exactly one snapshot. Implementations must not hold
    any resource open between calls.
    """

    @abstractmethod
    def read(self) -> bytes:
        """Return the stored snapshot bytes.

        Should raise `SnapshotNotFound` if nothing has been written yet and
        `PersistenceError` for any other failure.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Replace the stored snapshot with `data`.

        This is a plain overwrite; no atomicity is promised.
        """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if a snapshot is present."""

    def describe(self) -> str:
        """Human readable name of the target, used in log messages."""
        return type(self).__name__
