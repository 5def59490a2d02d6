"""Exception types raised by the store and its collaborators."""
from __future__ import annotations


class StoreError(Exception):
    """Base class for errors surfaced by `Store.flush`, `Store.close` and loading."""


class PersistenceError(StoreError):
    """The persistence target could not be created, opened, read or written."""


class SerializationError(StoreError):
    """The mapping could not be encoded, or stored bytes could not be decoded."""


class SnapshotNotFound(KeyError):
    """Raised by backends when no snapshot exists yet.

    This is a `KeyError` so callers following the usual "missing key"
    convention can catch it without importing this module.
    """
