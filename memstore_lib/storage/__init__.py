"""In-memory key-value store with periodic single-file snapshots."""
from typing import Any, Optional

from .base import PersistenceBackend
from .interfaces import StoreProtocol
from .memory_backend import MemoryBackend
from .serializer import (
    EncryptedSerializer,
    JSONSerializer,
    PickleSerializer,
    Serializer,
    YAMLSerializer,
    get_serializer,
)
from .single_file_backend import SingleFileBackend
from .store import Store
from memstore_lib.config.config import StoreConfig
from memstore_lib.logging_config import configure_logging


def create_store(config: Optional[StoreConfig] = None, **overrides: Any) -> Store:
    """Compose backend, serializer and `Store` from a `StoreConfig`.

    Keyword arguments override fields of `config` (or of a default config),
    e.g. ``create_store(path='data/x.yml', serializer='yaml', flush_period=2)``.
    When `log_level` is set, logging is configured with it first.
    """
    if config is None:
        config = StoreConfig(**overrides)
    elif overrides:
        config = StoreConfig(**{**config.__dict__, **overrides})

    if config.log_level:
        configure_logging(level=config.log_level)

    options: dict[str, Any] = {}
    if config.serializer == "encrypted":
        options = {"key": config.key, "password": config.password}
    serializer = get_serializer(config.serializer, **options)

    backend: PersistenceBackend
    if config.backend == "memory":
        backend = MemoryBackend()
    else:
        backend = SingleFileBackend(config.path)

    return Store(
        backend,
        flush_period=config.flush_period,
        serializer=serializer,
        ignore_load_errors=config.ignore_load_errors,
    )


__all__ = [
    "Store",
    "StoreProtocol",
    "PersistenceBackend",
    "SingleFileBackend",
    "MemoryBackend",
    "Serializer",
    "JSONSerializer",
    "YAMLSerializer",
    "PickleSerializer",
    "EncryptedSerializer",
    "get_serializer",
    "create_store",
]
