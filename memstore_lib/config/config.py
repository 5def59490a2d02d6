"""Store configuration.

`StoreConfig` gathers everything `create_store` needs. It can be built in
code or read from a small YAML file:

    path: data/cache.json
    flush_period: 5
    serializer: json
    log_level: INFO
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional
import logging

import yaml

logger = logging.getLogger(__name__)

BACKENDS = ("file", "memory")


@dataclass
class StoreConfig:
    path: str = "data/store.json"
    flush_period: float = 0.0
    serializer: str = "json"
    backend: str = "file"
    # Only used by the encrypted serializer.
    password: Optional[str] = None
    key: Optional[bytes] = None
    ignore_load_errors: bool = False
    # None leaves the logging setup of the embedding application alone.
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.flush_period, bool) or not isinstance(self.flush_period, (int, float)):
            raise ValueError(f"flush_period must be a number of seconds, got {self.flush_period!r}")
        if self.flush_period < 0:
            raise ValueError("flush_period must not be negative")
        if self.backend not in BACKENDS:
            raise ValueError(f"unknown backend: {self.backend!r}")
        if isinstance(self.key, str):
            self.key = self.key.encode("ascii")


def load_config(path: str | Path) -> StoreConfig:
    """Read a `StoreConfig` from a YAML mapping.

    Missing keys take their defaults; unknown keys raise `ValueError`.
    """
    cfg_path = Path(path)
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError("invalid config format: parse error") from e
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")

    known = {f.name for f in fields(StoreConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(map(str, unknown))}")
    logger.debug("Loaded store config from %s", cfg_path)
    return StoreConfig(**data)
