"""Persistence backend that maps the snapshot to one specific file.

The file is opened, written or read, and closed within each call. Writes
truncate and overwrite the file in place: there is no temporary file and no
rename, so a crash during a write can leave a truncated snapshot behind.
"""
from __future__ import annotations
import os
from pathlib import Path
import logging

from .base import PersistenceBackend
from memstore_lib.errors import PersistenceError, SnapshotNotFound

logger = logging.getLogger(__name__)


class SingleFileBackend(PersistenceBackend):
    """Backend that targets a single on-disk file.

    Parameters
    - file_path: path to the file used for all reads/writes.
      If the file does not exist, `read` raises `SnapshotNotFound`.
    """

    def __init__(self, file_path: str | os.PathLike) -> None:
        self.file_path = Path(file_path)

    def write(self, data: bytes) -> None:
        path = self.file_path
        try:
            # Ensure parent directory exists so writes succeed.
            if not path.parent.exists():
                os.makedirs(path.parent, exist_ok=True)
            with open(path, "wb") as f:
                f.write(bytes(data))
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise PersistenceError(f"cannot write snapshot to {path}: {e}") from e
        logger.debug("SingleFileBackend wrote %s (%d bytes)", path, len(data))

    def read(self) -> bytes:
        path = self.file_path
        try:
            with open(path, "rb") as f:
                data = f.read()
        except FileNotFoundError:
            raise SnapshotNotFound(str(path)) from None
        except OSError as e:
            raise PersistenceError(f"cannot read snapshot from {path}: {e}") from e
        logger.debug("SingleFileBackend loaded %s (%d bytes)", path, len(data))
        return data

    def exists(self) -> bool:
        return self.file_path.is_file()

    def describe(self) -> str:
        return str(self.file_path)
