import time
from typing import Callable

from memstore_lib.storage.base import PersistenceBackend
from memstore_lib.storage.memory_backend import MemoryBackend


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0, interval: float = 0.01) -> bool:
    """Poll `predicate` until it returns True or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class FailingBackend(PersistenceBackend):
    """Backend double whose writes raise OSError while `fail_writes` is set."""

    def __init__(self, fail_writes: bool = True):
        self.inner = MemoryBackend()
        self.fail_writes = fail_writes
        self.attempts = 0

    def read(self) -> bytes:
        return self.inner.read()

    def write(self, data: bytes) -> None:
        self.attempts += 1
        if self.fail_writes:
            raise OSError("disk full")
        self.inner.write(data)

    def exists(self) -> bool:
        return self.inner.exists()
