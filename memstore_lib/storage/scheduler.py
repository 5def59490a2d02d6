"""Background thread that flushes a store at a fixed period."""
from __future__ import annotations
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FlushScheduler:
    """Calls `flush` every `period` seconds until `stop` is called.

    The loop waits on a one-shot stop event, so stopping takes effect
    immediately regardless of where the timer is. Errors raised by `flush`
    are logged and swallowed; a failed tick never ends the loop.

    The thread is a daemon: a store that is never closed does not keep the
    interpreter alive, but its pending changes are then lost.
    """

    def __init__(self, flush: Callable[[], None], period: float, name: str = "memstore-flush") -> None:
        if not 0 < period <= threading.TIMEOUT_MAX:
            raise ValueError(f"flush period must be greater than zero and at most {threading.TIMEOUT_MAX} seconds")
        self._flush = flush
        self.period = period
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._name = name
        self.ticks = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("scheduler already started")
        if self._stop.is_set():
            raise RuntimeError("scheduler was stopped and cannot be restarted")
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("Flush scheduler started (period %.3fs)", self.period)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Set the stop signal and wait for the loop to exit.

        Safe to call more than once and from the scheduler thread itself
        (in which case it does not wait).
        """
        already = self._stop.is_set()
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        if not already:
            logger.info("Flush scheduler stopped after %d ticks (%d failed)", self.ticks, self.failures)

    def _run(self) -> None:
        # Event.wait returns True once stop is set; pending ticks are dropped.
        while not self._stop.wait(self.period):
            self.ticks += 1
            try:
                self._flush()
            except Exception:
                self.failures += 1
                logger.exception("Periodic flush failed")
