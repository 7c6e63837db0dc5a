"""Periodic background tasks that all stop on one shared event."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)


class PeriodicTask:
    """Calls `fn` every `interval` seconds on a daemon thread until `stop_event` is set.

    With `run_first=True` the first call happens immediately instead of
    after one interval. A call that raises is logged and the schedule goes
    on; the next tick is the retry.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        fn: Callable[[], None],
        stop_event: threading.Event,
        run_first: bool = False,
    ):
        self.name = name
        self.interval = interval
        self._fn = fn
        self._stop = stop_event
        self._run_first = run_first
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    def start(self):
        if self._thread is not None:
            raise RuntimeError(f"task {self.name} already started")
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self):
        log.debug("Task %s started: interval=%.3fs", self.name, self.interval)
        if self._run_first and not self._stop.is_set():
            self._tick()
        # Event.wait returns True as soon as the stop event is set
        while not self._stop.wait(self.interval):
            self._tick()
        log.debug("Task %s stopped after %d ticks", self.name, self.ticks)

    def _tick(self):
        self.ticks += 1
        try:
            self._fn()
        except Exception:
            log.exception("Task %s failed on tick %d", self.name, self.ticks)

    def join(self, timeout: Optional[float] = None):
        if self._thread is None or self._thread is threading.current_thread():
            return
        self._thread.join(timeout)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
