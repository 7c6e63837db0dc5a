"""
Thread-safe value holder.

The current value, the total and the sample window share one lock, so a
rate computed here always sees a window that the sampler finished writing
and a value that no producer is halfway through changing.
"""

from __future__ import annotations

import threading
from typing import List, Tuple

from speedo.metrics import Mode, SpeedStat
from speedo.window import WINDOW_CAPACITY, HistoryWindow, compute_rate


class ValueStore:

    def __init__(self, sample_interval: float, value: int = 0, total: int = 0,
                 capacity: int = WINDOW_CAPACITY):
        if total < 0:
            raise ValueError(f"total must be non-negative, got {total}")
        self._lock = threading.Lock()
        self._value = value
        self._total = total
        self._window = HistoryWindow(capacity)
        self._sample_interval = sample_interval

    def add_value(self, delta: int):
        with self._lock:
            self._value += delta

    def set_value(self, n: int):
        with self._lock:
            self._value = n

    def set_total(self, n: int):
        if n < 0:
            raise ValueError(f"total must be non-negative, got {n}")
        with self._lock:
            self._total = n

    def snapshot(self) -> Tuple[int, int]:
        """(value, total), read together."""
        with self._lock:
            return self._value, self._total

    def sample(self):
        """Record the current value as the next window entry. One call per tick."""
        with self._lock:
            self._window.append(self._value)

    def history(self) -> List[int]:
        with self._lock:
            return self._window.samples()

    def stat(self, mode: Mode = Mode.ACCUMULATION) -> SpeedStat:
        with self._lock:
            value, total = self._value, self._total
            rate = compute_rate(self._window.samples(), self._sample_interval)
        return SpeedStat(value=value, total=total, rate=rate, mode=mode)
