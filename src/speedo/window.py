"""
Sliding sample window and the rate estimate derived from it.

The rate is a straight line from the oldest retained sample to the newest,
scaled to one minute. With a full window that is a 60-tick average, so it
smooths jitter and lags real changes by up to the window depth.
"""

from __future__ import annotations

from collections import deque
from fractions import Fraction
from typing import Deque, Iterator, List, Sequence

from speedo.errors import ConfigurationError
from speedo.metrics import trunc_div

# 61 samples = 60 intervals
WINDOW_CAPACITY = 61


class HistoryWindow:
    """Bounded FIFO of past values, oldest first. Not thread-safe on its own."""

    def __init__(self, capacity: int = WINDOW_CAPACITY):
        if capacity < 2:
            raise ConfigurationError(f"window capacity must be at least 2, got {capacity}")
        self._samples: Deque[int] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    def append(self, value: int):
        # deque(maxlen=...) drops the oldest entry once full
        self._samples.append(value)

    def samples(self) -> List[int]:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[int]:
        return iter(self._samples)


def compute_rate(samples: Sequence[int], sample_interval: float) -> int:
    """Change per minute across the window, truncated toward zero.

    Fewer than two samples means there is nothing to measure yet, so 0.
    """
    # exact rational period, so 0.0015 stays 3/2000 rather than a rounded float
    period = Fraction(str(sample_interval))
    if period <= 0:
        raise ConfigurationError(f"sample interval must be positive, got {sample_interval!r}")

    count = len(samples)
    if count <= 1:
        return 0

    delta = samples[-1] - samples[0]
    return trunc_div(delta * 60 * period.denominator, (count - 1) * period.numerator)
