"""
Core data types for speedo.

A speedometer tracks one number. How that number is read back (and what
the remote collector expects on the wire) depends on its mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class Mode(IntEnum):
    """What kind of quantity is being tracked. Sent as `type` on the wire."""

    ACCUMULATION = 0   # monotonic counter, e.g. items processed
    VARIATION = 1      # free-floating gauge, e.g. queue length
    PROGRESS = 2       # value against a known total

    @classmethod
    def parse(cls, text: str) -> "Mode":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown mode: {text!r}") from None


@dataclass(frozen=True)
class SpeedStat:
    """A point-in-time reading: current value, total and rate per minute."""

    value: int
    total: int
    rate: int
    mode: Mode = Mode.ACCUMULATION
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def percent(self) -> int:
        """Integer progress percentage. Zero when there is no total."""
        if self.total == 0:
            return 0
        return trunc_div(self.value * 100, self.total)

    def summary(self) -> dict:
        """Return a plain dict for display or JSON lines output."""
        data = {
            "timestamp": self.created_at.isoformat(),
            "mode": self.mode.name.lower(),
            "value": self.value,
            "rate_per_min": self.rate,
        }
        if self.mode == Mode.PROGRESS:
            data["total"] = self.total
            data["percent"] = self.percent
        return data


@dataclass(frozen=True)
class InstrumentInfo:
    """Static identity of a speedometer, pushed to the collector's /info."""

    sid: str
    name: str
    mode: Mode
    total: int
    report_interval: float


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q
