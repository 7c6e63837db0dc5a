"""One-line status text for each speedometer mode."""

from __future__ import annotations

from speedo.metrics import Mode, SpeedStat

# Wide enough for a uuid4 string, so unnamed meters line up in a log
LABEL_WIDTH = 36


def status_label(name: str, sid: str) -> str:
    if name:
        return name
    return sid.ljust(LABEL_WIDTH)


def format_status(mode: Mode, label: str, stat: SpeedStat) -> str:
    if mode == Mode.ACCUMULATION:
        return f"{label} Speed: {stat.rate}/min Total: {stat.value}"
    if mode == Mode.VARIATION:
        return f"{label} Value: {stat.value} Speed: {stat.rate:+d}/min"
    if mode == Mode.PROGRESS:
        return (
            f"{label} Progress: {stat.percent}% ({stat.value}/{stat.total}) "
            f"Speed: {stat.rate}/min"
        )
    raise ValueError(f"unknown mode: {mode!r}")
