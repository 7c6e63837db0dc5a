"""Terminal views of a running speedometer: a Rich panel, JSON lines, or plain logs."""

from __future__ import annotations

import json
import logging
import sys
import time
from collections import deque
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from speedo import __version__
from speedo.metrics import Mode, SpeedStat
from speedo.mock.producer import SimulatedProducer
from speedo.speedometer import Speedometer

log = logging.getLogger(__name__)

# How many readings to keep for trend comparison
HISTORY_SIZE = 30


def _trend_arrow(current: int, previous: int) -> str:
    """Green ^ when the rate is climbing, red v when it is falling."""
    if current == previous:
        return "[dim]-[/dim]"
    if current > previous:
        return "[green]^[/green]"
    return "[red]v[/red]"


def _progress_bar(percent: int, width: int = 30) -> str:
    filled = max(0, min(width, percent * width // 100))
    return "[green]" + "#" * filled + "[/green]" + "[dim]" + "." * (width - filled) + "[/dim]"


def build_display(meter: Speedometer, stat: SpeedStat, history: deque) -> Panel:
    prev = history[-2] if len(history) > 1 else None

    header = Text(f"  speedo v{__version__}  |  {meter.name or meter.sid}", style="bold white on blue")
    header.append(f"\n  {stat.created_at.strftime('%Y-%m-%d %H:%M:%S')}  ", style="dim")
    header.append(f"  MODE: {meter.mode.name}", style="bold")

    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")
    table.add_column("", width=2)

    rate_trend = _trend_arrow(stat.rate, prev.rate) if prev else ""
    table.add_row("Value", f"{stat.value:,}", "")
    if meter.mode == Mode.VARIATION:
        rate_color = "green" if stat.rate >= 0 else "red"
        table.add_row("Change/min", f"[{rate_color}]{stat.rate:+,}[/{rate_color}]", rate_trend)
    else:
        table.add_row("Speed/min", f"[bold]{stat.rate:,}[/bold]", rate_trend)
    if meter.mode == Mode.PROGRESS:
        table.add_row("Total", f"{stat.total:,}", "")
        table.add_row("Progress", f"{_progress_bar(stat.percent)} {stat.percent}%", "")
    table.add_row("Window", f"{len(meter.history())} samples", "")

    footer = Text(meter.status_string(), style="dim")
    return Panel(Group(header, table, footer), border_style="blue")


def run_dashboard(
    meter: Speedometer,
    producer: SimulatedProducer,
    refresh_interval: float = 1.0,
    duration: Optional[float] = None,
):
    console = Console()
    history: deque[SpeedStat] = deque(maxlen=HISTORY_SIZE)
    deadline = time.monotonic() + duration if duration else None

    log.info("Starting dashboard: meter=%s, refresh=%.1fs", meter.sid, refresh_interval)
    with Live(console=console, refresh_per_second=4) as live:
        try:
            while not _finished(producer, deadline):
                producer.step()
                stat = meter.get_stat()
                history.append(stat)
                live.update(build_display(meter, stat, history))
                time.sleep(refresh_interval)
        except KeyboardInterrupt:
            pass

    console.print(f"\n[dim]Dashboard stopped. {meter.status_string()}[/dim]")


def run_jsonl(
    meter: Speedometer,
    producer: SimulatedProducer,
    refresh_interval: float = 1.0,
    duration: Optional[float] = None,
):
    """Non-interactive output: one JSON object per reading per line.

    Meant for CI pipelines and log aggregators where a Rich TUI
    isn't available.
    """
    deadline = time.monotonic() + duration if duration else None
    log.info("Starting JSONL output: meter=%s, refresh=%.1fs", meter.sid, refresh_interval)

    try:
        while not _finished(producer, deadline):
            producer.step()
            record = meter.get_stat().summary()
            record["sid"] = meter.sid
            if meter.name:
                record["name"] = meter.name
            sys.stdout.write(json.dumps(record) + "\n")
            sys.stdout.flush()
            time.sleep(refresh_interval)
    except KeyboardInterrupt:
        pass


def run_quiet(
    meter: Speedometer,
    producer: SimulatedProducer,
    refresh_interval: float = 1.0,
    duration: Optional[float] = None,
):
    """Just drive the producer; the meter's own status printer does the talking."""
    deadline = time.monotonic() + duration if duration else None
    try:
        while not _finished(producer, deadline):
            producer.step()
            time.sleep(refresh_interval)
    except KeyboardInterrupt:
        pass


def _finished(producer: SimulatedProducer, deadline: Optional[float]) -> bool:
    if producer.done:
        return True
    return deadline is not None and time.monotonic() >= deadline
