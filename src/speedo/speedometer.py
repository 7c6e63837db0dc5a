"""
The speedometer itself: a value store plus the background tasks that
sample it, print it and push it to a collection server.

    meter = new_speedometer(Config(name="ingest", log=True))
    for item in items:
        handle(item)
        meter.add_value(1)
    meter.stop()

All tasks share one stop event. `stop()` sets it once and waits for the
tasks to leave their loops, so nothing samples, prints or posts after it
returns.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

from speedo.errors import ConfigurationError
from speedo.metrics import InstrumentInfo, Mode, SpeedStat
from speedo.reporter.http_reporter import HTTPReporter
from speedo.reporter.protocol import PROTOCOLS
from speedo.scheduler import PeriodicTask
from speedo.status import format_status, status_label
from speedo.store import ValueStore

log = logging.getLogger(__name__)
status_log = logging.getLogger("speedo.status")

DEFAULT_SAMPLE_INTERVAL = 1.0
DEFAULT_PRINT_INTERVAL = 5.0
DEFAULT_REPORT_INTERVAL = 60.0

# /info goes out at start, then once per this many stat pushes
INFO_INTERVAL_FACTOR = 10

IDLE, RUNNING, STOPPED = "idle", "running", "stopped"


@dataclass
class Config:
    name: str = ""
    log: bool = False
    server: str = ""                 # empty disables all reporting
    protocol: str = "path"           # "path" (/stat/<sid>) or "body" (/stat)
    report_interval_sec: Optional[float] = None
    post_interval_sec: Optional[float] = None   # older name for report_interval_sec
    print_interval_sec: Optional[float] = None
    sample_interval_sec: Optional[float] = None
    timeout_sec: float = 5.0


def _interval(value: Optional[float], default: float, field_name: str) -> float:
    # 0 means "not set" for the print and report periods
    if value is None or value == 0:
        return default
    if value < 0:
        raise ConfigurationError(f"{field_name} must be positive, got {value}")
    return float(value)


def _sample_interval(value: Optional[float]) -> float:
    if value is None:
        return DEFAULT_SAMPLE_INTERVAL
    if value <= 0:
        raise ConfigurationError(f"sample_interval_sec must be positive, got {value}")
    return float(value)


class Speedometer:

    def __init__(self, config: Optional[Config] = None, mode: Mode = Mode.ACCUMULATION,
                 total: int = 0):
        config = config or Config()
        mode = Mode(mode)
        if mode == Mode.PROGRESS and total <= 0:
            raise ConfigurationError(f"progress speedometer needs a positive total, got {total}")
        if total < 0:
            raise ConfigurationError(f"total must be non-negative, got {total}")
        if config.protocol not in PROTOCOLS:
            raise ConfigurationError(
                f"unknown report protocol {config.protocol!r}, expected one of {sorted(PROTOCOLS)}"
            )

        self._sid = str(uuid.uuid4())
        self._name = config.name
        self._mode = mode
        self._config = config

        self.sample_interval = _sample_interval(config.sample_interval_sec)
        self.print_interval = _interval(
            config.print_interval_sec, DEFAULT_PRINT_INTERVAL, "print_interval_sec"
        )
        self.report_interval = _interval(
            config.report_interval_sec or config.post_interval_sec,
            DEFAULT_REPORT_INTERVAL,
            "report_interval_sec",
        )

        self._store = ValueStore(self.sample_interval, total=total)
        self._stop_event = threading.Event()
        self._lifecycle_lock = threading.Lock()
        self._state = IDLE
        self._tasks: List[PeriodicTask] = []
        self._reporter: Optional[HTTPReporter] = None

    # -- identity --

    @property
    def sid(self) -> str:
        return self._sid

    @property
    def name(self) -> str:
        return self._name

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def running(self) -> bool:
        return self._state == RUNNING

    @property
    def stopped(self) -> bool:
        return self._state == STOPPED

    @property
    def tasks(self) -> List[PeriodicTask]:
        return list(self._tasks)

    def info(self) -> InstrumentInfo:
        _, total = self._store.snapshot()
        return InstrumentInfo(
            sid=self._sid,
            name=self._name,
            mode=self._mode,
            total=total,
            report_interval=self.report_interval,
        )

    # -- producers --

    def add_value(self, delta: int):
        self._store.add_value(delta)

    def add_count(self, n: int = 1):
        self._store.add_value(n)

    def set_value(self, n: int):
        self._store.set_value(n)

    def set_total(self, n: int):
        self._store.set_total(n)

    # -- readers --

    def snapshot(self) -> Tuple[int, int]:
        return self._store.snapshot()

    def history(self) -> List[int]:
        return self._store.history()

    def get_stat(self) -> SpeedStat:
        return self._store.stat(self._mode)

    def status_string(self) -> str:
        label = status_label(self._name, self._sid)
        return format_status(self._mode, label, self.get_stat())

    # -- lifecycle --

    def start(self) -> "Speedometer":
        with self._lifecycle_lock:
            if self._state != IDLE:
                raise RuntimeError(f"speedometer {self._sid} is already {self._state}")

            tasks = [PeriodicTask(
                "speedo-sampler", self.sample_interval, self._store.sample, self._stop_event,
            )]

            if self._config.server:
                self._reporter = HTTPReporter(
                    self._config.server,
                    protocol=self._config.protocol,
                    timeout_seconds=self._config.timeout_sec,
                )
                tasks.append(PeriodicTask(
                    "speedo-info", self.report_interval * INFO_INTERVAL_FACTOR,
                    self._push_info, self._stop_event, run_first=True,
                ))
                tasks.append(PeriodicTask(
                    "speedo-stat", self.report_interval, self._push_stat, self._stop_event,
                ))

            if self._config.log:
                tasks.append(PeriodicTask(
                    "speedo-printer", self.print_interval, self._print_status, self._stop_event,
                ))

            started = []
            try:
                for task in tasks:
                    task.start()
                    started.append(task)
            except Exception:
                self._abort_start(started)
                raise

            self._tasks = tasks
            self._state = RUNNING

        log.info(
            "Started speedometer %s: mode=%s, sample=%.3fs, tasks=%s",
            self._name or self._sid, self._mode.name.lower(), self.sample_interval,
            [t.name for t in self._tasks],
        )
        if self._reporter is not None:
            log.info("Reporting every %.1fs via %s", self.report_interval, self._reporter.name())
        return self

    def _abort_start(self, started: List[PeriodicTask]):
        # Stays IDLE with a fresh stop event, so start() can be retried
        self._stop_event.set()
        for task in started:
            task.join()
        if self._reporter is not None:
            self._reporter.close()
            self._reporter = None
        self._stop_event = threading.Event()

    def stop(self):
        with self._lifecycle_lock:
            if self._state != RUNNING:
                log.warning("stop() on speedometer %s ignored: state is %s", self._sid, self._state)
                return
            self._state = STOPPED
            self._stop_event.set()

        # joined outside the lock; a task may call stop() from its own tick
        for task in self._tasks:
            task.join()
        if self._reporter is not None:
            self._reporter.close()
        log.info("Stopped speedometer %s", self._name or self._sid)

    def __enter__(self) -> "Speedometer":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    # -- periodic task bodies --

    def _print_status(self):
        status_log.info(self.status_string())

    def _push_stat(self):
        # snapshot under the store lock first, network I/O after it is released
        stat = self.get_stat()
        self._reporter.push_stat(self.info(), stat)

    def _push_info(self):
        self._reporter.push_info(self.info())


def new_speedometer(config: Optional[Config] = None) -> Speedometer:
    """Counter that only goes up. Reports items per minute."""
    return Speedometer(config, Mode.ACCUMULATION).start()


def new_variation_speedometer(config: Optional[Config] = None) -> Speedometer:
    """Gauge that moves both ways. Reports a signed change per minute."""
    return Speedometer(config, Mode.VARIATION).start()


def new_progress_speedometer(total: int, config: Optional[Config] = None) -> Speedometer:
    """Progress toward `total`. Reports a percentage and items per minute."""
    return Speedometer(config, Mode.PROGRESS, total=total).start()
