"""
Wire formats for pushing to a collection server.

Two layouts exist in the wild. Older servers take the meter id in the URL
path (`/stat/<sid>`), newer ones take it in the JSON body (`/stat`). A
protocol only builds (path, body) pairs; sending is the reporter's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from speedo.metrics import InstrumentInfo, Mode, SpeedStat

Request = Tuple[str, dict]


class ReportProtocol(ABC):
    """Interface for all push layouts."""

    name: str = ""

    @abstractmethod
    def stat_request(self, info: InstrumentInfo, stat: SpeedStat) -> Request:
        """Path and JSON body for one stat push."""
        ...

    @abstractmethod
    def info_request(self, info: InstrumentInfo) -> Request:
        """Path and JSON body for an identity push."""
        ...


class PathIdProtocol(ReportProtocol):
    """`POST /stat/<sid>` and `POST /info/<sid>`."""

    name = "path"

    def stat_request(self, info: InstrumentInfo, stat: SpeedStat) -> Request:
        # counters report "count", gauges and progress report "value"
        key = "count" if info.mode == Mode.ACCUMULATION else "value"
        return f"/stat/{info.sid}", {key: stat.value, "speed": stat.rate}

    def info_request(self, info: InstrumentInfo) -> Request:
        return f"/info/{info.sid}", {"name": info.name, "type": int(info.mode)}


class BodyIdProtocol(ReportProtocol):
    """`POST /stat` and `POST /info` with the sid inside the body."""

    name = "body"

    def stat_request(self, info: InstrumentInfo, stat: SpeedStat) -> Request:
        return "/stat", {
            "sid": info.sid,
            "name": info.name,
            "Value": stat.value,
            "created_at": stat.created_at.isoformat(),
        }

    def info_request(self, info: InstrumentInfo) -> Request:
        return "/info", {
            "sid": info.sid,
            "name": info.name,
            "type": int(info.mode),
            "post_interval_sec": int(info.report_interval),
            "total": info.total,
        }


PROTOCOLS = {p.name: p for p in (PathIdProtocol, BodyIdProtocol)}


def get_protocol(name: str) -> ReportProtocol:
    try:
        return PROTOCOLS[name]()
    except KeyError:
        raise ValueError(
            f"unknown report protocol {name!r}, expected one of {sorted(PROTOCOLS)}"
        ) from None
