"""Tests for the two push layouts."""

from datetime import datetime, timezone

import pytest

from speedo.metrics import InstrumentInfo, Mode, SpeedStat
from speedo.reporter.protocol import BodyIdProtocol, PathIdProtocol, get_protocol

SID = "0f8fad5b-d9cb-469f-a165-70867728950e"


def _info(mode: Mode = Mode.ACCUMULATION, **overrides) -> InstrumentInfo:
    defaults = dict(sid=SID, name="ingest", mode=mode, total=0, report_interval=60.0)
    defaults.update(overrides)
    return InstrumentInfo(**defaults)


def _stat(**overrides) -> SpeedStat:
    defaults = dict(
        value=12, total=0, rate=30,
        created_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    defaults.update(overrides)
    return SpeedStat(**defaults)


def test_path_protocol_counter_stat():
    path, body = PathIdProtocol().stat_request(_info(), _stat())
    assert path == f"/stat/{SID}"
    assert body == {"count": 12, "speed": 30}


def test_path_protocol_gauge_stat_uses_value_key():
    path, body = PathIdProtocol().stat_request(_info(Mode.VARIATION), _stat(value=-3, rate=-60))
    assert body == {"value": -3, "speed": -60}


def test_path_protocol_info():
    path, body = PathIdProtocol().info_request(_info(Mode.PROGRESS, total=50))
    assert path == f"/info/{SID}"
    assert body == {"name": "ingest", "type": 2}


def test_body_protocol_stat():
    path, body = BodyIdProtocol().stat_request(_info(), _stat())
    assert path == "/stat"
    assert body == {
        "sid": SID,
        "name": "ingest",
        "Value": 12,
        "created_at": "2026-01-02T03:04:05+00:00",
    }


def test_body_protocol_info():
    path, body = BodyIdProtocol().info_request(_info(Mode.PROGRESS, total=50, report_interval=5.0))
    assert path == "/info"
    assert body == {
        "sid": SID,
        "name": "ingest",
        "type": 2,
        "post_interval_sec": 5,
        "total": 50,
    }


def test_get_protocol_by_name():
    assert isinstance(get_protocol("path"), PathIdProtocol)
    assert isinstance(get_protocol("body"), BodyIdProtocol)
    with pytest.raises(ValueError):
        get_protocol("grpc")
