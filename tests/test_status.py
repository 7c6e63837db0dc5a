"""Tests for status line formatting."""

import pytest

from speedo.metrics import Mode, SpeedStat
from speedo.status import LABEL_WIDTH, format_status, status_label


def _stat(**overrides) -> SpeedStat:
    defaults = dict(value=0, total=0, rate=0)
    defaults.update(overrides)
    return SpeedStat(**defaults)


def test_accumulation_line():
    line = format_status(Mode.ACCUMULATION, "ingest", _stat(value=340, rate=120))
    assert line == "ingest Speed: 120/min Total: 340"


def test_variation_line_shows_signed_rate():
    down = format_status(Mode.VARIATION, "queue", _stat(value=40, rate=-3600))
    up = format_status(Mode.VARIATION, "queue", _stat(value=40, rate=60))
    assert down == "queue Value: 40 Speed: -3600/min"
    assert up == "queue Value: 40 Speed: +60/min"


def test_progress_half_way():
    line = format_status(Mode.PROGRESS, "job", _stat(value=25, total=50, rate=10))
    assert "50%" in line
    assert "25/50" in line


def test_progress_percent_truncates():
    stat = _stat(value=2, total=3)
    assert stat.percent == 66
    assert "66%" in format_status(Mode.PROGRESS, "job", stat)


def test_progress_with_zero_total_is_zero_percent():
    line = format_status(Mode.PROGRESS, "job", _stat(value=7, total=0))
    assert "0%" in line
    assert "7/0" in line


def test_label_prefers_name():
    assert status_label("resize", "0f8fad5b-d9cb-469f-a165-70867728950e") == "resize"


def test_label_falls_back_to_padded_id():
    label = status_label("", "abc")
    assert label.startswith("abc")
    assert len(label) == LABEL_WIDTH


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        format_status(7, "x", _stat())
