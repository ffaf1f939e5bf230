import pytest

from ftv.analysis.formatter import (
    EM_SPACE,
    ENGINE_PLACEHOLDER,
    SPEED_PLACEHOLDER,
    current_point,
    format_engine_speed,
    format_position,
    format_speed,
    progress,
    readout,
)
from ftv.analysis.types import PlaybackState

from conftest import make_sample, make_track

EM = EM_SPACE


def test_em_space_is_u2003():
    assert EM == "\u2003"


@pytest.mark.parametrize(
    "speed,expected",
    [
        (5.0, EM * 2 + "5.0"),
        (12.34, EM + "12.3"),
        (0.0, EM * 2 + "0.0"),
        (123.4, "123.4"),
    ],
)
def test_format_speed(speed, expected):
    assert format_speed(speed) == expected


def test_speed_placeholder_has_fixed_width():
    assert format_speed(None) == SPEED_PLACEHOLDER
    assert len(SPEED_PLACEHOLDER) == 5
    assert SPEED_PLACEHOLDER.strip(EM).strip("-.") == ""


@pytest.mark.parametrize(
    "rpm,expected",
    [
        (850, EM + "850"),
        (1500, "1500"),
        (0, EM * 3 + "0"),
    ],
)
def test_format_engine_speed(rpm, expected):
    assert format_engine_speed(rpm) == expected


def test_engine_placeholder():
    assert format_engine_speed(None) == ENGINE_PLACEHOLDER == "----"


@pytest.mark.parametrize(
    "index,total,expected",
    [
        (0, 10, EM + "1 / 10"),
        (9, 10, "10 / 10"),
        (4, 5, "5 / 5"),
        (6, 120, EM * 2 + "7 / 120"),
        (0, 0, "0 / 0"),
    ],
)
def test_format_position(index, total, expected):
    assert format_position(index, total) == expected


@pytest.mark.parametrize(
    "index,total,expected",
    [(0, 0, 0.0), (0, 1, 0.0), (0, 5, 0.0), (2, 5, 50.0), (4, 5, 100.0)],
)
def test_progress(index, total, expected):
    assert progress(index, total) == expected


def test_current_point():
    pts = make_track(3)
    assert current_point(pts, PlaybackState(current_index=2)) is pts[2]
    assert current_point((), PlaybackState()) is None


def test_readout_for_current_point():
    pts = [make_sample(0, 46.0, 15.5, speed=3.24, rpm=900), make_sample(1, 46.0, 15.5001, speed=None)]
    r = readout(pts, PlaybackState(current_index=0, is_playing=True, rate=2.0))
    assert r.latitude == 46.0
    assert r.longitude == 15.5
    assert r.timestamp == pts[0].timestamp
    assert r.speed == EM * 2 + "3.2"
    assert r.speed_class == "slow"
    assert r.engine_speed == EM + "900"
    assert r.position == "1 / 2"
    assert r.progress == 0.0
    assert r.is_playing is True
    assert r.rate == 2.0

    r = readout(pts, PlaybackState(current_index=1))
    assert r.speed == SPEED_PLACEHOLDER
    assert r.speed_class == "unknown"
    assert r.engine_speed == ENGINE_PLACEHOLDER
    assert r.progress == 100.0


def test_readout_on_empty_trajectory():
    r = readout((), PlaybackState())
    assert r.latitude is None
    assert r.timestamp is None
    assert r.speed == SPEED_PLACEHOLDER
    assert r.position == "0 / 0"
    assert r.progress == 0.0


def test_readout_is_pure():
    pts = make_track(4)
    state = PlaybackState(current_index=3)
    assert readout(pts, state) == readout(pts, state)
    assert state == PlaybackState(current_index=3)
