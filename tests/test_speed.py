import pytest

from ftv.analysis.speed import SpeedClass, classify, legend, segments

from conftest import make_sample


@pytest.mark.parametrize(
    "speed,expected",
    [
        (None, SpeedClass.UNKNOWN),
        (0.0, SpeedClass.SLOW),
        (4.999, SpeedClass.SLOW),
        (5.0, SpeedClass.MEDIUM),
        (14.999, SpeedClass.MEDIUM),
        (15.0, SpeedClass.FAST),
        (42.0, SpeedClass.FAST),
        (-1.0, SpeedClass.SLOW),
    ],
)
def test_classify_boundaries(speed, expected):
    assert classify(speed) is expected


def test_class_styles():
    assert SpeedClass.SLOW.label == "Stationary/Slow"
    assert SpeedClass.MEDIUM.label == "Medium"
    assert SpeedClass.FAST.label == "Fast"
    assert SpeedClass.UNKNOWN.label == "No speed data"
    colors = {c.color for c in SpeedClass}
    assert len(colors) == 4


def test_legend_order_and_content():
    rows = legend()
    assert [r.speed_class for r in rows] == ["slow", "medium", "fast", "unknown"]
    assert rows[0].color == SpeedClass.SLOW.color
    assert rows[3].label == "No speed data"
    assert rows[2].threshold == ">= 15 km/h"
    assert classify(15.0) is SpeedClass.FAST


def test_segments_use_average_of_endpoints():
    pts = [
        make_sample(0, 46.0, 15.5, speed=2.0),
        make_sample(1, 46.0, 15.5001, speed=10.0),
        make_sample(2, 46.0, 15.5002, speed=30.0),
    ]
    segs = segments(pts)
    assert [s.start for s in segs] == [0, 1]
    assert segs[0].avg_speed == 6.0
    assert segs[0].speed_class is SpeedClass.MEDIUM
    assert segs[1].avg_speed == 20.0
    assert segs[1].speed_class is SpeedClass.FAST


def test_null_endpoint_counts_as_zero_in_average():
    pts = [
        make_sample(0, 46.0, 15.5, speed=None),
        make_sample(1, 46.0, 15.5001, speed=12.0),
        make_sample(2, 46.0, 15.5002, speed=None),
    ]
    segs = segments(pts)
    assert segs[0].avg_speed == 6.0
    assert segs[0].speed_class is SpeedClass.MEDIUM
    assert segs[1].avg_speed == 6.0


def test_segment_of_two_missing_speeds_is_slow():
    pts = [make_sample(0, 46.0, 15.5), make_sample(1, 46.0, 15.5001)]
    (seg,) = segments(pts)
    assert seg.speed_class is SpeedClass.SLOW


def test_short_tracks_have_no_segments():
    assert segments([]) == []
    assert segments([make_sample(0, 46.0, 15.5, speed=3.0)]) == []


def test_segment_out_carries_colour():
    pts = [make_sample(0, 46.0, 15.5, speed=20.0), make_sample(1, 46.0, 15.5001, speed=20.0)]
    out = segments(pts)[0].to_out()
    assert out.speed_class == "fast"
    assert out.color == SpeedClass.FAST.color
