from datetime import datetime, timedelta, timezone

import pytest

from ftv.utils.validate import RawSample

T0 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def make_sample(t, lat, lon, speed=None, rpm=None) -> RawSample:
    """Sample `t` seconds after T0."""
    return RawSample(
        timestamp=T0 + timedelta(seconds=t),
        latitude=lat,
        longitude=lon,
        ground_speed=speed,
        engine_speed=rpm,
    )


def make_track(n, lat=46.0, lon=15.5, step=0.0001, speed=8.0, rpm=1500) -> list[RawSample]:
    """`n` samples one second apart, ~11 m apart heading east."""
    return [make_sample(i, lat, lon + i * step, speed, rpm) for i in range(n)]


@pytest.fixture
def sample():
    return make_sample


@pytest.fixture
def track():
    return make_track
