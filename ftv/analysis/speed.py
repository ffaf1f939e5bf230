# ftv/analysis/speed.py

"""
Speed buckets used for path colouring and the map legend.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ftv.utils.validate import LegendEntry, RawSample, SegmentOut

SLOW_BELOW_KMH   = 5.0
MEDIUM_BELOW_KMH = 15.0


class SpeedClass(str, Enum):
    UNKNOWN = "unknown"
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"

    @property
    def color(self) -> str:
        return _STYLE[self][0]

    @property
    def label(self) -> str:
        return _STYLE[self][1]


# class -> (hex colour, legend label, threshold text)
_STYLE: dict[SpeedClass, tuple[str, str, str]] = {
    SpeedClass.SLOW:    ("#22c55e", "Stationary/Slow", "< 5 km/h"),     # green
    SpeedClass.MEDIUM:  ("#f59e0b", "Medium",          "5-15 km/h"),    # amber
    SpeedClass.FAST:    ("#ef4444", "Fast",            ">= 15 km/h"),   # red
    SpeedClass.UNKNOWN: ("#9ca3af", "No speed data",   "n/a"),          # gray
}


@dataclass(frozen=True)
class Segment:
    """
    Path segment between trajectory points `start` and `start + 1`.

    Parameters
    ----------
    start : int
        Index of the first endpoint.
    avg_speed : float
        Mean of both endpoint speeds, a missing speed counted as 0.
    speed_class : SpeedClass
        Bucket of `avg_speed`.
    """
    start: int
    avg_speed: float
    speed_class: SpeedClass

    def to_out(self) -> SegmentOut:
        return SegmentOut(
            start=self.start,
            avg_speed=self.avg_speed,
            speed_class=self.speed_class.value,
            color=self.speed_class.color,
        )


def classify(speed: Optional[float]) -> SpeedClass:
    """
    Map a ground speed (km/h) to its bucket.
    """
    if speed is None:
        return SpeedClass.UNKNOWN
    if speed < SLOW_BELOW_KMH:
        return SpeedClass.SLOW
    if speed < MEDIUM_BELOW_KMH:
        return SpeedClass.MEDIUM
    return SpeedClass.FAST


def segments(trajectory: Sequence[RawSample]) -> list[Segment]:
    """
    Classify every consecutive pair of points by their average speed.

    A null endpoint speed counts as 0 here, so segments are never UNKNOWN.
    """
    out: list[Segment] = []
    for i, (a, b) in enumerate(zip(trajectory, trajectory[1:])):
        avg = ((a.ground_speed or 0.0) + (b.ground_speed or 0.0)) / 2
        out.append(Segment(i, avg, classify(avg)))
    return out


def legend() -> list[LegendEntry]:
    """
    Legend rows in display order.
    """
    order = (SpeedClass.SLOW, SpeedClass.MEDIUM, SpeedClass.FAST, SpeedClass.UNKNOWN)
    return [
        LegendEntry(
            speed_class=c.value,
            color=_STYLE[c][0],
            label=_STYLE[c][1],
            threshold=_STYLE[c][2],
        )
        for c in order
    ]
