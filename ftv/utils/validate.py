"""
Pydantic schemas for telemetry records crossing the feed and renderer boundaries.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RawSample(BaseModel):
    """
    One telemetry reading as received from the feed.

    Validated once at ingestion; instances are frozen so a cleaned
    trajectory can be shared read-only between controller and renderers.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ground_speed: Optional[float] = None  # km/h
    engine_speed: Optional[int] = None    # rpm

    @field_validator("timestamp")
    @classmethod
    def _naive_is_utc(cls, v: datetime) -> datetime:
        # naive and aware datetimes do not compare
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class VehicleSession(BaseModel):
    """
    Row of the `vehicle_sessions` table, restricted to the columns the
    movement view consumes.
    """
    id: int
    date_time: datetime
    serial_number: str
    gps_latitude: Optional[float]
    gps_longitude: Optional[float]
    ground_speed_gearbox: Optional[float]
    engine_speed: Optional[int]


class SegmentOut(BaseModel):
    """
    Coloured path segment between trajectory points `start` and `start + 1`.
    """
    start: int
    avg_speed: float
    speed_class: str
    color: str


class LegendEntry(BaseModel):
    speed_class: str
    color: str
    label: str
    threshold: str


class TrackResponse(BaseModel):
    """
    Everything a map renderer needs for the initial draw of one vehicle.
    """
    vehicle_id: str
    status: Literal["ok", "empty"]
    points: list[RawSample]
    segments: list[SegmentOut]
    legend: list[LegendEntry]


class Readout(BaseModel):
    """
    Display-ready projection of the playhead, pushed on every position change.
    """
    index: int
    total: int
    latitude: Optional[float]
    longitude: Optional[float]
    timestamp: Optional[datetime]
    speed: str
    speed_class: str
    color: str
    engine_speed: str
    position: str
    progress: float
    is_playing: bool
    rate: float
