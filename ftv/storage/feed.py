# ftv/storage/feed.py

"""
Telemetry feed adapters: one bulk read of raw samples per view activation.
"""

import sqlite3
from typing import Protocol, Sequence

from pydantic import ValidationError

from ftv.errors import FeedUnavailable
from ftv.storage.dao import DAO
from ftv.utils.log import get_logger
from ftv.utils.validate import RawSample

logger = get_logger(__name__)


class TelemetryFeed(Protocol):
    def fetch_raw_samples(self, vehicle_id: str) -> Sequence[RawSample]:
        ...


class SQLiteFeed:
    """
    Feed backed by the fleet SQLite database.

    Opens the database read-only: a missing file is a failure, not an
    empty fleet. Any storage or validation failure surfaces as a single
    FeedUnavailable; nothing is retried or cached here.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def fetch_raw_samples(self, vehicle_id: str) -> list[RawSample]:
        try:
            dao = DAO(self.db_path, read_only=True)
            try:
                rows = dao.get_gps_samples(vehicle_id)
            finally:
                dao.close()
            samples = [
                RawSample(
                    timestamp=row["date_time"],
                    latitude=row["gps_latitude"],
                    longitude=row["gps_longitude"],
                    ground_speed=row["ground_speed_gearbox"],
                    engine_speed=row["engine_speed"],
                )
                for row in rows
            ]
        except (sqlite3.Error, OSError, ValidationError) as e:
            logger.error(
                "Feed failed for vehicle %s: %s", vehicle_id, e, extra={"vehicle_id": vehicle_id}
            )
            raise FeedUnavailable(vehicle_id) from e
        if not rows:
            logger.warning(
                "No sessions stored for vehicle %s", vehicle_id, extra={"vehicle_id": vehicle_id}
            )
        logger.info(
            "Fetched %d raw samples for vehicle %s", len(samples), vehicle_id,
            extra={"vehicle_id": vehicle_id, "n_samples": len(samples)},
        )
        return samples
