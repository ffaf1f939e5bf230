"""
CSV parser: read the fleet backend's `vehicle_sessions` table export into
normalized session records.
"""

import csv
from datetime import datetime
from typing import Iterator, Optional

from pydantic import ValidationError

from ftv.utils.log import get_logger
from ftv.utils.validate import VehicleSession

logger = get_logger(__name__)


def parse_optional_float(value: Optional[str]) -> Optional[float]:
    """
    Parse a CSV cell as float.

    Parameters
    ----------
    value : Optional[str]
        Raw cell text; blank, "null" or unparseable text yields None.

    Returns
    -------
    Optional[float]
        Parsed value, or None.
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() in ("null", "none", "nan"):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_optional_int(value: Optional[str]) -> Optional[int]:
    """
    Parse a CSV cell as an integer, accepting integral floats such as "1500.0".
    """
    f = parse_optional_float(value)
    if f is None or not f.is_integer():
        return None
    return int(f)


def parse_sessions(file_path: str) -> Iterator[VehicleSession]:
    """
    Yield one VehicleSession per CSV row.

    Rows missing `id`, `date_time` or `serial_number` are skipped with a
    warning; optional numeric columns fall back to None.
    """
    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                yield VehicleSession(
                    id=int(row["id"]),
                    date_time=datetime.fromisoformat(row["date_time"].strip()),
                    serial_number=row["serial_number"].strip(),
                    gps_latitude=parse_optional_float(row.get("gps_latitude")),
                    gps_longitude=parse_optional_float(row.get("gps_longitude")),
                    ground_speed_gearbox=parse_optional_float(row.get("ground_speed_gearbox")),
                    engine_speed=parse_optional_int(row.get("engine_speed")),
                )
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning("Skipping %s line %d: %s", file_path, line_no, e)
