from sqlite3 import Connection, Row
from typing import Iterable
from ftv.utils.validate import VehicleSession
from ftv.storage.db import get_connection, init_db
from ftv.utils.log import get_logger

logger = get_logger(__name__)


class DAO:
    """
    Encapsulates the inserts/queries the movement view needs against the
    fleet telemetry DB.
    """

    def __init__(self, db_path: str, read_only: bool = False):
        """
        Connect; a writable DAO also creates the schema if needed.
        """
        if read_only:
            self.conn: Connection = get_connection(db_path, read_only=True)
        else:
            self.conn = init_db(db_path)

    def close(self) -> None:
        self.conn.close()

    def add_sessions_bulk(self, sessions: Iterable[VehicleSession]) -> int:
        """
        Bulk upsert session rows in a single transaction.

        Returns
        -------
        int
            Number of rows written.
        """
        stmt = """
        INSERT INTO vehicle_sessions
          (id, date_time, serial_number, gps_latitude, gps_longitude,
           ground_speed_gearbox, engine_speed)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
          date_time            = excluded.date_time,
          serial_number        = excluded.serial_number,
          gps_latitude         = excluded.gps_latitude,
          gps_longitude        = excluded.gps_longitude,
          ground_speed_gearbox = excluded.ground_speed_gearbox,
          engine_speed         = excluded.engine_speed
        """
        params = [
            (
                s.id,
                s.date_time.isoformat(),
                s.serial_number,
                s.gps_latitude,
                s.gps_longitude,
                s.ground_speed_gearbox,
                s.engine_speed,
            )
            for s in sessions
        ]
        with self.conn:
            self.conn.executemany(stmt, params)
        return len(params)

    def get_gps_samples(self, serial_number: str) -> list[Row]:
        """
        Return every GPS-bearing column for one vehicle, oldest first.
        """
        return self.conn.execute(
            """
            SELECT id, date_time, gps_latitude, gps_longitude,
                   ground_speed_gearbox, engine_speed
              FROM vehicle_sessions
             WHERE serial_number = ?
             ORDER BY date_time ASC
            """,
            (serial_number,),
        ).fetchall()
