import os
import sqlite3
from pathlib import Path
from ftv.utils.log import get_logger

logger = get_logger(__name__)


def db_path_for(fleet: str) -> str:
    """
    SQLite file name holding the given fleet's telemetry.
    """
    return f"ftv_{fleet}.sqlite"


def get_connection(db_path: str, read_only: bool = False) -> sqlite3.Connection:
    """
    Get a SQLite connection with rows returned as sqlite3.Row.

    A read-only connection never creates the file; opening a missing
    database raises sqlite3.OperationalError instead.
    """
    if read_only:
        uri = f"{Path(db_path).resolve().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
    else:
        conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str) -> sqlite3.Connection:
    """
    Create the database if needed by running the DDL in schema.sql,
    then return a live read-write connection.
    """
    conn = get_connection(db_path)
    schema_path = os.path.join(os.path.dirname(__file__), "schema.sql")
    logger.debug("Applying DB schema %s to %s", schema_path, db_path)
    with open(schema_path, "r") as f:
        conn.executescript(f.read())
    conn.commit()
    return conn
