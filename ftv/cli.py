#!/usr/bin/env python3
"""
CLI entry point for the ftv fleet telemetry viewer.

Defines the following commands:
  ftv ingest FLEET <csv_file>
  ftv track FLEET SERIAL
  ftv replay FLEET SERIAL [--rate 1]
  ftv serve FLEET [--port 8000]
  ftv version
"""

import asyncio
import sys
from argparse import ArgumentParser, Namespace
from importlib.metadata import PackageNotFoundError, version as _get_version

import uvicorn
from rich.console import Console

from ftv.analysis.config import RATES
from ftv.analysis.sanitizer import sanitize
from ftv.analysis.speed import segments
from ftv.errors import FeedUnavailable
from ftv.parsers import csv_export
from ftv.render import LiveRenderer, track_table
from ftv.server import create_app
from ftv.storage.dao import DAO
from ftv.storage.db import db_path_for
from ftv.storage.feed import SQLiteFeed
from ftv.utils.log import get_logger
from ftv.view import MovementView

logger = get_logger(__name__)


def ingest(fleet: str, csv_file: str) -> None:
    """
    Load a `vehicle_sessions` CSV export into the fleet DB.

    Parameters
    ----------
    fleet
        Fleet name, which dictates the SQLite database file name.
    csv_file
        Path to the CSV export.
    """
    logger.info("Ingest: fleet=%s, csv_file=%s", fleet, csv_file)
    dao = DAO(db_path_for(fleet))
    try:
        n = dao.add_sessions_bulk(csv_export.parse_sessions(csv_file))
    finally:
        dao.close()
    logger.info("Ingested %d session rows", n)


def track(fleet: str, serial: str) -> None:
    """
    Print a summary of the cleaned track of one vehicle.
    """
    logger.info("Track: fleet=%s, serial=%s", fleet, serial)
    raw = SQLiteFeed(db_path_for(fleet)).fetch_raw_samples(serial)
    points = sanitize(raw)
    Console().print(track_table(serial, points, segments(points)))


def replay(fleet: str, serial: str, rate: float) -> None:
    """
    Play the cleaned track of one vehicle back in the terminal, once.

    Parameters
    ----------
    fleet
        Fleet name, which dictates the SQLite database file name.
    serial
        Vehicle serial number.
    rate
        Playback rate multiplier.
    """
    logger.info("Replay: fleet=%s, serial=%s, rate=%s", fleet, serial, rate)

    async def _run() -> None:
        with LiveRenderer(serial) as renderer:
            view = MovementView(SQLiteFeed(db_path_for(fleet)), renderer)
            try:
                view.controller.set_rate(rate)
                view.activate(serial)
                await view.play_to_end()
            finally:
                view.close()

    asyncio.run(_run())


def serve(fleet: str, port: int) -> None:
    """
    Spin up FastAPI+Uvicorn to serve track data.

    Parameters
    ----------
    fleet
        Fleet name, which dictates the SQLite database file name.
    port
        Port on which to serve HTTP.
    """
    logger.info("Serve: fleet=%s, port=%d", fleet, port)
    app = create_app(fleet)
    uvicorn.run(app, host="127.0.0.1", port=port)


def version() -> None:
    """
    Print the installed ftv package version.
    """
    try:
        ver = _get_version("ftv")
    except PackageNotFoundError:
        ver = "unknown"
    logger.info("ftv version %s", ver)


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command-line arguments and return the populated namespace.
    """
    parser = ArgumentParser(prog="ftv")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ftv ingest
    p = subparsers.add_parser("ingest", help="Load a vehicle_sessions CSV export.")
    p.add_argument("fleet", type=str, help="Fleet name.")
    p.add_argument("csv_file", type=str, help="CSV export file.")

    # ftv track
    p = subparsers.add_parser("track", help="Summarize a vehicle's cleaned track.")
    p.add_argument("fleet", type=str, help="Fleet name.")
    p.add_argument("serial", type=str, help="Vehicle serial number.")

    # ftv replay
    p = subparsers.add_parser("replay", help="Play a vehicle's track back in the terminal.")
    p.add_argument("fleet", type=str, help="Fleet name.")
    p.add_argument("serial", type=str, help="Vehicle serial number.")
    p.add_argument(
        "--rate", type=float, default=1.0, choices=RATES, help="Playback rate."
    )

    # ftv serve
    p = subparsers.add_parser("serve", help="Serve via FastAPI + Uvicorn.")
    p.add_argument("fleet", type=str, help="Fleet name.")
    p.add_argument(
        "--port", type=int, default=8000, help="Port number to serve on."
    )

    # ftv version
    subparsers.add_parser("version", help="Show ftv version and exit.")

    return parser.parse_args(argv)


def main() -> None:
    """
    Entry point: dispatch to the selected subcommand.
    """
    args = parse_args()
    try:
        match args.command:
            case "ingest":
                ingest(args.fleet, args.csv_file)
            case "track":
                track(args.fleet, args.serial)
            case "replay":
                replay(args.fleet, args.serial, args.rate)
            case "serve":
                serve(args.fleet, args.port)
            case "version":
                version()
            case _:
                sys.exit(1)
    except FeedUnavailable as e:
        logger.error("Data unavailable: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
