# ftv/server.py
"""
FastAPI server for the ftv CLI.
"""

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from ftv.analysis.sanitizer import sanitize
from ftv.analysis.speed import legend, segments
from ftv.analysis.types import Trajectory
from ftv.errors import FeedUnavailable
from ftv.storage.db import db_path_for
from ftv.storage.feed import SQLiteFeed
from ftv.utils.log import get_logger
from ftv.utils.validate import LegendEntry, TrackResponse

logger = get_logger(__name__)


def build_track_response(vehicle_id: str, trajectory: Trajectory) -> TrackResponse:
    """
    Initial-render payload: cleaned points, coloured segments and legend.
    """
    return TrackResponse(
        vehicle_id=vehicle_id,
        status="ok" if trajectory else "empty",
        points=list(trajectory),
        segments=[s.to_out() for s in segments(trajectory)],
        legend=legend(),
    )


def create_app(fleet: str, db_path: str | None = None) -> FastAPI:
    """
    Build a FastAPI instance bound to a specific fleet database.
    """
    app = FastAPI()
    app.state.fleet = fleet
    app.state.feed = SQLiteFeed(db_path or db_path_for(fleet))

    @app.exception_handler(FeedUnavailable)
    async def feed_unavailable(request: Request, exc: FeedUnavailable) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={"error": "data unavailable", "vehicle_id": exc.vehicle_id},
        )

    @app.get("/api/status", response_class=JSONResponse)
    async def status() -> JSONResponse:
        return JSONResponse(status_code=200, content={"status": "ok"})

    @app.get("/api/fleet", response_class=JSONResponse)
    async def get_fleet(request: Request) -> JSONResponse:
        return JSONResponse(status_code=200, content={"fleet": request.app.state.fleet})

    @app.get("/api/legend", response_model=list[LegendEntry])
    async def get_legend():
        return legend()

    @app.get("/api/vehicles/{serial_number}/track", response_model=TrackResponse)
    async def get_track(request: Request, serial_number: str):
        """
        Fetch, sanitize and classify the full track of one vehicle.
        """
        raw = request.app.state.feed.fetch_raw_samples(serial_number)
        return build_track_response(serial_number, sanitize(raw))

    return app
