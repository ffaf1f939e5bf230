from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from ftv.server import create_app
from ftv.storage.dao import DAO
from ftv.utils.validate import VehicleSession


def session(id, minute, lat, lon, speed=8.5, rpm=1500, serial="ABC123"):
    return VehicleSession(
        id=id,
        date_time=datetime(2024, 1, 15, 10, minute),
        serial_number=serial,
        gps_latitude=lat,
        gps_longitude=lon,
        ground_speed_gearbox=speed,
        engine_speed=rpm,
    )


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "fleet.sqlite")
    dao = DAO(path)
    dao.add_sessions_bulk([
        session(1, 2, 46.0001, 15.5, speed=2.0),
        session(2, 0, 46.0, 15.5, speed=None, rpm=None),
        session(3, 1, 46.5, 15.5),              # GPS glitch, ~55 km away
        session(4, 3, None, None),
        session(5, 4, 46.0002, 15.5, speed=20.0),
        session(6, 0, 47.0, 16.0, serial="DEF456"),
    ])
    dao.close()
    return path


@pytest.fixture
def client(db_path):
    return TestClient(create_app("test", db_path=db_path))


def test_status(client):
    resp = client.get("/api/status")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_fleet(client):
    assert client.get("/api/fleet").json() == {"fleet": "test"}


def test_legend(client):
    rows = client.get("/api/legend").json()
    assert [r["label"] for r in rows] == ["Stationary/Slow", "Medium", "Fast", "No speed data"]


def test_track_is_cleaned_and_classified(client):
    resp = client.get("/api/vehicles/ABC123/track")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["vehicle_id"] == "ABC123"
    assert [p["latitude"] for p in body["points"]] == [46.0, 46.0001, 46.0002]
    assert body["points"][0]["ground_speed"] is None
    assert body["points"][0]["engine_speed"] is None
    assert [s["speed_class"] for s in body["segments"]] == ["slow", "medium"]
    assert [s["start"] for s in body["segments"]] == [0, 1]
    assert len(body["legend"]) == 4


def test_unknown_vehicle_is_empty(client):
    body = client.get("/api/vehicles/NOPE/track").json()
    assert body["status"] == "empty"
    assert body["points"] == []
    assert body["segments"] == []


def test_feed_failure_is_503(tmp_path):
    # a directory cannot be opened as a database
    client = TestClient(create_app("broken", db_path=str(tmp_path)))
    resp = client.get("/api/vehicles/ABC123/track")
    assert resp.status_code == 503
    assert resp.json() == {"error": "data unavailable", "vehicle_id": "ABC123"}
