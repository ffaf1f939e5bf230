import pytest

from ftv import cli
from ftv.storage.db import db_path_for
from ftv.storage.feed import SQLiteFeed

CSV = (
    "id,date_time,serial_number,gps_longitude,gps_latitude,engine_speed,ground_speed_gearbox\n"
    "1,2024-01-15T10:00:00,ABC123,15.5,46.0,1500,8.5\n"
    "2,2024-01-15T10:01:00,ABC123,15.5001,46.0,1550,9.0\n"
)


def test_parse_replay_args():
    args = cli.parse_args(["replay", "north", "ABC123", "--rate", "2"])
    assert args.command == "replay"
    assert args.fleet == "north"
    assert args.serial == "ABC123"
    assert args.rate == 2.0


def test_replay_rejects_unknown_rate():
    with pytest.raises(SystemExit):
        cli.parse_args(["replay", "north", "ABC123", "--rate", "3"])


def test_serve_default_port():
    args = cli.parse_args(["serve", "north"])
    assert args.port == 8000


def test_ingest_then_track(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "export.csv").write_text(CSV, encoding="utf-8")

    cli.ingest("north", "export.csv")

    assert (tmp_path / db_path_for("north")).exists()
    assert len(SQLiteFeed(db_path_for("north")).fetch_raw_samples("ABC123")) == 2

    cli.track("north", "ABC123")
    out = capsys.readouterr().out
    assert "Track ABC123" in out


def test_replay_runs_once(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "export.csv").write_text(CSV, encoding="utf-8")
    cli.ingest("north", "export.csv")

    cli.replay("north", "ABC123", 4.0)
