# ftv/render.py
"""
Terminal renderers built on Rich.
"""

from collections import Counter
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ftv.analysis.speed import Segment, SpeedClass, legend
from ftv.analysis.types import Trajectory
from ftv.utils.validate import Readout


def track_table(vehicle_id: str, points: Trajectory, segs: list[Segment]) -> Table:
    """
    Summary of a cleaned track: extent, duration and per-class segment counts.
    """
    table = Table(title=f"Track {vehicle_id}", show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    table.add_row("points", str(len(points)))
    if points:
        table.add_row("start", points[0].timestamp.isoformat())
        table.add_row("end", points[-1].timestamp.isoformat())
        table.add_row("duration", str(points[-1].timestamp - points[0].timestamp))
    counts = Counter(s.speed_class for s in segs)
    for entry in legend():
        cls = SpeedClass(entry.speed_class)
        if cls is SpeedClass.UNKNOWN:
            continue
        table.add_row(
            Text(entry.label, style=entry.color),
            f"{counts.get(cls, 0)} segments",
        )
    return table


class LiveRenderer:
    """
    Renders the playhead as a live-updating panel.
    """

    def __init__(self, vehicle_id: str, console: Optional[Console] = None) -> None:
        self.vehicle_id = vehicle_id
        self.console = console or Console()
        self.live = Live(console=self.console, auto_refresh=False)
        self.segments: list[Segment] = []

    def __enter__(self) -> "LiveRenderer":
        self.live.__enter__()
        return self

    def __exit__(self, *exc) -> None:
        self.live.__exit__(*exc)

    def show_trajectory(self, points: Trajectory, segments: list[Segment]) -> None:
        self.segments = segments
        self.console.print(track_table(self.vehicle_id, points, segments))

    def show_empty(self) -> None:
        self.console.print(f"[yellow]No data to display for {self.vehicle_id}[/yellow]")

    def show_position(self, readout: Readout) -> None:
        self.live.update(self._panel(readout), refresh=True)

    def _panel(self, r: Readout) -> Table:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="bold")
        grid.add_column()
        grid.add_row("point", r.position)
        grid.add_row("time", r.timestamp.isoformat() if r.timestamp else "-")
        grid.add_row("position", f"{r.latitude:.6f}, {r.longitude:.6f}" if r.latitude is not None else "-")
        grid.add_row("speed", Text(f"{r.speed} km/h", style=r.color))
        grid.add_row("engine", f"{r.engine_speed} rpm")
        grid.add_row("rate", f"{r.rate:g}x {'playing' if r.is_playing else 'paused'}")
        grid.add_row("progress", ProgressBar(total=100, completed=r.progress, width=40))
        return grid
