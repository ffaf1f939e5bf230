# ftv/view.py
"""
Movement view: wires feed, sanitizer, playhead controller and a renderer.
"""

from __future__ import annotations
import asyncio
from typing import Optional, Protocol

from ftv.analysis.config import PlaybackConfig, TrackConfig
from ftv.analysis.formatter import readout
from ftv.analysis.playback import PlayheadController
from ftv.analysis.sanitizer import sanitize
from ftv.analysis.speed import Segment, segments
from ftv.analysis.types import ChangeKind, PlaybackState, Trajectory
from ftv.errors import FeedUnavailable
from ftv.storage.feed import TelemetryFeed
from ftv.utils.log import get_logger
from ftv.utils.validate import RawSample, Readout

logger = get_logger(__name__)


def _checked(vehicle_id: str, raw) -> tuple[RawSample, ...]:
    """
    Reject a feed payload that is not a sequence of RawSample.
    """
    try:
        samples = tuple(raw)
    except TypeError as e:
        logger.error("Malformed feed payload for vehicle %s: %r", vehicle_id, raw)
        raise FeedUnavailable(vehicle_id) from e
    bad = [s for s in samples if not isinstance(s, RawSample)]
    if bad:
        logger.error(
            "Malformed feed payload for vehicle %s: %d non-sample items", vehicle_id, len(bad)
        )
        raise FeedUnavailable(vehicle_id)
    return samples


class Renderer(Protocol):
    """
    Push interface of a map/legend renderer.
    """
    def show_trajectory(self, points: Trajectory, segments: list[Segment]) -> None:
        ...

    def show_empty(self) -> None:
        ...

    def show_position(self, readout: Readout) -> None:
        ...


class MovementView:
    """
    One visualization session for one vehicle at a time.

    `activate()` replaces trajectory and playback state together; the
    renderer is notified synchronously on every controller transition.
    """

    def __init__(
        self,
        feed: TelemetryFeed,
        renderer: Renderer,
        track_cfg: TrackConfig | None = None,
        playback_cfg: PlaybackConfig | None = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.feed = feed
        self.renderer = renderer
        self.track_cfg = track_cfg or TrackConfig.tractor()
        self.controller = PlayheadController(cfg=playback_cfg, loop=loop)
        self.vehicle_id: str | None = None
        self._unsubscribe = self.controller.subscribe(self._on_change)

    @property
    def trajectory(self) -> Trajectory:
        return self.controller.trajectory

    def activate(self, vehicle_id: str) -> Trajectory:
        """
        Fetch, clean and load the track of `vehicle_id`.

        Raises
        ------
        FeedUnavailable
            If the feed fails or returns something other than raw samples;
            the previous trajectory stays loaded but paused.
        """
        self.controller.pause()
        try:
            raw = self.feed.fetch_raw_samples(vehicle_id)
        except FeedUnavailable:
            raise
        except Exception as e:
            logger.error("Feed failed for vehicle %s: %s", vehicle_id, e)
            raise FeedUnavailable(vehicle_id) from e

        trajectory = sanitize(_checked(vehicle_id, raw), self.track_cfg)
        self.vehicle_id = vehicle_id
        self.controller.load(trajectory)
        return trajectory

    async def play_to_end(self) -> PlaybackState:
        """
        Start playback and wait until it stops, by reaching the end or by pause.
        """
        loop = asyncio.get_running_loop()
        done: asyncio.Future[PlaybackState] = loop.create_future()

        def _watch(state: PlaybackState, kind: ChangeKind) -> None:
            if not state.is_playing and not done.done():
                done.set_result(state)

        unsubscribe = self.controller.subscribe(_watch)
        try:
            self.controller.play()
            if not self.controller.state.is_playing:
                return self.controller.state
            return await done
        finally:
            unsubscribe()

    def close(self) -> None:
        self._unsubscribe()
        self.controller.close()

    def _on_change(self, state: PlaybackState, kind: ChangeKind) -> None:
        points = self.controller.trajectory
        if kind is ChangeKind.LOAD:
            if not points:
                logger.info("No data to display for vehicle %s", self.vehicle_id)
                self.renderer.show_empty()
                return
            self.renderer.show_trajectory(points, segments(points))
        if points:
            self.renderer.show_position(readout(points, state))
