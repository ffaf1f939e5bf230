"""
Playhead controller: transport state machine over a cleaned trajectory.

The controller runs on one asyncio event loop. Automatic playback is a chain
of `loop.call_at` handles; the single live handle is owned by the controller
and cancelled synchronously by `pause()`, so no tick can be observed once it
returns. Listeners are called synchronously on every state transition.
"""

from __future__ import annotations
import asyncio
import math
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ftv.analysis.config import PlaybackConfig
from ftv.analysis.types import ChangeKind, PlaybackState, Trajectory
from ftv.errors import InvalidRate
from ftv.utils.log import get_logger
from ftv.utils.validate import RawSample

logger = get_logger(__name__)

Listener = Callable[[PlaybackState, ChangeKind], None]


class PlayheadController:
    """
    Holds the playhead index into one trajectory and drives timed playback.

    Parameters
    ----------
    trajectory
        Cleaned trajectory; may be empty, in which case transport calls are no-ops.
    cfg
        Timing configuration; defaults to the tractor preset.
    loop
        Event loop to schedule ticks on; defaults to the running loop at `play()`.
    """

    def __init__(
        self,
        trajectory: Sequence[RawSample] = (),
        cfg: PlaybackConfig | None = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.cfg = cfg or PlaybackConfig.tractor()
        if self.cfg.default_rate not in self.cfg.rates:
            raise InvalidRate(self.cfg.default_rate, self.cfg.rates)
        self._loop = loop
        self._trajectory: Trajectory = tuple(trajectory)
        self._state = PlaybackState(rate=self.cfg.default_rate)
        self._listeners: list[Listener] = []
        self._timer: asyncio.TimerHandle | None = None
        self._deadline = 0.0

    # ------------------------------------------------------------------ views

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_empty(self) -> bool:
        return not self._trajectory

    @property
    def tick_period_ms(self) -> int:
        return self.period_for(self._state.rate)

    def period_for(self, rate: float) -> int:
        """
        Tick period in ms for `rate`, rounded half up.
        """
        return math.floor(self.cfg.base_tick_ms / rate + 0.5)

    # ------------------------------------------------------------ observers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register `listener(state, kind)`; returns a callable that unsubscribes it.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, kind: ChangeKind) -> None:
        # listeners may change state; each one still sees the transition it was sent
        state = self._state
        for listener in list(self._listeners):
            listener(state, kind)

    def _set(self, kind: ChangeKind, **changes) -> None:
        new = replace(self._state, **changes)
        if new == self._state:
            return
        self._state = new
        logger.debug("%s -> %s", kind.value, new)
        self._emit(kind)

    # ------------------------------------------------------------ transport

    def load(self, trajectory: Sequence[RawSample]) -> None:
        """
        Replace the trajectory wholesale: stop, rewind, keep the rate.
        """
        self._disarm()
        self._trajectory = tuple(trajectory)
        self._state = PlaybackState(rate=self._state.rate)
        self._emit(ChangeKind.LOAD)

    def seek(self, index: int) -> None:
        if self.is_empty:
            return
        clamped = max(0, min(index, len(self._trajectory) - 1))
        self._set(ChangeKind.SEEK, current_index=clamped)

    def play(self) -> None:
        if self.is_empty or self._state.is_playing:
            return
        self._arm(self._state.rate, restart=True)
        self._set(ChangeKind.PLAY, is_playing=True)

    def pause(self) -> None:
        self._disarm()
        self._set(ChangeKind.PAUSE, is_playing=False)

    def reset(self) -> None:
        self.pause()
        self.seek(0)

    def skip_back(self) -> None:
        self.seek(self._state.current_index - self._skip_step())

    def skip_forward(self) -> None:
        self.seek(self._state.current_index + self._skip_step())

    def set_rate(self, rate: float) -> None:
        """
        Change the playback rate; a running timer restarts at the new period.

        Raises
        ------
        InvalidRate
            If `rate` is not one of the configured rates.
        """
        # True == 1.0, so bools would slip through the membership test
        if isinstance(rate, bool) or rate not in self.cfg.rates:
            raise InvalidRate(rate, self.cfg.rates)
        if rate == self._state.rate:
            return
        if self._state.is_playing:
            self._disarm()
            self._arm(rate, restart=True)
        self._set(ChangeKind.RATE, rate=rate)

    def close(self) -> None:
        """
        Stop playback and drop all listeners.
        """
        self._disarm()
        self._state = replace(self._state, is_playing=False)
        self._listeners.clear()

    # ---------------------------------------------------------------- timer

    def _skip_step(self) -> int:
        # slack for float products such as 0.3 * 3 == 0.8999999999999999
        return int(len(self._trajectory) * self.cfg.skip_fraction + 1e-9)

    def _arm(self, rate: float, restart: bool = False) -> None:
        """
        Schedule the next tick. At most one handle is ever live.
        """
        self._disarm()
        loop = self._loop or asyncio.get_running_loop()
        period = self.period_for(rate) / 1000
        # fixed cadence: deadlines advance by whole periods, not by callback latency
        base = loop.time() if restart else self._deadline
        self._deadline = base + period
        self._timer = loop.call_at(self._deadline, self._tick)

    def _disarm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self) -> None:
        self._timer = None
        idx = self._state.current_index
        if idx >= len(self._trajectory) - 1:
            self._set(ChangeKind.END, is_playing=False, current_index=0)
            return
        # re-arm before notifying so a listener may still pause
        self._arm(self._state.rate)
        self._set(ChangeKind.TICK, current_index=idx + 1)
