# ftv/analysis/types.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ftv.utils.validate import RawSample

# A cleaned trajectory: time-ordered, outlier-free, never mutated.
Trajectory = tuple[RawSample, ...]


@dataclass(frozen=True)
class PlaybackState:
    """
    Snapshot of the playhead.

    Parameters
    ----------
    current_index : int
        Index into the trajectory, in [0, N-1]; 0 when the trajectory is empty.
    is_playing : bool
        True while the tick timer is armed.
    rate : float
        Playback rate multiplier.
    """
    current_index: int = 0
    is_playing: bool = False
    rate: float = 1.0


class ChangeKind(str, Enum):
    """
    Reason attached to every state-change notification.
    """
    LOAD = "load"        # trajectory replaced
    TICK = "tick"        # automatic advance by one point
    END = "end"          # last point reached; stopped and rewound
    SEEK = "seek"        # manual jump (seek, skip, reset rewind)
    PLAY = "play"
    PAUSE = "pause"
    RATE = "rate"

