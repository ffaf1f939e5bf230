# ftv/analysis/formatter.py

"""
Display-ready readouts derived from (trajectory, playback state).

Numbers are left-padded with EM SPACE (U+2003) so that columns keep their
width in proportional fonts, where a digit is about one em wide.
"""

from typing import Optional, Sequence

from ftv.analysis.speed import classify
from ftv.analysis.types import PlaybackState
from ftv.utils.validate import RawSample, Readout

EM_SPACE = "\u2003"
SPEED_WIDTH = 5
ENGINE_WIDTH = 4
SPEED_PLACEHOLDER = "--.-".rjust(SPEED_WIDTH, EM_SPACE)
ENGINE_PLACEHOLDER = "-" * ENGINE_WIDTH


def current_point(trajectory: Sequence[RawSample], state: PlaybackState) -> Optional[RawSample]:
    if not trajectory:
        return None
    return trajectory[state.current_index]


def format_speed(speed: Optional[float]) -> str:
    if speed is None:
        return SPEED_PLACEHOLDER
    return f"{speed:.1f}".rjust(SPEED_WIDTH, EM_SPACE)


def format_engine_speed(rpm: Optional[int]) -> str:
    if rpm is None:
        return ENGINE_PLACEHOLDER
    return str(int(rpm)).rjust(ENGINE_WIDTH, EM_SPACE)


def format_position(index: int, total: int) -> str:
    """
    "{index+1} / {total}", the left number padded to the width of `total`.
    """
    if total == 0:
        return "0 / 0"
    return f"{str(index + 1).rjust(len(str(total)), EM_SPACE)} / {total}"


def progress(index: int, total: int) -> float:
    """
    Playhead position as a percentage of the trajectory.
    """
    if total <= 1:
        return 0.0
    return index / (total - 1) * 100


def readout(trajectory: Sequence[RawSample], state: PlaybackState) -> Readout:
    """
    Bundle every readout for the current playhead position.
    """
    point = current_point(trajectory, state)
    total = len(trajectory)
    speed_cls = classify(point.ground_speed if point else None)
    return Readout(
        index=state.current_index,
        total=total,
        latitude=point.latitude if point else None,
        longitude=point.longitude if point else None,
        timestamp=point.timestamp if point else None,
        speed=format_speed(point.ground_speed if point else None),
        speed_class=speed_cls.value,
        color=speed_cls.color,
        engine_speed=format_engine_speed(point.engine_speed if point else None),
        position=format_position(state.current_index, total),
        progress=progress(state.current_index, total),
        is_playing=state.is_playing,
        rate=state.rate,
    )
