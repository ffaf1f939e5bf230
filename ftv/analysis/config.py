# ftv/analysis/config.py

from dataclasses import dataclass

# -----------------------------------------------------------------------------
# Fixed policy values (metres, milliseconds). Tunable, not laws of physics:
# a faster vehicle class would need a larger jump bound.
MAX_JUMP_M     = 500.0                   # reject fixes this far from the anchor
BASE_TICK_MS   = 150                     # tick period at rate 1x
RATES          = (0.5, 1.0, 2.0, 4.0)    # permitted playback rates
SKIP_FRACTION  = 0.1                     # share of the track per skip
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TrackConfig:
    """
    Configuration for the track sanitizer.

    Attributes
    ----------
    max_jump_m
        A candidate fix is accepted only if it lies strictly closer than this
        distance (m) to the last accepted fix.
    """
    max_jump_m: float = MAX_JUMP_M

    @classmethod
    def tractor(cls):
        """Preset for agricultural vehicles (default thresholds)."""
        return cls()


@dataclass(frozen=True)
class PlaybackConfig:
    """
    Configuration for the playhead controller.

    Attributes
    ----------
    base_tick_ms
        Tick period (ms) at rate 1.0; the live period is base_tick_ms / rate.
    rates
        Accepted playback rates, ascending.
    skip_fraction
        Fraction of the trajectory length moved by one skip.
    default_rate
        Rate a fresh controller starts at.
    """
    base_tick_ms: int = BASE_TICK_MS
    rates: tuple[float, ...] = RATES
    skip_fraction: float = SKIP_FRACTION
    default_rate: float = 1.0

    @classmethod
    def tractor(cls):
        """Preset for agricultural vehicles (default timing)."""
        return cls()
