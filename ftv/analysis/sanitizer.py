"""
Reconstruct a clean vehicle trajectory from raw, unordered GPS samples.

Passes:
- Pass 1: validity filter (missing, zero, non-finite or out-of-range fixes)
- Pass 2: stable temporal ordering
- Pass 3: anchor-based outlier rejection

Known limitation: a sample at exactly (0, 0) is read as "no fix", and a bad
first fix becomes the anchor for everything after it, starving the track.
"""

from __future__ import annotations
import math
from typing import Iterable, Optional

from ftv.analysis.config import TrackConfig
from ftv.analysis.types import Trajectory
from ftv.utils.geo import distance_m
from ftv.utils.log import get_logger
from ftv.utils.validate import RawSample

logger = get_logger(__name__)


def _valid_coord(value: Optional[float], limit: float) -> bool:
    if value is None or value == 0:
        return False
    if not math.isfinite(value):
        return False
    return abs(value) <= limit


def has_valid_fix(sample: RawSample) -> bool:
    """
    True if the sample carries a usable latitude/longitude pair.
    """
    return _valid_coord(sample.latitude, 90.0) and _valid_coord(sample.longitude, 180.0)


class TrackSanitizer:
    """
    Stateless pipeline turning raw samples into a trajectory.
    """
    def __init__(self, cfg: TrackConfig | None = None) -> None:
        self.cfg = cfg or TrackConfig.tractor()

    def run(self, samples: Iterable[RawSample]) -> Trajectory:
        raw = list(samples)
        valid = self._filter_valid(raw)
        ordered = self._order(valid)
        accepted = self._reject_outliers(ordered)
        logger.info(
            "Sanitized %d samples: %d without fix, %d outliers, %d kept",
            len(raw), len(raw) - len(valid), len(ordered) - len(accepted), len(accepted),
        )
        return tuple(accepted)

    def _filter_valid(self, samples: list[RawSample]) -> list[RawSample]:
        """
        Drop samples with no usable position.
        """
        return [s for s in samples if has_valid_fix(s)]

    def _order(self, samples: list[RawSample]) -> list[RawSample]:
        """
        Sort ascending by timestamp; sorted() is stable so ties keep feed order.
        """
        return sorted(samples, key=lambda s: s.timestamp)

    def _reject_outliers(self, samples: list[RawSample]) -> list[RawSample]:
        """
        Accept a sample only if it is closer than `max_jump_m` to the last
        accepted one. Rejected samples never become the anchor.
        """
        if not samples:
            return []

        accepted = [samples[0]]
        anchor = samples[0]
        for curr in samples[1:]:
            d = distance_m(anchor.latitude, anchor.longitude, curr.latitude, curr.longitude)
            if d < self.cfg.max_jump_m:
                accepted.append(curr)
                anchor = curr
            else:
                logger.debug("Rejected fix at %s: %.0f m from anchor", curr.timestamp, d)
        return accepted


def sanitize(samples: Iterable[RawSample], cfg: TrackConfig | None = None) -> Trajectory:
    """
    Clean a raw sample list into a trajectory. Never raises for bad samples.

    Parameters
    ----------
    samples
        Raw samples in any order.
    cfg
        Sanitizer thresholds; defaults to the tractor preset.

    Returns
    -------
    Trajectory
        Time-ordered tuple of accepted samples, possibly empty.
    """
    return TrackSanitizer(cfg).run(samples)
