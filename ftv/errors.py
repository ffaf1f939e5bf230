# ftv/errors.py

"""
Exceptions raised across the ftv package.
"""


class FtvError(Exception):
    """Base class for ftv errors."""


class FeedUnavailable(FtvError):
    """
    The telemetry feed failed or returned malformed data.

    Terminal for one view activation; callers are not expected to retry.
    """

    def __init__(self, vehicle_id: str, reason: str = "data unavailable"):
        super().__init__(f"{vehicle_id}: {reason}")
        self.vehicle_id = vehicle_id
        self.reason = reason


class InvalidInput(FtvError, ValueError):
    """A caller passed a value outside the accepted domain."""


class InvalidRate(InvalidInput):
    def __init__(self, rate: float, allowed: tuple[float, ...]):
        super().__init__(f"playback rate {rate!r} not in {allowed}")
        self.rate = rate
        self.allowed = allowed
