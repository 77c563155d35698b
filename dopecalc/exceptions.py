"""
Engine Exceptions
=================
Error taxonomy for the ballistic engine. Each failure a caller is expected
to branch on has its own type, so no generic fault is ever raised for them:

  - InvalidConfiguration  — a value object was built from out-of-range input
  - ZeroSolveFailure      — the zero solver did not converge
  - OutOfRangeDistance    — a distance beyond the integrated trajectory
"""

from typing import Optional, Sequence


class BallisticsError(Exception):
    """Base class for every error raised by the engine."""


class InvalidConfiguration(BallisticsError, ValueError):
    """
    One or more configuration values violate their allowed range.

    ``errors`` holds one message per offending field.
    """

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("Invalid configuration: " + "; ".join(self.errors))


class ZeroSolveFailure(BallisticsError):
    """The barrel angle for the requested zero could not be found."""

    def __init__(self, zero_distance: float, angle: Optional[float],
                 miss: Optional[float], iterations: int, reason: str = ""):
        self.zero_distance = zero_distance   # yd
        self.angle = angle                   # rad, last trial
        self.miss = miss                     # in, vertical miss at last trial
        self.iterations = iterations
        self.reason = reason
        message = (f"Zero solve failed at {zero_distance:.1f} yd "
                   f"after {iterations} iterations")
        if miss is not None:
            message += f" (miss {miss:+.4f} in)"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class OutOfRangeDistance(BallisticsError):
    """Requested distance lies past the farthest integrated sample."""

    def __init__(self, requested: float, max_distance: float):
        self.requested = requested          # yd
        self.max_distance = max_distance    # yd
        super().__init__(
            f"Requested distance {requested:.1f} yd exceeds the integrated "
            f"trajectory ({max_distance:.1f} yd)"
        )
