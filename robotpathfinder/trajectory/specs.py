"""
Robot and generation parameters carried by a trajectory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from robotpathfinder import config
from robotpathfinder.utils.errors import InvalidArgumentError


@dataclass(frozen=True)
class RobotSpecs:
    """Drivetrain limits. base_width is the wheel track width, required for tank drive."""

    max_velocity: float
    max_acceleration: float
    base_width: float | None = None

    def __post_init__(self):
        for name in ("max_velocity", "max_acceleration"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidArgumentError(f"{name} must be finite and > 0, got {value!r}")
        if self.base_width is not None and not (math.isfinite(self.base_width) and self.base_width >= 0):
            raise InvalidArgumentError(f"base_width must be finite and >= 0, got {self.base_width!r}")


@dataclass(frozen=True)
class TrajectoryParams:
    """
    Generation parameters.

    is_tank selects the differential-drive interpretation of velocity and heading;
    it does not change how moments are looked up. sample_count is the number of
    moments a producer emits.
    """

    is_tank: bool = False
    sample_count: int = config.DEFAULT_SAMPLE_COUNT

    def __post_init__(self):
        if self.sample_count < 2:
            raise InvalidArgumentError(f"sample_count must be >= 2, got {self.sample_count}")
