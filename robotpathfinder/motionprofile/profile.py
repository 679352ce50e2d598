"""
Motion profile producer interface and sampling into trajectory moments.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from robotpathfinder.path.path import Path
from robotpathfinder.trajectory.moment import Moment
from robotpathfinder.utils.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class MotionProfile(ABC):
    """
    One-dimensional distance/velocity/acceleration over time.

    Implementations clamp time to [0, total_time()].
    """

    @abstractmethod
    def total_time(self) -> float: ...

    @abstractmethod
    def distance(self, t: float) -> float: ...

    @abstractmethod
    def velocity(self, t: float) -> float: ...

    @abstractmethod
    def acceleration(self, t: float) -> float: ...

    def is_reversed(self) -> bool:
        return False


def sample_moments(path: Path, profile: MotionProfile, sample_count: int) -> list[Moment]:
    """
    Sample a profile at evenly spaced times and attach the path heading.

    The heading of each moment is the direction of the path tangent at the
    sampled distance (abs(distance) for reversed profiles).
    """
    if sample_count < 2:
        raise InvalidArgumentError(f"sample_count must be >= 2, got {sample_count}")

    total = profile.total_time()
    end_dist = abs(profile.distance(total))
    if not np.isclose(end_dist, path.total_length, rtol=1e-6, atol=1e-9):
        logger.warning(
            "Profile covers %.6f but path length is %.6f; distances beyond the path are clamped",
            end_dist,
            path.total_length,
        )

    moments: list[Moment] = []
    for t in np.linspace(0.0, total, sample_count):
        t = float(t)
        d = profile.distance(t)
        moments.append(
            Moment(
                distance=d,
                velocity=profile.velocity(t),
                acceleration=profile.acceleration(t),
                heading=path.heading_at(abs(d)),
                time=t,
            )
        )
    return moments
