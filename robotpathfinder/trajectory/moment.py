from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from robotpathfinder.utils.mathutils import normalize_angle


@dataclass(frozen=True)
class Moment:
    """
    A kinematic sample of a trajectory.

    distance is the arc length travelled from the start of the path (negative when
    the trajectory is driven backwards), heading the direction of travel in radians,
    time the elapsed time in seconds.
    """

    distance: float
    velocity: float
    acceleration: float
    heading: float
    time: float
    initial_facing: float = 0.0

    def relative_facing(self) -> float:
        """Heading relative to the trajectory's starting heading, in (-pi, pi]."""
        return normalize_angle(self.heading - self.initial_facing)

    def with_initial_facing(self, initial_facing: float) -> Moment:
        return dataclasses.replace(self, initial_facing=initial_facing)


@dataclass(frozen=True)
class TankDriveMoment:
    """
    A kinematic sample split into left and right wheel motion.

    Wheel distances are measured from the start of the trajectory. curvature is
    the signed path curvature (positive turning left along the path tangent) at
    the sample.
    """

    left_distance: float
    right_distance: float
    left_velocity: float
    right_velocity: float
    left_acceleration: float
    right_acceleration: float
    heading: float
    time: float
    curvature: float = 0.0
    initial_facing: float = 0.0

    def relative_facing(self) -> float:
        return normalize_angle(self.heading - self.initial_facing)
