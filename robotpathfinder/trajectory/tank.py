"""
Tank drive (differential / skid-steer) view of a trajectory.
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.integrate import cumulative_trapezoid

from robotpathfinder.path.path import Path
from robotpathfinder.trajectory.moment import TankDriveMoment
from robotpathfinder.trajectory.trajectory import Trajectory, locate
from robotpathfinder.utils.errors import InvalidArgumentError
from robotpathfinder.utils.mathutils import langle, lerp
from robotpathfinder.utils.vec2d import Vec2D

logger = logging.getLogger(__name__)


class TankDriveTrajectory:
    """
    Left and right wheel motion of a tank drive trajectory.

    With V the centre velocity, w the angular velocity and b the base width the
    wheels run at V - w*b/2 (left) and V + w*b/2 (right). The robot turns with
    the path tangent, so w = |V| * k for the path curvature k at the moment's
    distance. Wheel accelerations use the same scale factors (the rate of change
    of curvature is not included) and wheel distances integrate the wheel
    velocities over time.

    The base trajectory must be built with is_tank=True. Transforms are applied to
    the base trajectory and the wheel split is recomputed, so a left turn mirrored
    left/right swaps the roles of the two wheels.
    """

    def __init__(self, base: Trajectory):
        if not base.is_tank():
            raise InvalidArgumentError("tank drive moments need a trajectory built with is_tank=True")

        self._base = base
        radius = base.specs.base_width / 2
        path = base.path
        # Driving a backwards path, |V| = -V
        direction = -1.0 if path.backwards else 1.0

        moments = base.moments
        times = np.array([m.time for m in moments])
        velocity = np.array([m.velocity for m in moments])
        acceleration = np.array([m.acceleration for m in moments])
        curvature = np.array([path.curvature_at(abs(m.distance)) for m in moments])

        left_scale = 1.0 - direction * curvature * radius
        right_scale = 1.0 + direction * curvature * radius
        left_velocity = velocity * left_scale
        right_velocity = velocity * right_scale
        if len(moments) > 1:
            left_distance = cumulative_trapezoid(left_velocity, times, initial=0.0)
            right_distance = cumulative_trapezoid(right_velocity, times, initial=0.0)
        else:
            left_distance = right_distance = np.zeros(1)

        self._times = times
        self._moments: tuple[TankDriveMoment, ...] = tuple(
            TankDriveMoment(
                float(left_distance[i]),
                float(right_distance[i]),
                float(left_velocity[i]),
                float(right_velocity[i]),
                float(acceleration[i] * left_scale[i]),
                float(acceleration[i] * right_scale[i]),
                m.heading,
                m.time,
                float(curvature[i]),
                base.initial_facing,
            )
            for i, m in enumerate(moments)
        )

        peak = float(np.max(np.abs(np.concatenate((left_velocity, right_velocity)))))
        if peak > base.specs.max_velocity * (1 + 1e-9):
            logger.warning(
                "Wheel velocity %.4f exceeds max_velocity %.4f; the motion profile does not slow down for turns",
                peak,
                base.specs.max_velocity,
            )

    @classmethod
    def from_profile(cls, path: Path, profile, specs, params) -> TankDriveTrajectory:
        return cls(Trajectory.from_profile(path, profile, specs, params))

    @property
    def base(self) -> Trajectory:
        return self._base

    @property
    def path(self) -> Path:
        return self._base.path

    @property
    def moments(self) -> tuple[TankDriveMoment, ...]:
        return self._moments

    @property
    def initial_facing(self) -> float:
        return self._base.initial_facing

    def total_time(self) -> float:
        return self._moments[-1].time

    def __len__(self) -> int:
        return len(self._moments)

    def get(self, time: float) -> TankDriveMoment:
        """Wheel moment at the given time; clamping and interpolation as in Trajectory.get."""
        i, f = locate(self._times, time)
        current = self._moments[i]
        if f == 0.0:
            return current
        nxt = self._moments[i + 1]

        return TankDriveMoment(
            lerp(current.left_distance, nxt.left_distance, f),
            lerp(current.right_distance, nxt.right_distance, f),
            lerp(current.left_velocity, nxt.left_velocity, f),
            lerp(current.right_velocity, nxt.right_velocity, f),
            lerp(current.left_acceleration, nxt.left_acceleration, f),
            lerp(current.right_acceleration, nxt.right_acceleration, f),
            langle(current.heading, nxt.heading, f),
            time,
            lerp(current.curvature, nxt.curvature, f),
            current.initial_facing,
        )

    def wheels_at(self, time: float) -> tuple[Vec2D, Vec2D]:
        return self._base.wheels_at(time)

    def mirror_left_right(self) -> TankDriveTrajectory:
        return TankDriveTrajectory(self._base.mirror_left_right())

    def mirror_front_back(self) -> TankDriveTrajectory:
        return TankDriveTrajectory(self._base.mirror_front_back())

    def retrace(self) -> TankDriveTrajectory:
        return TankDriveTrajectory(self._base.retrace())

    def __repr__(self) -> str:
        return f"TankDriveTrajectory(moments={len(self._moments)}, total_time={self.total_time():.4f})"
