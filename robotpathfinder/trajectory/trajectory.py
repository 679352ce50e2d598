"""
Time-indexed trajectory: a sequence of moments bound to the path they follow.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from robotpathfinder.path.path import Path
from robotpathfinder.trajectory.moment import Moment
from robotpathfinder.trajectory.specs import RobotSpecs, TrajectoryParams
from robotpathfinder.utils.errors import InvalidArgumentError
from robotpathfinder.utils.mathutils import langle, lerp, mirror_angle, normalize_angle
from robotpathfinder.utils.vec2d import Vec2D

if TYPE_CHECKING:
    from robotpathfinder.motionprofile.profile import MotionProfile

logger = logging.getLogger(__name__)


def locate(times: np.ndarray, time: float) -> tuple[int, float]:
    """
    Bracket time in a non-decreasing time array.

    Returns (i, f) with times[i] <= time < times[i + 1] and f the fraction of the
    way to times[i + 1]. f == 0.0 means sample i itself: an exact match, or time
    clamped to the first (also for NaN) or last sample.
    """
    last = len(times) - 1
    if time >= times[last]:
        return last, 0.0
    if not time > times[0]:
        return 0, 0.0

    i = int(np.searchsorted(times, time, side="right")) - 1
    if times[i] == time:
        return i, 0.0
    return i, float((time - times[i]) / (times[i + 1] - times[i]))


class Trajectory:
    """
    Moments sampled along a Path, queryable at any time.

    The moment sequence comes from an external producer (see
    robotpathfinder.motionprofile) and must be non-empty with non-decreasing
    times. The Path is shared, not copied; treat it as read-only once bound.
    """

    def __init__(
        self,
        path: Path,
        moments: Sequence[Moment],
        specs: RobotSpecs | None = None,
        params: TrajectoryParams | None = None,
        initial_facing: float | None = None,
    ):
        if not moments:
            raise InvalidArgumentError("trajectory needs at least one moment")
        params = params if params is not None else TrajectoryParams()
        if params.is_tank and (specs is None or specs.base_width is None):
            raise InvalidArgumentError("a tank drive trajectory needs specs with a base width")

        times = np.array([m.time for m in moments], dtype=float)
        if not np.all(np.isfinite(times)):
            raise InvalidArgumentError("moment times must be finite")
        if times.size > 1 and np.any(np.diff(times) < 0):
            bad = int(np.argmax(np.diff(times) < 0))
            raise InvalidArgumentError(
                f"moment times must be non-decreasing: t[{bad}]={times[bad]} > t[{bad + 1}]={times[bad + 1]}"
            )

        self._path = path
        self._specs = specs
        self._params = params
        self._initial_facing = (
            float(initial_facing) if initial_facing is not None else path.waypoints[0].heading
        )
        self._moments: tuple[Moment, ...] = tuple(
            m if m.initial_facing == self._initial_facing else m.with_initial_facing(self._initial_facing)
            for m in moments
        )
        self._times = times

        logger.debug(
            "Bound trajectory: %d moments, total_time=%.4f, tank=%s",
            len(self._moments),
            self.total_time(),
            params.is_tank,
        )

    @classmethod
    def from_profile(
        cls,
        path: Path,
        profile: MotionProfile,
        specs: RobotSpecs | None = None,
        params: TrajectoryParams | None = None,
    ) -> Trajectory:
        """
        Sample a motion profile along path and bind the result.

        For tank drive the path's base radius is set to half the base width.
        """
        from robotpathfinder.motionprofile.profile import sample_moments

        params = params if params is not None else TrajectoryParams()
        moments = sample_moments(path, profile, params.sample_count)
        traj = cls(path, moments, specs, params)
        if traj.is_tank():
            path.set_base_radius(specs.base_width / 2)
        return traj

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def moments(self) -> tuple[Moment, ...]:
        return self._moments

    @property
    def initial_facing(self) -> float:
        return self._initial_facing

    @property
    def specs(self) -> RobotSpecs | None:
        return self._specs

    @property
    def params(self) -> TrajectoryParams:
        return self._params

    def total_time(self) -> float:
        return self._moments[-1].time

    def is_tank(self) -> bool:
        return self._params.is_tank

    def __len__(self) -> int:
        return len(self._moments)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, time: float) -> Moment:
        """
        Moment at the given time.

        Times at or past total_time() give the last moment and times at or before
        the first moment give the first one; nothing is extrapolated. Between two
        samples distance, velocity and acceleration are interpolated linearly and
        heading along the shortest arc. A time equal to a sample's time returns that
        sample itself. NaN gives the first moment.
        """
        i, f = locate(self._times, time)
        current = self._moments[i]
        if f == 0.0:
            return current
        nxt = self._moments[i + 1]

        return Moment(
            lerp(current.distance, nxt.distance, f),
            lerp(current.velocity, nxt.velocity, f),
            lerp(current.acceleration, nxt.acceleration, f),
            langle(current.heading, nxt.heading, f),
            time,
            self._initial_facing,
        )

    def position_at(self, time: float) -> Vec2D:
        """Point on the path reached at the given time."""
        return self._path.at(abs(self.get(time).distance))

    def wheels_at(self, time: float) -> tuple[Vec2D, Vec2D]:
        """Left and right wheel positions at the given time (see Path.wheels_at)."""
        return self._path.wheels_at(abs(self.get(time).distance))

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def _with(self, path: Path, moments: list[Moment]) -> Trajectory:
        return Trajectory(path, moments, self._specs, self._params, path.waypoints[0].heading)

    def mirror_left_right(self) -> Trajectory:
        """
        Every left turn becomes a right turn.

        Headings are reflected across the first waypoint's heading; distances,
        velocities, accelerations and times are unchanged.
        """
        path = self._path.mirror_left_right()
        ref = self._path.waypoints[0].heading
        moments = [
            Moment(m.distance, m.velocity, m.acceleration, mirror_angle(m.heading, ref), m.time)
            for m in self._moments
        ]
        return self._with(path, moments)

    def mirror_front_back(self) -> Trajectory:
        """
        Every forward movement becomes a backward movement.

        Headings are reflected across the line perpendicular to the first waypoint's
        heading, and distance, velocity and acceleration change sign.
        """
        path = self._path.mirror_front_back()
        ref = self._path.waypoints[0].heading + math.pi / 2
        moments = [
            Moment(-m.distance, -m.velocity, -m.acceleration, mirror_angle(m.heading, ref), m.time)
            for m in self._moments
        ]
        return self._with(path, moments)

    def retrace(self) -> Trajectory:
        """
        Drive the same path from its end back to its start.

        Moments are taken in reverse order; time and distance are re-based on the
        last moment so the result starts at time 0 and distance 0. The robot backs
        up, so velocity is negated and heading turned by pi; acceleration is negated
        once for the direction and once for the reversed time, leaving it unchanged.
        """
        path = self._path.retrace()
        last = self._moments[-1]
        moments = [
            Moment(
                -(last.distance - m.distance),
                -m.velocity,
                m.acceleration,
                normalize_angle(m.heading + math.pi),
                last.time - m.time,
            )
            for m in reversed(self._moments)
        ]
        return self._with(path, moments)

    def __repr__(self) -> str:
        return f"Trajectory(moments={len(self._moments)}, total_time={self.total_time():.4f}, path={self._path!r})"
