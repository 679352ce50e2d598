"""
Trapezoidal (or triangular) velocity profile.
"""

from __future__ import annotations

import math

from robotpathfinder.path.path import Path
from robotpathfinder.trajectory.specs import RobotSpecs
from robotpathfinder.utils.errors import InvalidArgumentError

from .profile import MotionProfile


def _trapezoid_timings(
    distance: float, v_max: float, a_max: float, v_start: float, v_end: float
) -> tuple[float, float, float, float, bool]:
    """
    Compute trapezoid or triangular profile timing.

    Returns: (t_a, t_c, t_d, v_peak, triangular)
      - t_a: accel time (v_start -> v_peak)
      - t_c: constant velocity time (0 for triangular)
      - t_d: decel time (v_peak -> v_end)
      - v_peak: peak velocity reached
      - triangular: True if triangular profile (no cruise), else False
    """
    s_a = (v_max**2 - v_start**2) / (2 * a_max)  # distance covered during accel
    s_d = (v_max**2 - v_end**2) / (2 * a_max)

    if s_a + s_d <= distance:
        # Trapezoidal: accel, cruise, decel
        t_c = (distance - s_a - s_d) / v_max
        return (v_max - v_start) / a_max, t_c, (v_max - v_end) / a_max, v_max, False

    # Triangular: peak velocity determined by distance
    v_peak = math.sqrt(a_max * distance + (v_start**2 + v_end**2) / 2)
    return (v_peak - v_start) / a_max, 0.0, (v_peak - v_end) / a_max, v_peak, True


class TrapezoidalMotionProfile(MotionProfile):
    """
    Accelerate at max_acceleration, cruise at max_velocity, decelerate to a stop.

    A negative distance gives the mirrored (reversed) profile: every distance,
    velocity and acceleration is negated. v_start and v_end are speeds (>= 0)
    at the two ends and must not exceed max_velocity.
    """

    def __init__(
        self,
        distance: float,
        max_velocity: float,
        max_acceleration: float,
        v_start: float = 0.0,
        v_end: float = 0.0,
    ):
        if not math.isfinite(distance):
            raise InvalidArgumentError(f"distance must be finite, got {distance!r}")
        if not (math.isfinite(max_velocity) and max_velocity > 0):
            raise InvalidArgumentError(f"max_velocity must be finite and > 0, got {max_velocity!r}")
        if not (math.isfinite(max_acceleration) and max_acceleration > 0):
            raise InvalidArgumentError(f"max_acceleration must be finite and > 0, got {max_acceleration!r}")
        for name, v in (("v_start", v_start), ("v_end", v_end)):
            if not (0 <= v <= max_velocity):
                raise InvalidArgumentError(f"{name} must be within [0, max_velocity], got {v!r}")

        self._reverse = distance < 0
        self._distance = abs(float(distance))
        self.max_velocity = float(max_velocity)
        self.max_acceleration = float(max_acceleration)
        self.v_start = float(v_start)
        self.v_end = float(v_end)

        # Reaching v_end from v_start needs |v_end^2 - v_start^2| / 2a of room
        if abs(self.v_end**2 - self.v_start**2) / (2 * self.max_acceleration) > self._distance + 1e-12:
            raise InvalidArgumentError(
                f"cannot change speed from {v_start} to {v_end} within distance {self._distance}"
            )

        if self._distance == 0:
            self.t_accel = self.t_cruise = self.t_decel = 0.0
            self.v_peak = self.v_start
            self.triangular = True
        else:
            self.t_accel, self.t_cruise, self.t_decel, self.v_peak, self.triangular = _trapezoid_timings(
                self._distance, self.max_velocity, self.max_acceleration, self.v_start, self.v_end
            )
            # Float noise when the end speeds sit right at the feasibility bound
            self.t_accel = max(0.0, self.t_accel)
            self.t_decel = max(0.0, self.t_decel)
        self.accel_dist = (self.v_start + self.v_peak) / 2 * self.t_accel
        self.cruise_dist = self.v_peak * self.t_cruise

    @classmethod
    def from_specs(
        cls, specs: RobotSpecs, distance: float, v_start: float = 0.0, v_end: float = 0.0
    ) -> TrapezoidalMotionProfile:
        return cls(distance, specs.max_velocity, specs.max_acceleration, v_start, v_end)

    @classmethod
    def for_path(cls, path: Path, specs: RobotSpecs) -> TrapezoidalMotionProfile:
        """Profile covering the whole path, using the end waypoints' velocities when given."""
        first, last = path.waypoints[0], path.waypoints[-1]
        return cls.from_specs(
            specs,
            path.total_length,
            first.velocity if first.velocity is not None else 0.0,
            last.velocity if last.velocity is not None else 0.0,
        )

    def total_time(self) -> float:
        return self.t_accel + self.t_cruise + self.t_decel

    def is_reversed(self) -> bool:
        return self._reverse

    def _clamp(self, t: float) -> float:
        return min(self.total_time(), max(0.0, float(t)))

    def _sign(self, value: float) -> float:
        return -value if self._reverse else value

    def distance(self, t: float) -> float:
        t = self._clamp(t)
        a = self.max_acceleration
        if t <= self.t_accel:
            result = self.v_start * t + 0.5 * a * t**2
        elif t <= self.t_accel + self.t_cruise:
            result = self.accel_dist + (t - self.t_accel) * self.v_peak
        else:
            td = t - self.t_accel - self.t_cruise
            result = self.accel_dist + self.cruise_dist + self.v_peak * td - 0.5 * a * td**2
        if t >= self.total_time():
            # Clamp last sample to exact distance to avoid drift
            result = self._distance
        return self._sign(result)

    def velocity(self, t: float) -> float:
        t = self._clamp(t)
        a = self.max_acceleration
        if t <= self.t_accel:
            result = self.v_start + a * t
        elif t <= self.t_accel + self.t_cruise:
            result = self.v_peak
        else:
            result = self.v_peak - a * (t - self.t_accel - self.t_cruise)
        return self._sign(result)

    def acceleration(self, t: float) -> float:
        t = self._clamp(t)
        if self.t_accel > 0 and t <= self.t_accel:
            result = self.max_acceleration
        elif t <= self.t_accel + self.t_cruise:
            result = 0.0
        else:
            result = -self.max_acceleration
        return self._sign(result)
