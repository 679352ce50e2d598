import math

import numpy as np
import pytest

from robotpathfinder import (
    InvalidArgumentError,
    MotionProfile,
    Path,
    RobotSpecs,
    Trajectory,
    TrajectoryParams,
    TrapezoidalMotionProfile,
    Waypoint,
    sample_moments,
)
from robotpathfinder.motionprofile.trapezoidal import _trapezoid_timings


def approx_equal(a, b, tol=1e-9):
    return abs(a - b) <= tol


@pytest.mark.unit
def test_trapezoid_timings_trapezoidal_case():
    t_a, t_c, t_d, v_peak, triangular = _trapezoid_timings(100.0, 10.0, 5.0, 0.0, 0.0)
    assert not triangular
    assert v_peak == 10.0
    assert approx_equal(t_a, 2.0)
    assert approx_equal(t_d, 2.0)
    # 10 m accelerating, 10 m decelerating, 80 m cruising at 10 m/s
    assert approx_equal(t_c, 8.0)


@pytest.mark.unit
def test_trapezoid_timings_triangular_case():
    t_a, t_c, t_d, v_peak, triangular = _trapezoid_timings(1.0, 10.0, 5.0, 0.0, 0.0)
    assert triangular
    assert t_c == 0.0
    assert approx_equal(v_peak, math.sqrt(5.0))
    assert approx_equal(t_a, t_d)


@pytest.mark.unit
@pytest.mark.parametrize(
    "distance, v_max, a_max",
    [
        (100.0, 10.0, 5.0),  # trapezoidal
        (1.0, 10.0, 5.0),  # triangular
        (37.5, 3.0, 0.75),
    ],
)
def test_profile_endpoints_and_limits(distance, v_max, a_max):
    profile = TrapezoidalMotionProfile(distance, v_max, a_max)
    total = profile.total_time()

    assert profile.distance(0.0) == 0.0
    assert profile.distance(total) == distance
    assert profile.velocity(0.0) == 0.0
    assert profile.velocity(total) == pytest.approx(0.0, abs=1e-9)
    assert profile.acceleration(0.0) == a_max
    assert profile.acceleration(total) == -a_max
    assert not profile.is_reversed()

    times = np.linspace(0.0, total, 301)
    distances = np.array([profile.distance(t) for t in times])
    velocities = np.array([profile.velocity(t) for t in times])
    accelerations = np.array([profile.acceleration(t) for t in times])
    assert np.all(np.diff(distances) >= -1e-12)
    assert np.all(distances <= distance + 1e-9)
    assert np.all(velocities >= -1e-9)
    assert np.all(velocities <= v_max + 1e-9)
    assert np.all(np.abs(accelerations) <= a_max)


@pytest.mark.unit
def test_profile_clamps_time():
    profile = TrapezoidalMotionProfile(10.0, 2.0, 1.0)
    total = profile.total_time()
    assert profile.distance(-1.0) == profile.distance(0.0)
    assert profile.distance(total + 5.0) == 10.0
    assert profile.velocity(total + 5.0) == profile.velocity(total)


@pytest.mark.unit
def test_reversed_profile_negates_everything():
    forward = TrapezoidalMotionProfile(20.0, 4.0, 2.0)
    reverse = TrapezoidalMotionProfile(-20.0, 4.0, 2.0)
    assert reverse.is_reversed()
    assert reverse.total_time() == forward.total_time()
    for t in np.linspace(0.0, forward.total_time(), 17):
        assert reverse.distance(t) == -forward.distance(t)
        assert reverse.velocity(t) == -forward.velocity(t)
        assert reverse.acceleration(t) == -forward.acceleration(t)


@pytest.mark.unit
def test_end_speeds():
    profile = TrapezoidalMotionProfile(100.0, 5.0, 3.5, v_start=1.23, v_end=3.45)
    assert profile.velocity(0.0) == 1.23
    assert profile.velocity(profile.total_time()) == pytest.approx(3.45)
    assert profile.distance(profile.total_time()) == 100.0


@pytest.mark.unit
def test_zero_distance_profile():
    profile = TrapezoidalMotionProfile(0.0, 1.0, 1.0)
    assert profile.total_time() == 0.0
    assert profile.distance(0.0) == 0.0
    assert profile.velocity(0.0) == 0.0


@pytest.mark.unit
@pytest.mark.parametrize(
    "args, kwargs",
    [
        ((10.0, 0.0, 1.0), {}),
        ((10.0, 1.0, -1.0), {}),
        ((float("nan"), 1.0, 1.0), {}),
        ((10.0, 1.0, 1.0), {"v_start": 2.0}),
        ((10.0, 1.0, 1.0), {"v_end": -0.5}),
        # Cannot brake from 10 to 0 within 1 m at 1 m/s^2
        ((1.0, 10.0, 1.0), {"v_start": 10.0}),
    ],
)
def test_profile_validation(args, kwargs):
    with pytest.raises(InvalidArgumentError):
        TrapezoidalMotionProfile(*args, **kwargs)


@pytest.mark.unit
def test_from_specs():
    specs = RobotSpecs(max_velocity=3.0, max_acceleration=1.5)
    profile = TrapezoidalMotionProfile.from_specs(specs, 12.0)
    assert profile.max_velocity == 3.0
    assert profile.max_acceleration == 1.5
    assert profile.distance(profile.total_time()) == 12.0


@pytest.mark.unit
def test_for_path_uses_waypoint_velocities():
    path = Path(
        [Waypoint(0.0, 0.0, math.pi / 2, velocity=1.23), Waypoint(0.0, 100.0, math.pi / 2, velocity=3.45)],
        alpha=40.0,
    )
    specs = RobotSpecs(max_velocity=5.0, max_acceleration=3.5)
    traj = Trajectory.from_profile(path, TrapezoidalMotionProfile.for_path(path, specs), specs)

    assert traj.get(0.0).velocity == 1.23
    assert traj.get(traj.total_time()).velocity == pytest.approx(3.45)
    assert traj.moments[-1].distance == path.total_length


@pytest.mark.unit
def test_sample_moments(s_curve_path):
    specs = RobotSpecs(max_velocity=5.0, max_acceleration=4.0)
    profile = TrapezoidalMotionProfile.for_path(s_curve_path, specs)
    moments = sample_moments(s_curve_path, profile, 50)

    assert len(moments) == 50
    assert moments[0].time == 0.0
    assert moments[-1].time == pytest.approx(profile.total_time())
    assert moments[-1].distance == pytest.approx(s_curve_path.total_length)
    assert np.all(np.diff([m.time for m in moments]) > 0)
    assert np.all(np.diff([m.distance for m in moments]) >= 0)
    assert moments[0].heading == pytest.approx(s_curve_path.waypoints[0].heading)


@pytest.mark.unit
def test_sample_moments_rejects_too_few_samples(straight_path):
    profile = TrapezoidalMotionProfile(straight_path.total_length, 1.0, 1.0)
    with pytest.raises(InvalidArgumentError):
        sample_moments(straight_path, profile, 1)


@pytest.mark.unit
def test_sample_moments_warns_on_length_mismatch(straight_path, caplog):
    profile = TrapezoidalMotionProfile(3.0, 1.0, 1.0)
    moments = sample_moments(straight_path, profile, 5)
    assert moments[-1].distance == 3.0
    assert "path length" in caplog.text


@pytest.mark.unit
def test_reversed_profile_trajectory(straight_path):
    profile = TrapezoidalMotionProfile(-straight_path.total_length, 2.0, 1.0)
    traj = Trajectory.from_profile(straight_path, profile, params=TrajectoryParams(sample_count=20))
    assert traj.moments[-1].distance == -straight_path.total_length
    assert all(m.velocity <= 1e-9 for m in traj.moments)
    assert traj.position_at(traj.total_time()).is_close(straight_path.at(straight_path.total_length))


@pytest.mark.unit
def test_custom_profile_subclass(straight_path):
    class ConstantVelocity(MotionProfile):
        def __init__(self, distance, velocity):
            self._distance = distance
            self._velocity = velocity

        def total_time(self):
            return self._distance / self._velocity

        def distance(self, t):
            return self._velocity * min(max(t, 0.0), self.total_time())

        def velocity(self, t):
            return self._velocity

        def acceleration(self, t):
            return 0.0

    profile = ConstantVelocity(straight_path.total_length, 2.0)
    traj = Trajectory.from_profile(straight_path, profile, params=TrajectoryParams(sample_count=11))
    assert traj.total_time() == pytest.approx(straight_path.total_length / 2.0)
    assert traj.get(traj.total_time() / 2).distance == pytest.approx(straight_path.total_length / 2)
