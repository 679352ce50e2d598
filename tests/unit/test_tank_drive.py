import logging

import numpy as np
import pytest

from robotpathfinder import (
    InvalidArgumentError,
    Moment,
    RobotSpecs,
    TankDriveTrajectory,
    Trajectory,
    TrajectoryParams,
    TrapezoidalMotionProfile,
)

TOL = 1e-6
SPECS = RobotSpecs(max_velocity=5.0, max_acceleration=4.0, base_width=2.0)


@pytest.fixture
def tank(profiled_trajectory) -> TankDriveTrajectory:
    return TankDriveTrajectory(profiled_trajectory)


# ----------------------------------------------------------------------------
# Construction
# ----------------------------------------------------------------------------

@pytest.mark.unit
def test_requires_tank_trajectory(three_moment_trajectory):
    with pytest.raises(InvalidArgumentError, match="is_tank"):
        TankDriveTrajectory(three_moment_trajectory)


@pytest.mark.unit
def test_from_profile_binds_base(s_curve_path):
    profile = TrapezoidalMotionProfile.for_path(s_curve_path, SPECS)
    tank = TankDriveTrajectory.from_profile(
        s_curve_path, profile, SPECS, TrajectoryParams(is_tank=True, sample_count=50)
    )
    assert len(tank) == 50
    assert tank.path is s_curve_path
    assert s_curve_path.base_radius == 1.0
    assert tank.total_time() == tank.base.total_time()
    assert tank.initial_facing == tank.base.initial_facing
    assert tank.moments[0].relative_facing() == pytest.approx(0.0, abs=TOL)


@pytest.mark.unit
def test_straight_path_wheels_match_center(straight_path):
    profile = TrapezoidalMotionProfile.for_path(straight_path, SPECS)
    base = Trajectory.from_profile(straight_path, profile, SPECS, TrajectoryParams(is_tank=True, sample_count=100))
    tank = TankDriveTrajectory(base)
    for m, w in zip(base.moments, tank.moments):
        assert w.curvature == 0.0
        assert w.left_velocity == w.right_velocity == m.velocity
        assert w.left_acceleration == w.right_acceleration == m.acceleration
        assert w.left_distance == w.right_distance
    assert tank.moments[-1].left_distance == pytest.approx(straight_path.total_length, rel=1e-3)


# ----------------------------------------------------------------------------
# Wheel split
# ----------------------------------------------------------------------------

@pytest.mark.unit
def test_wheel_velocities_average_to_center(profiled_trajectory, tank):
    for m, w in zip(profiled_trajectory.moments, tank.moments):
        assert (w.left_velocity + w.right_velocity) / 2 == pytest.approx(m.velocity, abs=1e-9)
        assert (w.left_acceleration + w.right_acceleration) / 2 == pytest.approx(m.acceleration, abs=1e-9)


@pytest.mark.unit
def test_wheel_difference_is_turn_rate(profiled_trajectory, tank):
    width = profiled_trajectory.specs.base_width
    for m, w in zip(profiled_trajectory.moments, tank.moments):
        turn_rate = (w.right_velocity - w.left_velocity) / width
        assert turn_rate == pytest.approx(abs(m.velocity) * w.curvature, abs=1e-9)


@pytest.mark.unit
def test_left_turn_slows_left_wheel(tank):
    # The first segment of the s-curve turns left
    turning = [w for w in tank.moments if w.curvature > 1e-3 and w.left_velocity > 0]
    assert turning
    for w in turning:
        assert w.left_velocity < w.right_velocity


@pytest.mark.unit
def test_wheel_distances_integrate_velocity(tank):
    times = np.array([w.time for w in tank.moments])
    left = np.array([w.left_distance for w in tank.moments])
    velocity = np.array([w.left_velocity for w in tank.moments])
    assert left[0] == 0.0
    assert np.allclose(np.diff(left), np.diff(times) * (velocity[1:] + velocity[:-1]) / 2)


@pytest.mark.unit
def test_warns_when_wheel_exceeds_max_velocity(s_curve_path, caplog):
    length = s_curve_path.total_length
    moments = [
        Moment(distance=d, velocity=SPECS.max_velocity, acceleration=0.0, heading=0.0, time=d / SPECS.max_velocity)
        for d in np.linspace(0.0, length, 30)
    ]
    base = Trajectory(s_curve_path, moments, SPECS, TrajectoryParams(is_tank=True))
    with caplog.at_level(logging.WARNING):
        TankDriveTrajectory(base)
    assert "exceeds max_velocity" in caplog.text


# ----------------------------------------------------------------------------
# Lookup
# ----------------------------------------------------------------------------

@pytest.mark.unit
def test_get_interpolates_between_samples(tank):
    a, b = tank.moments[10], tank.moments[11]
    mid = tank.get((a.time + b.time) / 2)
    assert mid.left_velocity == pytest.approx((a.left_velocity + b.left_velocity) / 2)
    assert mid.right_distance == pytest.approx((a.right_distance + b.right_distance) / 2)
    assert mid.curvature == pytest.approx((a.curvature + b.curvature) / 2)
    assert tank.get(a.time) is a


@pytest.mark.unit
@pytest.mark.parametrize("time, index", [(-1.0, 0), (float("nan"), 0), (1e9, -1)])
def test_get_clamps(tank, time, index):
    assert tank.get(time) == tank.moments[index]


@pytest.mark.unit
def test_wheels_at_delegates_to_base(tank):
    t = tank.total_time() / 3
    assert tank.wheels_at(t) == tank.base.wheels_at(t)


# ----------------------------------------------------------------------------
# Transforms
# ----------------------------------------------------------------------------

@pytest.mark.unit
def test_mirror_left_right_swaps_wheels(tank):
    mirrored = tank.mirror_left_right()
    for w, mw in zip(tank.moments, mirrored.moments):
        assert mw.curvature == pytest.approx(-w.curvature, abs=TOL)
        assert mw.left_velocity == pytest.approx(w.right_velocity, abs=TOL)
        assert mw.right_velocity == pytest.approx(w.left_velocity, abs=TOL)
        assert mw.left_distance == pytest.approx(w.right_distance, abs=TOL)


@pytest.mark.unit
def test_mirror_front_back_negates_wheels(tank):
    mirrored = tank.mirror_front_back()
    assert mirrored.path.backwards
    for w, mw in zip(tank.moments, mirrored.moments):
        assert mw.left_velocity == pytest.approx(-w.left_velocity, abs=TOL)
        assert mw.right_velocity == pytest.approx(-w.right_velocity, abs=TOL)
        assert mw.left_distance == pytest.approx(-w.left_distance, abs=TOL)


@pytest.mark.unit
def test_retrace_replays_wheels_in_reverse(tank):
    retraced = tank.retrace()
    for w, rw in zip(reversed(tank.moments), retraced.moments):
        assert rw.time == pytest.approx(tank.total_time() - w.time)
        assert rw.left_velocity == pytest.approx(-w.left_velocity, abs=TOL)
        assert rw.right_velocity == pytest.approx(-w.right_velocity, abs=TOL)
    last, rlast = tank.moments[-1], retraced.moments[-1]
    assert rlast.left_distance == pytest.approx(-last.left_distance, abs=1e-6)
    assert rlast.right_distance == pytest.approx(-last.right_distance, abs=1e-6)
