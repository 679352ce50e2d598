"""
Pytest configuration and shared fixtures for robotpathfinder tests.

Provides reusable paths and trajectories used across the unit tests.
"""

import math
import os
import sys

import pytest

# Add the parent directory to Python path so we can import the package modules
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from robotpathfinder import (  # noqa: E402
    Moment,
    Path,
    RobotSpecs,
    Trajectory,
    TrajectoryParams,
    TrapezoidalMotionProfile,
    Waypoint,
)


# ============================================================================
# PATH FIXTURES
# ============================================================================

@pytest.fixture
def straight_path() -> Path:
    """Two waypoints 10 apart on the x axis, both heading along +x."""
    return Path([Waypoint(0.0, 0.0, 0.0), Waypoint(10.0, 0.0, 0.0)], alpha=5.0)


@pytest.fixture
def s_curve_path() -> Path:
    """Three-segment path with left and right turns."""
    return Path(
        [
            Waypoint(0.0, 0.0, math.pi / 2),
            Waypoint(-5.0, 10.0, 3 * math.pi / 4),
            Waypoint(-20.0, 20.0, math.pi / 2),
            Waypoint(-15.0, 35.0, math.pi / 4),
        ],
        alpha=20.0,
    )


# ============================================================================
# TRAJECTORY FIXTURES
# ============================================================================

@pytest.fixture
def three_moment_trajectory(straight_path) -> Trajectory:
    """Hand-made accelerate / cruise-down sequence over the straight path."""
    moments = [
        Moment(distance=0.0, velocity=0.0, acceleration=1.0, heading=0.0, time=0.0),
        Moment(distance=5.0, velocity=2.0, acceleration=0.0, heading=0.0, time=2.0),
        Moment(distance=10.0, velocity=0.0, acceleration=-1.0, heading=0.0, time=4.0),
    ]
    return Trajectory(straight_path, moments)


@pytest.fixture
def profiled_trajectory(s_curve_path) -> Trajectory:
    """Trapezoidal trajectory over the s-curve path, tank drive."""
    specs = RobotSpecs(max_velocity=5.0, max_acceleration=4.0, base_width=2.0)
    params = TrajectoryParams(is_tank=True, sample_count=200)
    profile = TrapezoidalMotionProfile.for_path(s_curve_path, specs)
    return Trajectory.from_profile(s_curve_path, profile, specs, params)


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "slow: Slow-running tests (dense sampling of paths)"
    )
