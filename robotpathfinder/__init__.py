"""
robotpathfinder Python Package

Smooth paths for wheeled robots from sparse waypoints, and time-indexed
trajectories over them.

Key components:
- Path: piecewise Hermite curve with arc-length queries and mirror/retrace transforms
- Trajectory: time-ordered moments bound to a Path, interpolated by time
- TankDriveTrajectory: left/right wheel split of a tank drive Trajectory
- TrapezoidalMotionProfile: simple producer of moment sequences
"""

from . import config
from ._version import __version__
from .motionprofile import MotionProfile, TrapezoidalMotionProfile, sample_moments
from .path import Path, PathType, Segment, Waypoint
from .trajectory import Moment, RobotSpecs, TankDriveMoment, TankDriveTrajectory, Trajectory, TrajectoryParams
from .utils.errors import InvalidArgumentError
from .utils.mathutils import langle, lerp
from .utils.vec2d import Vec2D

__all__ = [
    "__version__",
    "config",
    "InvalidArgumentError",
    "Moment",
    "MotionProfile",
    "Path",
    "PathType",
    "RobotSpecs",
    "Segment",
    "TankDriveMoment",
    "TankDriveTrajectory",
    "Trajectory",
    "TrajectoryParams",
    "TrapezoidalMotionProfile",
    "Vec2D",
    "Waypoint",
    "langle",
    "lerp",
    "sample_moments",
]
