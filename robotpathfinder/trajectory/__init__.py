from .moment import Moment, TankDriveMoment
from .specs import RobotSpecs, TrajectoryParams
from .tank import TankDriveTrajectory
from .trajectory import Trajectory

__all__ = ["Moment", "RobotSpecs", "TankDriveMoment", "TankDriveTrajectory", "Trajectory", "TrajectoryParams"]
