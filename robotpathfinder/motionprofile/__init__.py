from .profile import MotionProfile, sample_moments
from .trapezoidal import TrapezoidalMotionProfile

__all__ = [
    "MotionProfile",
    "TrapezoidalMotionProfile",
    "sample_moments",
]
