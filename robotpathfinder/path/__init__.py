from .path import Path
from .segment import PathType, Segment
from .waypoint import Waypoint

__all__ = ["Path", "PathType", "Segment", "Waypoint"]
