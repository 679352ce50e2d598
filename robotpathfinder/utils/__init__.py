from .errors import InvalidArgumentError
from .vec2d import Vec2D

__all__ = ["InvalidArgumentError", "Vec2D"]
