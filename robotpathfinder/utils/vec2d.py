"""
Immutable 2D vector used for positions, tangents and wheel offsets.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Vec2D:
    x: float
    y: float

    @classmethod
    def from_array(cls, arr: Sequence[float] | NDArray) -> Vec2D:
        return cls(float(arr[0]), float(arr[1]))

    @classmethod
    def from_angle(cls, angle: float, magnitude: float = 1.0) -> Vec2D:
        return cls(magnitude * math.cos(angle), magnitude * math.sin(angle))

    def as_array(self) -> NDArray:
        return np.array([self.x, self.y], dtype=float)

    def __iter__(self):
        yield self.x
        yield self.y

    def __add__(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2D) -> Vec2D:
        return Vec2D(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vec2D:
        return Vec2D(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vec2D:
        return Vec2D(self.x / k, self.y / k)

    def __neg__(self) -> Vec2D:
        return Vec2D(-self.x, -self.y)

    def dot(self, other: Vec2D) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2D) -> float:
        """Z component of the 3D cross product; positive when other is counter-clockwise of self."""
        return self.x * other.y - self.y * other.x

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2D:
        """Unit vector in the same direction. The zero vector is returned unchanged."""
        mag = self.magnitude()
        if mag == 0.0:
            return self
        return Vec2D(self.x / mag, self.y / mag)

    def rotated90(self) -> Vec2D:
        """Rotate counter-clockwise by 90 degrees."""
        return Vec2D(-self.y, self.x)

    def dist_to(self, other: Vec2D) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle(self) -> float:
        """Direction in radians, (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def is_close(self, other: Vec2D, tol: float = 1e-9) -> bool:
        return self.dist_to(other) <= tol
