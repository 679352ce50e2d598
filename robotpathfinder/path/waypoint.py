from __future__ import annotations

import math
from dataclasses import dataclass

from robotpathfinder.utils.vec2d import Vec2D


@dataclass(frozen=True)
class Waypoint:
    """
    A point the path must pass through.

    heading is the direction of travel in radians. velocity is an optional
    speed hint for profile producers; None when unspecified.
    """

    x: float
    y: float
    heading: float = 0.0
    velocity: float | None = None

    @property
    def position(self) -> Vec2D:
        return Vec2D(self.x, self.y)

    def tangent(self, alpha: float) -> Vec2D:
        """Hermite end tangent: alpha * (cos(heading), sin(heading))."""
        return Vec2D.from_angle(self.heading, alpha)

    def is_finite(self) -> bool:
        values = [self.x, self.y, self.heading]
        if self.velocity is not None:
            values.append(self.velocity)
        return all(math.isfinite(v) for v in values)
