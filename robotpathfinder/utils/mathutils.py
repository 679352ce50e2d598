"""
Scalar and angular helpers shared by paths and trajectories.
"""

import math

from .vec2d import Vec2D

TWO_PI = 2.0 * math.pi


def lerp(a: float, b: float, f: float) -> float:
    """Linear interpolation; f=0 gives a, f=1 gives b."""
    return a + (b - a) * f


def normalize_angle(angle: float) -> float:
    """Wrap angle to (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, TWO_PI)
    if wrapped <= 0.0:
        wrapped += TWO_PI
    return wrapped - math.pi


def angle_diff(a: float, b: float) -> float:
    """Signed shortest rotation from a to b, in (-pi, pi]."""
    return normalize_angle(b - a)


def langle(a: float, b: float, f: float) -> float:
    """
    Interpolate between two headings along the shortest arc.

    Unlike lerp, headings on either side of the +/-pi seam are blended through
    the seam: langle(3.0, -3.0, 0.5) is close to pi, not 0. Result is in (-pi, pi].
    """
    return normalize_angle(a + angle_diff(a, b) * f)


def mirror_angle(angle: float, ref: float) -> float:
    """Reflect a direction across a line with direction angle ref."""
    return normalize_angle(2.0 * ref - angle)


def reflect_point(p: Vec2D, origin: Vec2D, ref: float) -> Vec2D:
    """Reflect p across the line through origin with direction angle ref."""
    c = math.cos(2.0 * ref)
    s = math.sin(2.0 * ref)
    dx = p.x - origin.x
    dy = p.y - origin.y
    return Vec2D(origin.x + c * dx + s * dy, origin.y + s * dx - c * dy)


def curvature(d: Vec2D, dd: Vec2D) -> float:
    """
    Signed curvature of a parametric planar curve from its first and second derivatives.

    Positive for counter-clockwise (left) turns. Returns 0 where the curve is stationary.
    """
    denom = d.magnitude() ** 3
    if denom == 0.0:
        return 0.0
    return d.cross(dd) / denom
