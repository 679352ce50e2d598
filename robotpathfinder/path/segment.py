"""
Polynomial path segments.

A segment is one smooth planar curve piece C(t), t in [0, 1], defined by its
endpoint positions, tangents and second derivatives. The supported curve kinds
form a closed set (PathType); evaluation is shared and only the coefficient
solve depends on the kind.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import simpson

from robotpathfinder import config
from robotpathfinder.utils.mathutils import curvature
from robotpathfinder.utils.vec2d import Vec2D


class PathType(Enum):
    """Curve kind used for every segment of a path."""

    QUINTIC_HERMITE = "quintic_hermite"
    CUBIC_HERMITE = "cubic_hermite"
    BEZIER = "bezier"

    @property
    def degree(self) -> int:
        return 5 if self is PathType.QUINTIC_HERMITE else 3


def _odd_samples(samples: int | None) -> int:
    n = config.LENGTH_SAMPLES if samples is None else int(samples)
    n = max(3, n)
    return n if n % 2 == 1 else n + 1


def _horner(coeffs: NDArray, t: NDArray) -> NDArray:
    """Evaluate per-axis polynomials (coeffs shape (k, 2), lowest order first) at t shape (n,)."""
    result = np.broadcast_to(coeffs[-1], (t.shape[0], 2)).copy()
    tt = t[:, None]
    for i in range(coeffs.shape[0] - 2, -1, -1):
        result = result * tt + coeffs[i]
    return result


class Segment:
    """
    Polynomial segment between two waypoints.

    Quintic segments honour position, tangent and second derivative at both
    ends (C2 within the segment, continuous up to the 5th derivative).
    Cubic segments honour position and tangent only and ignore a0/a1.
    Bezier segments are the cubic with explicit control points (control_points).

    Evaluation clamps t to [0, 1]; Path guarantees in-range parameters in normal use.
    """

    def __init__(
        self,
        p0: Vec2D,
        p1: Vec2D,
        v0: Vec2D,
        v1: Vec2D,
        a0: Vec2D = Vec2D(0.0, 0.0),
        a1: Vec2D = Vec2D(0.0, 0.0),
        kind: PathType = PathType.QUINTIC_HERMITE,
    ):
        self.p0 = p0
        self.p1 = p1
        self.v0 = v0
        self.v1 = v1
        self.a0 = a0
        self.a1 = a1
        self.kind = kind

        if kind is PathType.QUINTIC_HERMITE:
            self.coeffs = self._solve_quintic()
        elif kind is PathType.BEZIER:
            self.coeffs = self._solve_bezier()
        else:
            self.coeffs = self._solve_cubic()

        # Pre-compute coefficient derivatives for faster evaluation
        self._prepare_derivative_coeffs()

    def _solve_quintic(self) -> NDArray:
        """
        Closed-form quintic Hermite coefficients on the unit interval.

        C(t) = c0 + c1*t + c2*t^2 + c3*t^3 + c4*t^4 + c5*t^5, solved per axis.
        """
        q0, qf = self.p0.as_array(), self.p1.as_array()
        v0, vf = self.v0.as_array(), self.v1.as_array()
        a0, af = self.a0.as_array(), self.a1.as_array()
        d = qf - q0
        return np.array(
            [
                q0,
                v0,
                a0 / 2.0,
                10 * d - 6 * v0 - 4 * vf - (3 * a0 - af) / 2.0,
                -15 * d + 8 * v0 + 7 * vf + (3 * a0 - 2 * af) / 2.0,
                6 * d - 3 * (v0 + vf) - (a0 - af) / 2.0,
            ]
        )

    def _solve_cubic(self) -> NDArray:
        q0, qf = self.p0.as_array(), self.p1.as_array()
        v0, vf = self.v0.as_array(), self.v1.as_array()
        return np.array(
            [
                q0,
                v0,
                3 * (qf - q0) - 2 * v0 - vf,
                2 * (q0 - qf) + v0 + vf,
            ]
        )

    def _solve_bezier(self) -> NDArray:
        """
        Cubic Bezier through the Hermite end conditions.

        Control points are p0, p0 + v0/3, p1 - v1/3 and p1, kept in
        control_points; the power basis form is used for evaluation.
        """
        q0, qf = self.p0.as_array(), self.p1.as_array()
        c1 = q0 + self.v0.as_array() / 3.0
        c2 = qf - self.v1.as_array() / 3.0
        self.control_points = np.array([q0, c1, c2, qf])
        return np.array(
            [
                q0,
                3 * (c1 - q0),
                3 * (c2 - 2 * c1 + q0),
                qf - 3 * c2 + 3 * c1 - q0,
            ]
        )

    def _prepare_derivative_coeffs(self):
        """Pre-compute coefficients for velocity and acceleration."""
        k = self.coeffs.shape[0]
        self.vel_coeffs = self.coeffs[1:] * np.arange(1, k, dtype=float)[:, None]
        self.acc_coeffs = self.vel_coeffs[1:] * np.arange(1, k - 1, dtype=float)[:, None]

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def _clamp(t: float) -> float:
        return min(1.0, max(0.0, float(t)))

    def position(self, t: float) -> Vec2D:
        return Vec2D.from_array(_horner(self.coeffs, np.array([self._clamp(t)]))[0])

    def velocity(self, t: float) -> Vec2D:
        """First derivative dC/dt (not unit length)."""
        return Vec2D.from_array(_horner(self.vel_coeffs, np.array([self._clamp(t)]))[0])

    def acceleration(self, t: float) -> Vec2D:
        """Second derivative d2C/dt2."""
        return Vec2D.from_array(_horner(self.acc_coeffs, np.array([self._clamp(t)]))[0])

    def speeds(self, ts: NDArray) -> NDArray:
        """|dC/dt| at each (clamped) parameter in ts."""
        ts = np.clip(np.asarray(ts, dtype=float), 0.0, 1.0)
        return np.linalg.norm(_horner(self.vel_coeffs, ts), axis=1)

    def speed(self, t: float) -> float:
        """Arc length integrand |dC/dt|."""
        return float(self.speeds(np.array([t]))[0])

    def curvature(self, t: float) -> float:
        """Signed curvature; positive when turning left."""
        return curvature(self.velocity(t), self.acceleration(t))

    # ------------------------------------------------------------------
    # Arc length
    # ------------------------------------------------------------------

    def arc_length(self, t: float, samples: int | None = None) -> float:
        """
        Arc length from 0 to t by composite Simpson's rule.

        samples is the number of integration points (made odd, at least 3). It is
        the accuracy/cost knob: error falls off roughly as samples^-4 for these
        smooth integrands.
        """
        t = self._clamp(t)
        if t == 0.0:
            return 0.0
        n = _odd_samples(samples)
        ts = np.linspace(0.0, t, n)
        return float(simpson(self.speeds(ts), x=ts))

    def length(self, samples: int | None = None) -> float:
        return self.arc_length(1.0, samples)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def reversed(self) -> Segment:
        """The same curve traversed from end to start: C'(t) = C(1 - t)."""
        return Segment(self.p1, self.p0, -self.v1, -self.v0, self.a1, self.a0, self.kind)

    def __repr__(self) -> str:
        return (
            f"Segment(kind={self.kind.value}, p0=({self.p0.x:.3f}, {self.p0.y:.3f}), "
            f"p1=({self.p1.x:.3f}, {self.p1.y:.3f}))"
        )


def segment_between(start, end, alpha: float, kind: PathType) -> Segment:
    """Build the segment joining two waypoints with tangents scaled by alpha."""
    return Segment(
        start.position,
        end.position,
        start.tangent(alpha),
        end.tangent(alpha),
        kind=kind,
    )
