"""
Piecewise Hermite path through a list of waypoints.

Geometry queries are by arc length s (distance from the start of the path).
Internally a global parameter t in [0, N] is used, N being the segment count:
floor(t) selects the segment and the fractional part is its local parameter.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import brentq

from robotpathfinder import config
from robotpathfinder.path.segment import PathType, Segment, segment_between
from robotpathfinder.path.waypoint import Waypoint
from robotpathfinder.utils.errors import InvalidArgumentError
from robotpathfinder.utils.mathutils import mirror_angle, normalize_angle, reflect_point
from robotpathfinder.utils.vec2d import Vec2D

logger = logging.getLogger(__name__)


class Path:
    """
    A continuous curve through waypoints, one segment per consecutive pair.

    Adjacent segments share their endpoint position and tangent (C1 continuity),
    both derived from the shared waypoint. The curve shape is fixed at
    construction; base_radius and backwards only affect wheels_at().

    Transforms (mirror_left_right, mirror_front_back, retrace) return a new Path
    and leave the receiver untouched.
    """

    def __init__(
        self,
        waypoints: Sequence[Waypoint],
        alpha: float,
        path_type: PathType = PathType.QUINTIC_HERMITE,
        samples: int | None = None,
    ):
        """
        Args:
            waypoints: At least two waypoints, in traversal order
            alpha: Tangent magnitude at every waypoint (> 0). Larger values give wider turns
            path_type: Curve kind used for all segments
            samples: Simpson sample count per segment for length computation
                (default config.LENGTH_SAMPLES)
        """
        waypoints = tuple(waypoints)
        if len(waypoints) < 2:
            raise InvalidArgumentError(f"insufficient waypoints: need at least 2, got {len(waypoints)}")
        for i, wp in enumerate(waypoints):
            if not wp.is_finite():
                raise InvalidArgumentError(f"waypoint {i} has non-finite components: {wp}")
        try:
            alpha = float(alpha)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"alpha must be a number, got {alpha!r}") from None
        if not (math.isfinite(alpha) and alpha > 0):
            raise InvalidArgumentError(f"alpha must be a finite positive number, got {alpha!r}")
        if not isinstance(path_type, PathType):
            raise InvalidArgumentError(f"unknown path type {path_type!r}")

        self._waypoints: tuple[Waypoint, ...] = waypoints
        self._alpha = float(alpha)
        self._path_type = path_type
        self._base_radius = 0.0
        self._backwards = False
        self._segments: list[Segment] = [
            segment_between(waypoints[i], waypoints[i + 1], self._alpha, path_type)
            for i in range(len(waypoints) - 1)
        ]

        self._samples = config.LENGTH_SAMPLES
        self._seg_lengths = np.zeros(len(self._segments))
        self._boundaries = np.zeros(len(self._segments) + 1)
        self.compute_len(config.LENGTH_SAMPLES if samples is None else samples)

        logger.debug(
            "Built %s path: %d segments, alpha=%.3f, length=%.4f",
            path_type.value,
            len(self._segments),
            self._alpha,
            self.total_length,
        )

    @classmethod
    def _derive(
        cls,
        source: Path,
        waypoints: tuple[Waypoint, ...],
        segments: list[Segment],
        seg_lengths: np.ndarray,
        backwards: bool,
    ) -> Path:
        """Assemble a transformed path without re-validating or re-integrating."""
        path = cls.__new__(cls)
        path._waypoints = waypoints
        path._alpha = source._alpha
        path._path_type = source._path_type
        path._base_radius = source._base_radius
        path._backwards = backwards
        path._segments = segments
        path._samples = source._samples
        path._seg_lengths = np.array(seg_lengths, dtype=float)
        path._boundaries = np.concatenate(([0.0], np.cumsum(path._seg_lengths)))
        return path

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def waypoints(self) -> tuple[Waypoint, ...]:
        return self._waypoints

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def path_type(self) -> PathType:
        return self._path_type

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def samples(self) -> int:
        return self._samples

    @property
    def total_length(self) -> float:
        return float(self._boundaries[-1])

    @property
    def base_radius(self) -> float:
        return self._base_radius

    @property
    def backwards(self) -> bool:
        return self._backwards

    def set_base_radius(self, r: float) -> None:
        """Set half the wheel track width used by wheels_at(). Does not change the curve."""
        if not (math.isfinite(r) and r >= 0):
            raise InvalidArgumentError(f"base radius must be finite and >= 0, got {r!r}")
        self._base_radius = float(r)

    def set_backwards(self, backwards: bool) -> None:
        """Mark the path as driven in reverse; swaps the left/right wheel offsets."""
        self._backwards = bool(backwards)

    # ------------------------------------------------------------------
    # Length and parameter mapping
    # ------------------------------------------------------------------

    def compute_len(self, samples: int) -> float:
        """
        Integrate every segment with the given Simpson sample count and rebuild the
        cumulative boundary table. Returns the total length.
        """
        self._samples = max(3, int(samples))
        self._seg_lengths = np.array([seg.length(self._samples) for seg in self._segments])
        self._boundaries = np.concatenate(([0.0], np.cumsum(self._seg_lengths)))
        logger.trace("Path length with %d samples: %.6f", self._samples, self._boundaries[-1])  # type: ignore[attr-defined]
        return self.total_length

    def _split(self, t: float) -> tuple[int, float]:
        """Global parameter -> (segment index, local parameter), clamped to the path."""
        n = len(self._segments)
        t = min(float(n), max(0.0, float(t)))
        if t >= n:
            return n - 1, 1.0
        i = int(math.floor(t))
        return i, t - i

    def t2s(self, t: float) -> float:
        """Arc length from the start of the path to global parameter t (clamped to [0, N])."""
        i, u = self._split(t)
        if u >= 1.0:
            return float(self._boundaries[i + 1])
        return float(self._boundaries[i]) + self._segments[i].arc_length(u, self._samples)

    def s2t(self, s: float) -> float:
        """
        Global parameter at arc length s (clamped to [0, total_length]).

        The owning segment is found from the boundary table; the local parameter
        comes from inverting that segment's integrated speed with Brent's method to
        config.S2T_TOLERANCE within config.S2T_MAX_ITER iterations. If the solver
        does not converge the best estimate is returned, so the position error is
        bounded by the segment length times the final bracket width. Never raises.
        """
        total = self.total_length
        s = min(total, max(0.0, float(s)))
        n = len(self._segments)
        if s >= total:
            return float(n)
        i = int(np.searchsorted(self._boundaries, s, side="right")) - 1
        i = min(max(i, 0), n - 1)

        target = s - float(self._boundaries[i])
        seg_len = float(self._seg_lengths[i])
        if target <= 0.0:
            return float(i)
        if target >= seg_len:
            return float(i + 1)

        seg = self._segments[i]
        samples = self._samples

        def residual(u: float) -> float:
            return seg.arc_length(u, samples) - target

        # Transformed paths carry the source's length table; the rebuilt segment
        # can integrate a few ulps shorter, leaving no sign change to bracket.
        if residual(1.0) <= 0.0:
            return float(i + 1)

        u, result = brentq(
            residual,
            0.0,
            1.0,
            xtol=config.S2T_TOLERANCE,
            maxiter=config.S2T_MAX_ITER,
            full_output=True,
            disp=False,
        )
        if not result.converged:
            logger.warning(
                "s2t did not converge for s=%.6f in segment %d after %d iterations; using t=%.6f",
                s,
                i,
                result.iterations,
                u,
            )
        return i + min(1.0, max(0.0, float(u)))

    # ------------------------------------------------------------------
    # Geometry by global parameter
    # ------------------------------------------------------------------

    def at_t(self, t: float) -> Vec2D:
        i, u = self._split(t)
        return self._segments[i].position(u)

    def deriv_at_t(self, t: float) -> Vec2D:
        i, u = self._split(t)
        return self._segments[i].velocity(u)

    def second_deriv_at_t(self, t: float) -> Vec2D:
        i, u = self._split(t)
        return self._segments[i].acceleration(u)

    # ------------------------------------------------------------------
    # Geometry by arc length
    # ------------------------------------------------------------------

    def at(self, s: float) -> Vec2D:
        """Position at arc length s."""
        return self.at_t(self.s2t(s))

    def deriv_at(self, s: float) -> Vec2D:
        """Parametric derivative dC/dt at arc length s; its direction is the direction of travel."""
        return self.deriv_at_t(self.s2t(s))

    def second_deriv_at(self, s: float) -> Vec2D:
        return self.second_deriv_at_t(self.s2t(s))

    def heading_at(self, s: float) -> float:
        return self.deriv_at(s).angle()

    def curvature_at(self, s: float) -> float:
        i, u = self._split(self.s2t(s))
        return self._segments[i].curvature(u)

    def wheels_at(self, s: float) -> tuple[Vec2D, Vec2D]:
        """
        Left and right wheel positions at arc length s.

        The unit normal n is the unit tangent rotated 90 degrees counter-clockwise.
        Driving forwards the left wheel is at p + r*n and the right at p - r*n; when
        backwards is set the robot faces against the tangent, so the two swap.
        """
        t = self.s2t(s)
        position = self.at_t(t)
        normal = self.deriv_at_t(t).normalized().rotated90()
        offset = normal * (-self._base_radius if self._backwards else self._base_radius)
        return position + offset, position - offset

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def _reflected(self, ref: float, backwards: bool) -> Path:
        origin = self._waypoints[0].position
        waypoints = tuple(
            Waypoint(
                *reflect_point(wp.position, origin, ref),
                heading=mirror_angle(wp.heading, ref),
                velocity=wp.velocity,
            )
            for wp in self._waypoints
        )
        segments = [
            segment_between(waypoints[i], waypoints[i + 1], self._alpha, self._path_type)
            for i in range(len(waypoints) - 1)
        ]
        # Reflection is an isometry: segment lengths carry over unchanged
        return Path._derive(self, waypoints, segments, self._seg_lengths, backwards)

    def mirror_left_right(self) -> Path:
        """
        Reflect across the line through the first waypoint along its heading.

        Every left turn becomes a right turn; the start pose is unchanged.
        """
        return self._reflected(self._waypoints[0].heading, self._backwards)

    def mirror_front_back(self) -> Path:
        """
        Reflect across the line through the first waypoint perpendicular to its heading.

        Forward motion becomes backward motion, so the backwards flag is toggled.
        Traversal order is kept, unlike retrace().
        """
        return self._reflected(self._waypoints[0].heading + math.pi / 2, not self._backwards)

    def retrace(self) -> Path:
        """
        The same curve driven from its end back to its start.

        Segment order and each segment's parametrization are reversed and the
        backwards flag is toggled: retrace().at(L - s) == at(s).
        """
        waypoints = tuple(
            Waypoint(wp.x, wp.y, heading=normalize_angle(wp.heading + math.pi), velocity=wp.velocity)
            for wp in reversed(self._waypoints)
        )
        segments = [seg.reversed() for seg in reversed(self._segments)]
        return Path._derive(self, waypoints, segments, self._seg_lengths[::-1], not self._backwards)

    def __repr__(self) -> str:
        return (
            f"Path(type={self._path_type.value}, segments={len(self._segments)}, "
            f"alpha={self._alpha}, length={self.total_length:.4f})"
        )
