"""
CLI entry point for the rpf-sample command.

Builds a path from waypoints given on the command line, binds a trapezoidal
trajectory to it and prints the sampled trajectory as CSV.
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from collections.abc import Sequence

from robotpathfinder import config
from robotpathfinder.config import TRACE
from robotpathfinder.motionprofile.trapezoidal import TrapezoidalMotionProfile
from robotpathfinder.path.path import Path
from robotpathfinder.path.segment import PathType
from robotpathfinder.path.waypoint import Waypoint
from robotpathfinder.trajectory.specs import RobotSpecs, TrajectoryParams
from robotpathfinder.trajectory.tank import TankDriveTrajectory
from robotpathfinder.trajectory.trajectory import Trajectory
from robotpathfinder.utils.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

CSV_FIELDS = ["time", "distance", "velocity", "acceleration", "heading", "x", "y"]
TANK_FIELDS = ["left_distance", "right_distance", "left_velocity", "right_velocity", "curvature"]


def parse_waypoint(raw: str) -> Waypoint:
    """Parse 'X,Y,HEADING' or 'X,Y,HEADING,VELOCITY' (heading in radians)."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) not in (3, 4):
        raise argparse.ArgumentTypeError(f"expected X,Y,HEADING[,VELOCITY], got {raw!r}")
    try:
        vals = [float(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"non-numeric waypoint {raw!r}") from None
    return Waypoint(vals[0], vals[1], vals[2], vals[3] if len(vals) == 4 else None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sample a robot trajectory through waypoints")
    parser.add_argument('-w', '--waypoint', dest='waypoints', action='append', type=parse_waypoint,
                        default=[], metavar='X,Y,HEADING', help='Waypoint (repeat, at least 2)')
    parser.add_argument('--alpha', type=float, default=10.0, help='Tangent magnitude at waypoints')
    parser.add_argument('--path-type', choices=[t.value for t in PathType],
                        default=PathType.QUINTIC_HERMITE.value, help='Segment curve kind')
    parser.add_argument('--max-velocity', type=float, default=1.0, help='Max velocity')
    parser.add_argument('--max-acceleration', type=float, default=1.0, help='Max acceleration')
    parser.add_argument('--base-width', type=float, default=None, help='Wheel track width (tank drive)')
    parser.add_argument('--samples', type=int, default=config.DEFAULT_SAMPLE_COUNT,
                        help='Number of moments to generate')
    parser.add_argument('--dt', type=float, default=None,
                        help='Output period in seconds (default: one row per moment)')
    parser.add_argument('--retrace', action='store_true', help='Output the retraced trajectory')
    parser.add_argument('--mirror', choices=['left-right', 'front-back'], help='Mirror the trajectory')

    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase verbosity; -v=INFO, -vv=DEBUG, -vvv=TRACE')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Enable quiet logging (WARNING level)')
    parser.add_argument('--log-level', choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set specific log level')
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.log_level:
        return TRACE if args.log_level == 'TRACE' else getattr(logging, args.log_level)
    if args.verbose >= 3 or config.TRACE_ENABLED:
        return TRACE
    if args.verbose >= 2:
        return logging.DEBUG
    if args.verbose == 1:
        return logging.INFO
    if args.quiet:
        return logging.WARNING
    return getattr(logging, config.LOG_LEVEL_DEFAULT)


def build_trajectory(args: argparse.Namespace) -> Trajectory:
    path = Path(args.waypoints, args.alpha, PathType(args.path_type))
    specs = RobotSpecs(args.max_velocity, args.max_acceleration, args.base_width)
    params = TrajectoryParams(is_tank=args.base_width is not None, sample_count=args.samples)
    traj = Trajectory.from_profile(path, TrapezoidalMotionProfile.for_path(path, specs), specs, params)

    if args.mirror == 'left-right':
        traj = traj.mirror_left_right()
    elif args.mirror == 'front-back':
        traj = traj.mirror_front_back()
    if args.retrace:
        traj = traj.retrace()
    return traj


def write_csv(traj: Trajectory, out, dt: float | None = None) -> int:
    """
    Write trajectory rows to out; returns the number of rows written.

    Tank drive trajectories get extra per-wheel columns (TANK_FIELDS).
    """
    if dt is None:
        times = [m.time for m in traj.moments]
    else:
        n = int(traj.total_time() / dt) + 1
        times = [i * dt for i in range(n)]
        if times[-1] < traj.total_time():
            times.append(traj.total_time())

    tank = TankDriveTrajectory(traj) if traj.is_tank() else None

    writer = csv.writer(out)
    writer.writerow(CSV_FIELDS + TANK_FIELDS if tank is not None else CSV_FIELDS)
    for t in times:
        m = traj.get(t)
        p = traj.path.at(abs(m.distance))
        values = [m.time, m.distance, m.velocity, m.acceleration, m.heading, p.x, p.y]
        if tank is not None:
            w = tank.get(t)
            values += [w.left_distance, w.right_distance, w.left_velocity, w.right_velocity, w.curvature]
        writer.writerow([f"{v:.6f}" for v in values])
    return len(times)


def main(argv: Sequence[str] | None = None, out=None) -> int:
    """Main entry point for rpf-sample."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=_log_level(args),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    if args.dt is not None and args.dt <= 0:
        logger.error(f"--dt must be positive, got {args.dt}")
        return 2

    try:
        traj = build_trajectory(args)
    except InvalidArgumentError as e:
        logger.error(f"Failed to build trajectory: {e}")
        return 2

    logger.info(f"Trajectory: length={traj.path.total_length:.4f} total_time={traj.total_time():.4f}")
    rows = write_csv(traj, out if out is not None else sys.stdout, args.dt)
    logger.debug(f"Wrote {rows} rows")
    return 0


def main_entry():
    """Entry point for the rpf-sample command."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
