"""
Central configuration for robotpathfinder tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("RPF_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default
    return max(minimum, value)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default
    if not value > 0:
        logger.warning(f"Ignoring non-positive {name}={raw!r}, using {default}")
        return default
    return value


# Simpson's rule sample count per segment for arc length integration.
# Higher is more accurate and proportionally slower; even values are bumped to odd.
LENGTH_SAMPLES: int = _env_int("RPF_LENGTH_SAMPLES", 101, 3)

# Arc length -> parameter inversion (Brent's method) tolerance on t, and its iteration cap.
S2T_TOLERANCE: float = _env_float("RPF_S2T_TOLERANCE", 1e-10)
S2T_MAX_ITER: int = _env_int("RPF_S2T_MAX_ITER", 100, 1)

# Number of moments a producer emits when sampling a motion profile
DEFAULT_SAMPLE_COUNT: int = _env_int("RPF_SAMPLE_COUNT", 500, 2)

LOG_LEVEL_DEFAULT: str = "INFO"
