"""Two-bearing triangulation via the law of sines.

Triangle O (first observer), P (second observer), M (target). With alpha and
beta the standard angles of the two sight lines and gamma the direction of
O -> P, the oriented law of sines gives

    OM = OP * sin(beta - gamma) / sin(beta - alpha)

OM is signed: negative when the rays cross behind the first observer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from endereye.geometry.bearing import bearing_direction, bearing_to_angle

log = logging.getLogger(__name__)

DEFAULT_MIN_SEPARATION = 1.0
DEFAULT_PARALLEL_TOLERANCE = 1e-9


@dataclass(frozen=True)
class ObservationPoint:
    x: float
    z: float
    bearing_degrees: float


@dataclass(frozen=True)
class TriangulationResult:
    x: float
    z: float
    distance_from_first: float


class ErrorKind(Enum):
    INVALID_INPUT = "invalid-input"
    POINTS_TOO_CLOSE = "points-too-close"
    PARALLEL_BEARINGS = "parallel-bearings"


@dataclass(frozen=True)
class CalculationError:
    kind: ErrorKind
    message: str = ""


def _is_ahead(ox: float, oz: float, bearing_degrees: float, x: float, z: float) -> bool:
    dx, dz = bearing_direction(bearing_degrees)
    return (x - ox) * dx + (z - oz) * dz >= -1e-9


def _is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int | float | np.integer | np.floating)


def solve(
    p1: ObservationPoint,
    p2: ObservationPoint,
    *,
    min_separation: float = DEFAULT_MIN_SEPARATION,
    parallel_tolerance: float = DEFAULT_PARALLEL_TOLERANCE,
) -> TriangulationResult | CalculationError:
    """Intersect the sight lines of two observation points.

    Points closer than ``min_separation`` are rejected; a separation of exactly
    ``min_separation`` is accepted. Sight lines whose crossing angle has a sine
    below ``parallel_tolerance`` are treated as parallel.

    Returns:
        TriangulationResult, or CalculationError describing why no unique
        intersection exists.
    """
    fields = [p1.x, p1.z, p1.bearing_degrees, p2.x, p2.z, p2.bearing_degrees]
    if not all(_is_number(v) for v in fields):
        return CalculationError(ErrorKind.INVALID_INPUT, "all six values must be numbers")
    values = np.array(fields, dtype=np.float64)
    if not np.all(np.isfinite(values)):
        return CalculationError(ErrorKind.INVALID_INPUT, "all six values must be finite numbers")

    x1, z1, bearing1, x2, z2, bearing2 = (float(v) for v in values)
    alpha = bearing_to_angle(bearing1)
    beta = bearing_to_angle(bearing2)

    op_dx = x2 - x1
    op_dz = z2 - z1
    op_length = float(np.hypot(op_dx, op_dz))
    if op_length < min_separation:
        return CalculationError(
            ErrorKind.POINTS_TOO_CLOSE,
            f"observation points are {op_length:.3f} apart (minimum {min_separation:g})",
        )

    gamma = math.atan2(op_dz, op_dx)

    sin_angle_m = math.sin(beta - alpha)
    if abs(sin_angle_m) < parallel_tolerance:
        return CalculationError(ErrorKind.PARALLEL_BEARINGS, "sight lines are parallel")

    sin_angle_p = math.sin(beta - gamma)
    om_length = op_length * sin_angle_p / sin_angle_m

    x = x1 + om_length * math.cos(alpha)
    z = z1 + om_length * math.sin(alpha)
    if not all(math.isfinite(v) for v in (x, z, om_length)):
        return CalculationError(ErrorKind.INVALID_INPUT, "coordinates too large to triangulate")
    log.debug(
        "alpha=%.4f beta=%.4f gamma=%.4f |OP|=%.3f OM=%.3f",
        alpha, beta, gamma, op_length, om_length,
    )

    if not (_is_ahead(x1, z1, bearing1, x, z) and _is_ahead(x2, z2, bearing2, x, z)):
        log.warning("sight lines cross behind an observer at (%.1f, %.1f)", x, z)

    return TriangulationResult(x=x, z=z, distance_from_first=abs(om_length))


def solve_values(
    x1: float,
    z1: float,
    bearing1: float,
    x2: float,
    z2: float,
    bearing2: float,
    **kwargs: float,
) -> TriangulationResult | CalculationError:
    """Six-number form of solve()."""
    return solve(
        ObservationPoint(x1, z1, bearing1),
        ObservationPoint(x2, z2, bearing2),
        **kwargs,
    )
