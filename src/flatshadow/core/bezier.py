"""Cubic Bezier analysis for the silhouette engine.

This module provides:
- parameterize: control points to monomial coefficients
- crossing_parameters: where the tangent runs parallel to a direction
- split_at: de Casteljau subdivision
- point_at: curve evaluation

All functions are pure and stateless.
"""

import math

import structlog

from flatshadow.core.roots import DEFAULT_EPSILON, solve_quadratic_or_linear
from flatshadow.domain import CubicSegment, Edge, LineSegment, Point
from flatshadow.exceptions import InvalidArgumentError, NumericIndeterminateError

logger = structlog.get_logger(__name__)

DEFAULT_CROSSING_EPSILON = 1e-9


def parameterize(
    segment: CubicSegment,
) -> tuple[float, float, float, float, float, float, float, float]:
    """Convert control points to the monomial form of the curve.

    P(t) = (1-t)**3 P0 + 3(1-t)**2 t P1 + 3(1-t) t**2 P2 + t**3 P3
    becomes P(t) = a t**3 + b t**2 + c t + P0 per axis, with
    c = 3(P1 - P0), b = 3(P2 - P1) - c and a = P3 - P0 - c - b.

    Args:
        segment: Cubic segment

    Returns:
        Tuple (ax, ay, bx, by, cx, cy, x0, y0)
    """
    p0, p1, p2, p3 = segment.points
    cx = 3.0 * (p1.x - p0.x)
    cy = 3.0 * (p1.y - p0.y)
    bx = 3.0 * (p2.x - p1.x) - cx
    by = 3.0 * (p2.y - p1.y) - cy
    ax = p3.x - p0.x - cx - bx
    ay = p3.y - p0.y - cy - by
    return (ax, ay, bx, by, cx, cy, p0.x, p0.y)


def point_at(segment: CubicSegment, t: float) -> Point:
    """Evaluate the curve at parameter t."""
    ax, ay, bx, by, cx, cy, x0, y0 = parameterize(segment)
    return Point(
        ((ax * t + bx) * t + cx) * t + x0,
        ((ay * t + by) * t + cy) * t + y0,
    )


def crossing_parameters(
    segment: Edge,
    direction: tuple[float, float],
    epsilon: float = DEFAULT_CROSSING_EPSILON,
    root_epsilon: float = DEFAULT_EPSILON,
) -> list[float]:
    """Find the parameters where the tangent is parallel to a direction.

    The derivative 3a t**2 + 2b t + c is projected onto the perpendicular of
    (dx, dy); the roots of the resulting quadratic are where the projection
    of the curve onto the direction changes monotonicity. A cubic has at
    most two such points, so it splits into at most three monotonic pieces.

    Coefficients are normalised before solving, which keeps the roots
    finite for any root_epsilon above the subnormal range. A non-finite
    root that still comes back is logged and treated as no crossing.

    Args:
        segment: Cubic or line segment
        direction: Direction vector (dx, dy)
        epsilon: Crossings closer than this to 0, 1, or each other are
            dropped or merged
        root_epsilon: Solver tolerance on the normalised coefficients

    Returns:
        Crossing parameters strictly inside (0, 1), ascending, deduplicated.
        Empty for a zero direction, a straight line, or a degenerate curve.
    """
    dx, dy = direction
    if dx == 0 and dy == 0:
        return []
    if isinstance(segment, LineSegment):
        return []

    ax, ay, bx, by, cx, cy, _, _ = parameterize(segment)

    # Cross product of the derivative with (dx, dy)
    qa = 3.0 * (ay * dx - ax * dy)
    qb = 2.0 * (by * dx - bx * dy)
    qc = cy * dx - cx * dy

    scale = max(abs(qa), abs(qb), abs(qc))
    if scale == 0 or not math.isfinite(scale):
        return []

    roots = solve_quadratic_or_linear(qa / scale, qb / scale, qc / scale, root_epsilon)

    indeterminate = [r for r in roots if not math.isfinite(r)]
    if indeterminate:
        error = NumericIndeterminateError((qa, qb, qc), "solver returned a non-finite root")
        logger.warning(
            "Indeterminate root discarded",
            error=str(error),
            roots=[str(r) for r in indeterminate],
        )

    crossings: list[float] = []
    for t in sorted(r for r in roots if math.isfinite(r)):
        if not epsilon < t < 1.0 - epsilon:
            continue
        if crossings and t - crossings[-1] <= epsilon:
            continue
        crossings.append(t)

    return crossings


def split_at(segment: CubicSegment, t: float) -> tuple[CubicSegment, CubicSegment]:
    """Split a cubic at parameter t using de Casteljau's algorithm.

    Adjacent control points are interpolated at t three times; the two new
    control nets share the on-curve point P(t).

    Args:
        segment: Cubic segment to split
        t: Split parameter, strictly inside (0, 1)

    Returns:
        Tuple (head, tail) with head.end == tail.start == P(t)

    Raises:
        InvalidArgumentError: If t is not strictly inside (0, 1)
    """
    if not 0.0 < t < 1.0:
        raise InvalidArgumentError("t", f"split parameter must lie in (0, 1), got {t}")

    p0, p1, p2, p3 = segment.points
    m1 = p0.lerp(p1, t)
    m2 = p1.lerp(p2, t)
    m3 = p2.lerp(p3, t)
    m4 = m1.lerp(m2, t)
    m5 = m2.lerp(m3, t)
    mid = m4.lerp(m5, t)

    return (
        CubicSegment(p0, m1, m4, mid),
        CubicSegment(mid, m5, m3, p3),
    )
