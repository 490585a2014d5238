"""Internal Bezier curve flattening algorithms.

This is an internal module used to turn outlines into polygons for the
boolean backend. Not intended for public use.
"""

import math

from flatshadow.domain import CubicSegment, Edge, LineSegment, Path, Point

MAX_DEPTH = 16


def _distance_to_chord(point: Point, start: Point, end: Point) -> float:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return point.distance_to(start)
    return abs((point.x - start.x) * dy - (point.y - start.y) * dx) / length


def flatten_cubic(segment: CubicSegment, tolerance: float, depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. A piece is flat once both
    control points lie within tolerance of its chord; the curve never leaves
    the convex hull of its control points, so the chord is then within
    tolerance of the curve.

    Args:
        segment: Cubic segment to flatten
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, including both endpoints
    """
    p0, p1, p2, p3 = segment.points

    # Check flatness
    distance = max(_distance_to_chord(p1, p0, p3), _distance_to_chord(p2, p0, p3))

    if distance <= tolerance or depth >= MAX_DEPTH:
        # Flat enough, return endpoints
        return [p0, p3]

    # Subdivide at t=0.5 using De Casteljau's algorithm
    # First level
    q1 = p0.lerp(p1, 0.5)
    q2 = p1.lerp(p2, 0.5)
    q3 = p2.lerp(p3, 0.5)

    # Second level
    r1 = q1.lerp(q2, 0.5)
    r2 = q2.lerp(q3, 0.5)

    # Third level (midpoint)
    mid = r1.lerp(r2, 0.5)

    left = flatten_cubic(CubicSegment(p0, q1, r1, mid), tolerance, depth + 1)
    right = flatten_cubic(CubicSegment(mid, r2, q3, p3), tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_edge(edge: Edge, tolerance: float) -> list[Point]:
    if isinstance(edge, LineSegment):
        return [edge.start, edge.end]
    return flatten_cubic(edge, tolerance)


def flatten_path(path: Path, tolerance: float) -> list[tuple[float, float]]:
    """Flatten a path into a vertex ring.

    Args:
        path: Path to flatten
        tolerance: Maximum distance from true curve

    Returns:
        Vertex coordinates with consecutive duplicates removed; the closing
        vertex is not repeated
    """
    ring: list[tuple[float, float]] = []
    for edge in path.edges:
        for point in flatten_edge(edge, tolerance):
            vertex = point.to_tuple()
            if not ring or ring[-1] != vertex:
                ring.append(vertex)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring
