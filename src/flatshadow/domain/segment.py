"""Core geometric types for outline edges.

This module defines the value types the silhouette engine works on:
- Point: A 2D point
- CubicSegment: A cubic Bezier edge
- LineSegment: A straight edge
- Direction: Light direction and shadow length
"""

import math
from dataclasses import dataclass
from typing import Union

from flatshadow.exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in drawing units
        y: Y coordinate in drawing units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linearly interpolate towards another point.

        Args:
            other: Target point (reached at t=1)
            t: Interpolation parameter

        Returns:
            Interpolated point
        """
        return Point(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True, slots=True)
class CubicSegment:
    """A cubic Bezier edge from start to end.

    Consumers must not assume the control polygon is convex. A segment whose
    four points coincide is valid input; it simply has no tangent crossings.

    Attributes:
        start: On-curve start point
        control1: Start-side control point
        control2: End-side control point
        end: On-curve end point
    """

    start: Point
    control1: Point
    control2: Point
    end: Point

    @property
    def points(self) -> tuple[Point, Point, Point, Point]:
        return (self.start, self.control1, self.control2, self.end)

    def reversed(self) -> "CubicSegment":
        """Return the same curve traversed from end to start."""
        return CubicSegment(self.end, self.control2, self.control1, self.start)

    def translated(self, dx: float, dy: float) -> "CubicSegment":
        return CubicSegment(*(p.translated(dx, dy) for p in self.points))

    def to_cubic(self) -> "CubicSegment":
        return self

    def is_degenerate(self, tolerance: float = 0.0) -> bool:
        """Check whether every control point lies within tolerance of the start.

        Args:
            tolerance: Maximum distance still considered coincident

        Returns:
            True if the segment collapses to a single point
        """
        return all(self.start.distance_to(p) <= tolerance for p in self.points[1:])

    def is_finite(self) -> bool:
        return all(p.is_finite() for p in self.points)


@dataclass(frozen=True, slots=True)
class LineSegment:
    """A straight edge from start to end.

    Equivalent to a cubic whose control points coincide with its endpoints.
    """

    start: Point
    end: Point

    @property
    def points(self) -> tuple[Point, Point]:
        return (self.start, self.end)

    def reversed(self) -> "LineSegment":
        return LineSegment(self.end, self.start)

    def translated(self, dx: float, dy: float) -> "LineSegment":
        return LineSegment(self.start.translated(dx, dy), self.end.translated(dx, dy))

    def to_cubic(self) -> CubicSegment:
        """Express the line as a cubic with coincident control points."""
        return CubicSegment(self.start, self.start, self.end, self.end)

    def is_degenerate(self, tolerance: float = 0.0) -> bool:
        return self.start.distance_to(self.end) <= tolerance

    def is_finite(self) -> bool:
        return self.start.is_finite() and self.end.is_finite()


Edge = Union[CubicSegment, LineSegment]


@dataclass(frozen=True, slots=True)
class Direction:
    """Light direction and shadow length.

    The angle is measured in degrees, counter-clockwise from the positive
    x axis in a y-up frame (clockwise on a y-down canvas such as SVG).

    Attributes:
        angle: Direction angle in degrees
        distance: Length of the translation vector
    """

    angle: float
    distance: float

    @property
    def vector(self) -> tuple[float, float]:
        """Translation vector (dx, dy) for this direction."""
        radians = math.radians(self.angle)
        return (self.distance * math.cos(radians), self.distance * math.sin(radians))

    @classmethod
    def from_vector(cls, dx: float, dy: float) -> "Direction":
        """Build a direction from a translation vector."""
        return cls(angle=math.degrees(math.atan2(dy, dx)), distance=math.hypot(dx, dy))

    def validate(self) -> tuple[float, float]:
        """Check the direction can drive a shadow and return its vector.

        Returns:
            Translation vector (dx, dy)

        Raises:
            InvalidArgumentError: If angle or distance is non-finite, or the
                distance is zero
        """
        if not math.isfinite(self.angle):
            raise InvalidArgumentError("direction", f"angle must be finite, got {self.angle}")
        if not math.isfinite(self.distance):
            raise InvalidArgumentError(
                "direction", f"distance must be finite, got {self.distance}"
            )
        if self.distance == 0:
            raise InvalidArgumentError("direction", "distance must not be zero")
        dx, dy = self.vector
        if dx == 0 and dy == 0:
            raise InvalidArgumentError("direction", "translation vector is zero")
        return dx, dy
