"""Paths and compound shapes.

A Path is one contour made of edges; a CompoundShape is the filled region
described by several paths under a fill rule. Both are immutable: every
operation returns a new value.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from flatshadow.domain.segment import CubicSegment, Edge, LineSegment, Point


class FillRule(Enum):
    """Rule deciding which regions of overlapping paths are inside.

    - NONZERO: inside where the winding number is not zero
    - EVENODD: inside where the winding number is odd
    """

    NONZERO = "nonzero"
    EVENODD = "evenodd"


@dataclass(frozen=True, slots=True)
class Path:
    """An ordered sequence of connected edges.

    Each edge ends where the next one starts. A closed path is one contour
    of a filled region; its last edge ends at the first edge's start.

    Attributes:
        edges: Edges in drawing order
        closed: Whether the path is a closed contour
    """

    edges: tuple[Edge, ...]
    closed: bool = True

    @classmethod
    def polygon(cls, points: Sequence[tuple[float, float]], closed: bool = True) -> "Path":
        """Build a path of straight edges through the given vertices.

        Args:
            points: Vertex coordinates in order
            closed: Add the closing edge back to the first vertex

        Returns:
            Path made of LineSegments
        """
        vertices = [Point(float(x), float(y)) for x, y in points]
        if closed and len(vertices) > 1 and vertices[0] == vertices[-1]:
            vertices.pop()
        edges: list[Edge] = [
            LineSegment(vertices[i], vertices[i + 1]) for i in range(len(vertices) - 1)
        ]
        if closed and len(vertices) > 2:
            edges.append(LineSegment(vertices[-1], vertices[0]))
        return cls(edges=tuple(edges), closed=closed)

    @property
    def start(self) -> Point | None:
        return self.edges[0].start if self.edges else None

    @property
    def end(self) -> Point | None:
        return self.edges[-1].end if self.edges else None

    def is_empty(self) -> bool:
        return len(self.edges) == 0

    def is_continuous(self, tolerance: float = 1e-9) -> bool:
        """Check that consecutive edges share their joining points."""
        for current, following in zip(self.edges, self.edges[1:]):
            if current.end.distance_to(following.start) > tolerance:
                return False
        return True

    def control_points(self) -> list[Point]:
        """All on-curve and off-curve points, in drawing order."""
        points: list[Point] = []
        for edge in self.edges:
            points.extend(edge.points)
        return points

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of the control points.

        Contains the path; exact for paths made only of lines.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        points = self.control_points()
        if not points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return (min(xs), min(ys), max(xs), max(ys))

    def closed_copy(self) -> "Path":
        """Return a closed version of this path, adding a closing line if needed."""
        if self.closed or not self.edges:
            return Path(self.edges, closed=True)
        edges = list(self.edges)
        if self.end != self.start:
            edges.append(LineSegment(self.end, self.start))
        return Path(tuple(edges), closed=True)

    def reversed(self) -> "Path":
        return Path(tuple(edge.reversed() for edge in reversed(self.edges)), self.closed)

    def translated(self, dx: float, dy: float) -> "Path":
        return Path(tuple(edge.translated(dx, dy) for edge in self.edges), self.closed)

    def mapped(self, func: Callable[[Point], Point]) -> "Path":
        """Apply a point mapping to every control point.

        Only affine mappings keep curves exact.
        """
        edges: list[Edge] = []
        for edge in self.edges:
            if isinstance(edge, CubicSegment):
                edges.append(CubicSegment(*(func(p) for p in edge.points)))
            else:
                edges.append(LineSegment(func(edge.start), func(edge.end)))
        return Path(tuple(edges), self.closed)

    def transformed(self, scale: float, dx: float, dy: float) -> "Path":
        """Uniformly scale about the origin, then translate."""
        return self.mapped(lambda p: Point(p.x * scale + dx, p.y * scale + dy))


@dataclass(frozen=True, slots=True)
class CompoundShape:
    """A filled region made of several paths.

    Used for glyphs with holes or disjoint parts. Owned by the caller and
    never mutated; derived shapes are new instances.

    Attributes:
        paths: Contours in order
        fill_rule: Rule resolving overlapping contours
    """

    paths: tuple[Path, ...] = field(default_factory=tuple)
    fill_rule: FillRule = FillRule.NONZERO

    @classmethod
    def from_paths(
        cls, paths: Iterable[Path], fill_rule: FillRule = FillRule.NONZERO
    ) -> "CompoundShape":
        return cls(paths=tuple(paths), fill_rule=fill_rule)

    def is_empty(self) -> bool:
        """Check if the shape has no edges at all."""
        return all(path.is_empty() for path in self.paths)

    @property
    def edge_count(self) -> int:
        return sum(len(path.edges) for path in self.paths)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Bounding box of all non-empty paths.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        boxes = [path.bounding_box() for path in self.paths if not path.is_empty()]
        if not boxes:
            return (0.0, 0.0, 0.0, 0.0)
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    def translated(self, dx: float, dy: float) -> "CompoundShape":
        return CompoundShape(tuple(p.translated(dx, dy) for p in self.paths), self.fill_rule)

    def mapped(self, func: Callable[[Point], Point]) -> "CompoundShape":
        return CompoundShape(tuple(p.mapped(func) for p in self.paths), self.fill_rule)

    def transformed(self, scale: float, dx: float, dy: float) -> "CompoundShape":
        return CompoundShape(
            tuple(p.transformed(scale, dx, dy) for p in self.paths), self.fill_rule
        )

    def closed_copy(self) -> "CompoundShape":
        return CompoundShape(tuple(p.closed_copy() for p in self.paths), self.fill_rule)


Shape = Union[Path, CompoundShape]


def as_compound(shape: Shape) -> CompoundShape:
    """Normalize a single path or a compound shape into a CompoundShape.

    Args:
        shape: A Path or a CompoundShape

    Returns:
        The compound itself, or a one-path compound wrapping the path

    Raises:
        TypeError: If shape is neither a Path nor a CompoundShape
    """
    if isinstance(shape, CompoundShape):
        return shape
    if isinstance(shape, Path):
        return CompoundShape(paths=(shape,))
    raise TypeError(f"Expected Path or CompoundShape, got {type(shape).__name__}")
