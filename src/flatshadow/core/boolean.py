"""Boolean operations on compound shapes.

The silhouette engine only needs a union (and an intersection for clipping)
of filled shapes. BooleanBackend describes that capability; ShapelyBackend
implements it on top of shapely by flattening curves into polygons.

Results are made of straight edges only. Exterior rings wind
counter-clockwise and holes clockwise, so they fill correctly under the
non-zero rule. Non-zero input is resolved with real winding numbers.
"""

from functools import reduce
from typing import Protocol

from shapely import get_parts
from shapely.geometry import LineString, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import polygonize, unary_union
from shapely.validation import make_valid

from flatshadow.config import GeometryConfig
from flatshadow.core._bezier import flatten_path
from flatshadow.domain import CompoundShape, FillRule, Path


class BooleanBackend(Protocol):
    """Boolean operations between filled shapes (winding-rule aware)."""

    def union(self, a: CompoundShape, b: CompoundShape) -> CompoundShape: ...

    def intersection(self, a: CompoundShape, b: CompoundShape) -> CompoundShape: ...


def _polygonal(geometry: BaseGeometry) -> BaseGeometry:
    """Keep only the polygonal parts of a geometry."""
    if geometry.is_empty:
        return Polygon()
    if geometry.geom_type in ("Polygon", "MultiPolygon"):
        return geometry
    if geometry.geom_type == "GeometryCollection":
        parts = [g for g in geometry.geoms if g.geom_type in ("Polygon", "MultiPolygon")]
        return unary_union(parts) if parts else Polygon()
    return Polygon()


def winding_number(point: tuple[float, float], vertices: list[tuple[float, float]]) -> int:
    """Winding number of a closed vertex ring around a point.

    Counter-clockwise rings count positive. Points on the ring give an
    unspecified result.
    """
    x, y = point
    winding = 0
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:] + vertices[:1]):
        side = (x1 - x0) * (y - y0) - (x - x0) * (y1 - y0)
        if y0 <= y < y1 and side > 0:
            winding += 1
        elif y1 <= y < y0 and side < 0:
            winding -= 1
    return winding


class ShapelyBackend:
    """BooleanBackend implementation using shapely.

    Example:
        backend = ShapelyBackend()
        merged = backend.union(square, square.translated(0.5, 0.5))
    """

    def __init__(self, config: GeometryConfig | None = None) -> None:
        """Initialize the backend.

        Args:
            config: Geometry tolerances for flattening and sliver removal
        """
        self.config = config or GeometryConfig()

    def to_geometry(self, shape: CompoundShape) -> BaseGeometry:
        """Convert a compound shape into a valid shapely geometry.

        Each path is closed and flattened into a ring. Even-odd shapes fold
        their rings with symmetric difference. Non-zero shapes are split
        into the faces of the arrangement of all ring edges; a face is
        filled when the winding number at one of its interior points is
        not zero.

        Args:
            shape: Shape to convert

        Returns:
            Polygon or MultiPolygon (possibly empty)
        """
        rings: list[list[tuple[float, float]]] = []
        for path in shape.paths:
            if path.is_empty():
                continue
            vertices = flatten_path(path.closed_copy(), self.config.flatten_tolerance)
            if len(vertices) >= 3:
                rings.append(vertices)

        if not rings:
            return Polygon()

        if shape.fill_rule == FillRule.EVENODD:
            polygons = []
            for vertices in rings:
                repaired = _polygonal(make_valid(Polygon(vertices)))
                if not repaired.is_empty and repaired.area > self.config.min_area:
                    polygons.append(repaired)
            if not polygons:
                return Polygon()
            return _polygonal(reduce(lambda acc, p: acc.symmetric_difference(p), polygons))

        return self._nonzero_geometry(rings)

    def _nonzero_geometry(self, rings: list[list[tuple[float, float]]]) -> BaseGeometry:
        edges = unary_union([LineString(vertices + vertices[:1]) for vertices in rings])
        filled = []
        for face in polygonize(list(get_parts(edges))):
            if face.area <= self.config.min_area:
                continue
            inside = face.representative_point()
            if sum(winding_number((inside.x, inside.y), vertices) for vertices in rings):
                filled.append(face)
        return _polygonal(unary_union(filled)) if filled else Polygon()

    def from_geometry(self, geometry: BaseGeometry) -> CompoundShape:
        """Convert a shapely geometry back into a non-zero compound shape.

        Args:
            geometry: Polygonal shapely geometry

        Returns:
            CompoundShape of straight-edged paths; slivers below min_area dropped
        """
        geometry = _polygonal(geometry)
        if geometry.is_empty:
            return CompoundShape()

        polygons = list(geometry.geoms) if isinstance(geometry, MultiPolygon) else [geometry]
        paths: list[Path] = []
        for polygon in polygons:
            if polygon.area <= self.config.min_area:
                continue
            polygon = orient(polygon, sign=1.0)
            paths.append(Path.polygon(list(polygon.exterior.coords)))
            for interior in polygon.interiors:
                if Polygon(interior).area <= self.config.min_area:
                    continue
                paths.append(Path.polygon(list(interior.coords)))
        return CompoundShape.from_paths(paths, FillRule.NONZERO)

    def union(self, a: CompoundShape, b: CompoundShape) -> CompoundShape:
        return self.from_geometry(self.to_geometry(a).union(self.to_geometry(b)))

    def intersection(self, a: CompoundShape, b: CompoundShape) -> CompoundShape:
        return self.from_geometry(self.to_geometry(a).intersection(self.to_geometry(b)))

    def area(self, shape: CompoundShape) -> float:
        """Filled area of a shape under its fill rule."""
        return float(self.to_geometry(shape).area)
