"""Tests for the shapely boolean backend and path combining."""

import math

import pytest

from flatshadow.config import GeometryConfig
from flatshadow.core.boolean import ShapelyBackend, winding_number
from flatshadow.core.context import GeometryContext
from flatshadow.core.silhouette import combine_paths
from flatshadow.domain import CompoundShape, CubicSegment, FillRule, LineSegment, Path, Point

KAPPA = 0.5522847498


def square(x: float, y: float, size: float, clockwise: bool = False) -> Path:
    points = [(x, y), (x + size, y), (x + size, y + size), (x, y + size)]
    if clockwise:
        points.reverse()
    return Path.polygon(points)


def circle(cx: float, cy: float, r: float) -> Path:
    k = r * KAPPA
    p = [Point(cx + r, cy), Point(cx, cy + r), Point(cx - r, cy), Point(cx, cy - r)]
    return Path(
        edges=(
            CubicSegment(p[0], Point(cx + r, cy + k), Point(cx + k, cy + r), p[1]),
            CubicSegment(p[1], Point(cx - k, cy + r), Point(cx - r, cy + k), p[2]),
            CubicSegment(p[2], Point(cx - r, cy - k), Point(cx - k, cy - r), p[3]),
            CubicSegment(p[3], Point(cx + k, cy - r), Point(cx + r, cy - k), p[0]),
        ),
        closed=True,
    )


@pytest.fixture
def backend() -> ShapelyBackend:
    return ShapelyBackend()


class TestToGeometry:
    """Tests for converting shapes to shapely geometries."""

    def test_square_area(self, backend: ShapelyBackend) -> None:
        """Test a unit square converts exactly."""
        assert backend.area(CompoundShape(paths=(square(0, 0, 1),))) == pytest.approx(1.0)

    def test_circle_area(self, backend: ShapelyBackend) -> None:
        """Test curves are flattened within tolerance."""
        area = backend.area(CompoundShape(paths=(circle(0, 0, 10),)))
        assert area == pytest.approx(math.pi * 100, rel=5e-3)

    def test_evenodd_nested(self, backend: ShapelyBackend) -> None:
        """Test even-odd nesting cuts a hole regardless of winding."""
        shape = CompoundShape.from_paths([square(0, 0, 4), square(1, 1, 2)], FillRule.EVENODD)
        assert backend.area(shape) == pytest.approx(12.0)

    def test_nonzero_same_winding_fills(self, backend: ShapelyBackend) -> None:
        """Test nested contours wound alike fill under non-zero."""
        shape = CompoundShape.from_paths([square(0, 0, 4), square(1, 1, 2)])
        assert backend.area(shape) == pytest.approx(16.0)

    def test_nonzero_opposite_winding_hole(self, backend: ShapelyBackend) -> None:
        """Test nested contours wound oppositely make a hole under non-zero."""
        shape = CompoundShape.from_paths([square(0, 0, 4), square(1, 1, 2, clockwise=True)])
        assert backend.area(shape) == pytest.approx(12.0)

    def test_nonzero_disjoint_opposite_winding_fills(self, backend: ShapelyBackend) -> None:
        """Test a separate contour wound oppositely is still filled under non-zero."""
        shape = CompoundShape.from_paths([square(0, 0, 10), square(20, 0, 4, clockwise=True)])
        assert backend.area(shape) == pytest.approx(116.0)

    def test_nonzero_overlap_cancels(self, backend: ShapelyBackend) -> None:
        """Test the overlap of oppositely wound contours has winding zero."""
        shape = CompoundShape.from_paths([square(0, 0, 4), square(2, 2, 4, clockwise=True)])
        assert backend.area(shape) == pytest.approx(24.0)

    def test_nonzero_double_wound_hole_stays_filled(self, backend: ShapelyBackend) -> None:
        """Test a hole cut from a region wound twice is still filled."""
        shape = CompoundShape.from_paths(
            [square(0, 0, 4), square(0, 0, 4), square(1, 1, 2, clockwise=True)]
        )
        assert backend.area(shape) == pytest.approx(16.0)

    def test_self_intersecting_repaired(self, backend: ShapelyBackend) -> None:
        """Test a bow-tie contour is repaired into two triangles."""
        bowtie = Path.polygon([(0, 0), (2, 2), (2, 0), (0, 2)])
        assert backend.area(CompoundShape(paths=(bowtie,))) == pytest.approx(2.0)

    def test_degenerate_paths_ignored(self, backend: ShapelyBackend) -> None:
        """Test paths without area are dropped."""
        line = Path(edges=(LineSegment(Point(0, 0), Point(1, 1)),), closed=False)
        assert backend.to_geometry(CompoundShape(paths=(line,))).is_empty


class TestBooleanOperations:
    """Tests for union and intersection."""

    def test_union_overlapping(self, backend: ShapelyBackend) -> None:
        """Test union of two overlapping unit squares."""
        a = CompoundShape(paths=(square(0, 0, 1),))
        b = CompoundShape(paths=(square(0.5, 0.5, 1),))
        result = backend.union(a, b)
        assert backend.area(result) == pytest.approx(1.75)
        assert result.fill_rule == FillRule.NONZERO

    def test_union_disjoint(self, backend: ShapelyBackend) -> None:
        """Test disjoint shapes stay separate paths."""
        a = CompoundShape(paths=(square(0, 0, 1),))
        b = CompoundShape(paths=(square(5, 5, 1),))
        result = backend.union(a, b)
        assert len(result.paths) == 2
        assert backend.area(result) == pytest.approx(2.0)

    def test_union_with_empty(self, backend: ShapelyBackend) -> None:
        """Test union with an empty shape returns the other shape."""
        a = CompoundShape(paths=(square(0, 0, 1),))
        result = backend.union(a, CompoundShape())
        assert backend.area(result) == pytest.approx(1.0)

    def test_intersection(self, backend: ShapelyBackend) -> None:
        """Test intersection of two overlapping squares."""
        a = CompoundShape(paths=(square(0, 0, 1),))
        b = CompoundShape(paths=(square(0.5, 0.5, 1),))
        assert backend.area(backend.intersection(a, b)) == pytest.approx(0.25)

    def test_intersection_disjoint_is_empty(self, backend: ShapelyBackend) -> None:
        """Test disjoint shapes have an empty intersection."""
        a = CompoundShape(paths=(square(0, 0, 1),))
        b = CompoundShape(paths=(square(5, 5, 1),))
        assert backend.intersection(a, b).is_empty()

    def test_hole_preserved(self, backend: ShapelyBackend) -> None:
        """Test results with holes fill correctly when read back."""
        ring = CompoundShape.from_paths([square(0, 0, 4), square(1, 1, 2)], FillRule.EVENODD)
        result = backend.union(ring, CompoundShape())
        assert len(result.paths) == 2
        assert backend.area(result) == pytest.approx(12.0)

    def test_min_area_drops_slivers(self) -> None:
        """Test polygons below min_area are discarded."""
        backend = ShapelyBackend(GeometryConfig(min_area=0.5))
        tiny = CompoundShape(paths=(square(0, 0, 0.5),))
        assert backend.union(tiny, CompoundShape()).is_empty()


class TestCombinePaths:
    """Tests for combine_paths."""

    def test_closes_open_paths(self) -> None:
        """Test open paths are closed before combining."""
        triangle = Path.polygon([(0, 0), (2, 0), (2, 2)], closed=False)
        context = GeometryContext.default()
        result = combine_paths(triangle, context)
        assert context.backend.area(result) == pytest.approx(2.0)

    def test_merges_overlapping_paths(self) -> None:
        """Test overlapping paths merge into one outline."""
        shape = CompoundShape.from_paths([square(0, 0, 2), square(1, 1, 2)])
        result = combine_paths(shape)
        assert len(result.paths) == 1
        assert ShapelyBackend().area(result) == pytest.approx(7.0)

    def test_each_shape_keeps_its_fill_rule(self) -> None:
        """Test shapes in a sequence are filled under their own rules."""
        ring = CompoundShape.from_paths([square(0, 0, 4), square(1, 1, 2)], FillRule.EVENODD)
        solid = CompoundShape.from_paths([square(10, 0, 4), square(11, 1, 2)])
        result = combine_paths([ring, solid])
        assert ShapelyBackend().area(result) == pytest.approx(12.0 + 16.0)

    def test_empty(self) -> None:
        """Test combining nothing gives an empty shape."""
        assert combine_paths(CompoundShape()).is_empty()


class TestWindingNumber:
    """Tests for winding_number."""

    def test_counter_clockwise_positive(self) -> None:
        """Test a counter-clockwise ring winds +1 around its interior."""
        ring = [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
        assert winding_number((1.0, 1.0), ring) == 1

    def test_clockwise_negative(self) -> None:
        """Test a clockwise ring winds -1 around its interior."""
        ring = [(0.0, 0.0), (0.0, 2.0), (2.0, 2.0), (2.0, 0.0)]
        assert winding_number((1.0, 1.0), ring) == -1

    def test_outside_zero(self) -> None:
        """Test points outside a ring have winding zero."""
        ring = [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]
        assert winding_number((3.0, 1.0), ring) == 0
        assert winding_number((1.0, -1.0), ring) == 0
