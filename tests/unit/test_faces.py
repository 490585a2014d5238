"""Tests for face building."""

import math

import pytest
from shapely.geometry import LinearRing

from flatshadow.config import GeometryConfig
from flatshadow.core._bezier import flatten_path
from flatshadow.core.boolean import ShapelyBackend
from flatshadow.core.faces import build_faces, face_for, monotonic_pieces
from flatshadow.domain import CompoundShape, CubicSegment, Direction, LineSegment, Point
from flatshadow.exceptions import InvalidArgumentError

ANGLES = range(0, 360, 15)


@pytest.fixture
def s_curve() -> CubicSegment:
    return CubicSegment(Point(0, 0), Point(1, 2), Point(2, -2), Point(3, 0))


def face_ring(face, tolerance: float = 0.001) -> LinearRing:
    return LinearRing(flatten_path(face, tolerance))


class TestMonotonicPieces:
    """Tests for cutting edges at tangent crossings."""

    def test_s_curve_three_pieces(self, s_curve: CubicSegment) -> None:
        """Test two crossings give three connected pieces."""
        pieces = monotonic_pieces(s_curve, (1.0, 0.0))
        assert len(pieces) == 3
        assert pieces[0].start == s_curve.start
        assert pieces[-1].end == s_curve.end
        for current, following in zip(pieces, pieces[1:]):
            assert current.end.x == pytest.approx(following.start.x)
            assert current.end.y == pytest.approx(following.start.y)

    def test_second_cut_lands_on_second_crossing(self, s_curve: CubicSegment) -> None:
        """Test the middle piece ends at the original curve's second extremum."""
        pieces = monotonic_pieces(s_curve, (1.0, 0.0))
        t2 = 0.5 + math.sqrt(3) / 6
        # y extremum of 12t^3 - 18t^2 + 6t
        expected_y = 12 * t2**3 - 18 * t2**2 + 6 * t2
        assert pieces[1].end.y == pytest.approx(expected_y)
        assert pieces[1].end.x == pytest.approx(3 * t2)

    def test_line_is_one_piece(self) -> None:
        """Test lines are never cut."""
        line = LineSegment(Point(0, 0), Point(1, 1))
        assert monotonic_pieces(line, (1.0, 0.0)) == [line]


class TestFaceFor:
    """Tests for single face construction."""

    def test_line_parallelogram(self) -> None:
        """Test a line sweeps a parallelogram of area |edge x vector|."""
        line = LineSegment(Point(0, 0), Point(2, 0))
        face = face_for(line, (1.0, 1.0))
        assert len(face.edges) == 4
        assert face.closed
        assert face.is_continuous()
        corners = [edge.start for edge in face.edges]
        assert corners == [Point(0, 0), Point(2, 0), Point(3, 1), Point(1, 1)]

        area = ShapelyBackend().area(CompoundShape(paths=(face,)))
        assert area == pytest.approx(2.0)


class TestBuildFaces:
    """Tests for build_faces."""

    def test_line_single_face(self) -> None:
        """Test a line gives one parallelogram face."""
        faces = build_faces(LineSegment(Point(0, 0), Point(1, 0)), Direction(angle=90, distance=1))
        assert len(faces) == 1
        area = ShapelyBackend().area(CompoundShape(paths=(faces[0],)))
        assert area == pytest.approx(1.0)

    @pytest.mark.parametrize("angle", ANGLES)
    def test_s_curve_faces_are_simple(self, s_curve: CubicSegment, angle: int) -> None:
        """Test every face of an S-curve is a simple ring."""
        faces = build_faces(s_curve, Direction(angle=angle, distance=2))
        assert 1 <= len(faces) <= 3
        for face in faces:
            assert face.is_continuous()
            assert face_ring(face).is_simple

    @pytest.mark.parametrize("angle", ANGLES)
    def test_line_faces_are_simple(self, angle: int) -> None:
        """Test line faces are simple unless the line runs along the direction."""
        line = LineSegment(Point(0, 0), Point(3, 1))
        direction = Direction(angle=angle, distance=1.5)
        dx, dy = direction.vector
        faces = build_faces(line, direction)
        assert len(faces) == 1
        if abs(3 * dy - 1 * dx) > 1e-9:
            assert face_ring(faces[0]).is_simple

    @pytest.mark.parametrize("angle", ANGLES)
    def test_point_curve_has_no_faces(self, angle: int) -> None:
        """Test a degenerate point-curve is dropped."""
        p = Point(1, 1)
        assert build_faces(CubicSegment(p, p, p, p), Direction(angle=angle, distance=1)) == []

    def test_zero_distance_rejected(self, s_curve: CubicSegment) -> None:
        """Test a zero-length direction raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            build_faces(s_curve, Direction(angle=45, distance=0))

    def test_non_finite_segment_rejected(self) -> None:
        """Test non-finite coordinates raise InvalidArgumentError."""
        seg = CubicSegment(Point(0, 0), Point(math.nan, 1), Point(2, 1), Point(3, 0))
        with pytest.raises(InvalidArgumentError):
            build_faces(seg, Direction(angle=45, distance=1))

    def test_degenerate_tolerance(self) -> None:
        """Test the degenerate threshold comes from the config."""
        tiny = LineSegment(Point(0, 0), Point(1e-6, 0))
        config = GeometryConfig(degenerate_length=1e-3)
        assert build_faces(tiny, Direction(angle=90, distance=1), config) == []
        assert len(build_faces(tiny, Direction(angle=90, distance=1))) == 1
