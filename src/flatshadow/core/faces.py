"""Extrusion faces of single outline edges.

A face is the region swept by one edge piece when it is translated by the
shadow vector. Edges are first cut where their tangent runs parallel to the
vector, so each piece is monotonic along it and its face boundary cannot
cross itself.
"""

import structlog

from flatshadow.config import GeometryConfig
from flatshadow.core.bezier import crossing_parameters, split_at
from flatshadow.domain import Direction, Edge, LineSegment, Path
from flatshadow.exceptions import InvalidArgumentError

logger = structlog.get_logger(__name__)


def monotonic_pieces(
    segment: Edge,
    vector: tuple[float, float],
    config: GeometryConfig | None = None,
) -> list[Edge]:
    """Cut an edge into pieces monotonic along a vector.

    Crossings are computed once on the undivided segment. With two crossings
    the tail left after the first cut is split at the second crossing
    re-parameterized onto the tail.

    Args:
        segment: Edge to cut
        vector: Translation vector (dx, dy)
        config: Geometry tolerances (defaults if None)

    Returns:
        One, two or three pieces in curve order
    """
    if isinstance(segment, LineSegment):
        return [segment]

    config = config or GeometryConfig()
    tees = crossing_parameters(
        segment,
        vector,
        epsilon=config.crossing_epsilon,
        root_epsilon=config.root_epsilon,
    )

    if len(tees) == 1:
        return list(split_at(segment, tees[0]))

    if len(tees) == 2:
        t1, t2 = tees
        head, tail = split_at(segment, t1)
        middle, last = split_at(tail, (t2 - t1) / (1.0 - t1))
        return [head, middle, last]

    return [segment]


def face_for(piece: Edge, vector: tuple[float, float]) -> Path:
    """Build the closed face swept by one monotonic piece.

    The boundary runs forward along the piece, across to the translated end,
    back along the translated piece reversed, and across to the start.

    Args:
        piece: Monotonic edge piece from p0 to p1
        vector: Translation vector (dx, dy)

    Returns:
        Closed four-sided path
    """
    dx, dy = vector
    p0, p1 = piece.start, piece.end
    shifted_back = piece.reversed().translated(dx, dy)
    return Path(
        edges=(
            piece,
            LineSegment(p1, p1.translated(dx, dy)),
            shifted_back,
            LineSegment(p0.translated(dx, dy), p0),
        ),
        closed=True,
    )


def build_faces(
    segment: Edge,
    direction: Direction,
    config: GeometryConfig | None = None,
) -> list[Path]:
    """Build the simple faces swept by one edge.

    Args:
        segment: Cubic or line edge
        direction: Light direction and shadow length
        config: Geometry tolerances (defaults if None)

    Returns:
        One face per non-degenerate monotonic piece of the edge

    Raises:
        InvalidArgumentError: If the direction has zero or non-finite length,
            or the segment has non-finite coordinates
    """
    vector = direction.validate()
    if not segment.is_finite():
        raise InvalidArgumentError("segment", "coordinates must be finite")

    config = config or GeometryConfig()
    faces: list[Path] = []
    for piece in monotonic_pieces(segment, vector, config):
        if piece.is_degenerate(config.degenerate_length):
            logger.debug("Degenerate piece dropped", start=piece.start.to_tuple())
            continue
        faces.append(face_for(piece, vector))
    return faces
