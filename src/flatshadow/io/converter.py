"""Converters between SVG path data, fontTools pens and domain models.

Path data is parsed with fontTools' SVG path parser driving a pen that
builds Paths; quadratic curves and arcs arrive as cubics. Shapes are
written back by drawing them into any fontTools pen.
"""

from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.pens.recordingPen import replayRecording
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.svgLib.path import parse_path

from flatshadow.domain import CompoundShape, CubicSegment, Edge, FillRule, LineSegment, Path, Point
from flatshadow.exceptions import PathDataError


def format_number(value: float) -> str:
    """Format a coordinate compactly (integers without decimals)."""
    if abs(value - round(value)) < 1e-6:
        return str(int(round(value)))
    return f"{value:.4f}".rstrip("0").rstrip(".")


class ShapePen(BasePen):
    """fontTools pen that records outlines as domain Paths.

    Example:
        pen = ShapePen()
        parse_path("M0 0 L10 0 L10 10 Z", pen)
        shape = pen.shape()
    """

    def __init__(self, glyphSet: Any = None) -> None:
        super().__init__(glyphSet)
        self._paths: list[Path] = []
        self._edges: list[Edge] = []
        self._start: Point | None = None
        self._current: Point | None = None

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self._flush(closed=False)
        self._start = self._current = Point(float(pt[0]), float(pt[1]))

    def _lineTo(self, pt: tuple[float, float]) -> None:
        end = Point(float(pt[0]), float(pt[1]))
        self._edges.append(LineSegment(self._current, end))
        self._current = end

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        end = Point(float(pt3[0]), float(pt3[1]))
        self._edges.append(
            CubicSegment(
                self._current,
                Point(float(pt1[0]), float(pt1[1])),
                Point(float(pt2[0]), float(pt2[1])),
                end,
            )
        )
        self._current = end

    def _closePath(self) -> None:
        if self._edges and self._current != self._start:
            self._edges.append(LineSegment(self._current, self._start))
        self._flush(closed=True)

    def _endPath(self) -> None:
        self._flush(closed=False)

    def _flush(self, closed: bool) -> None:
        if self._edges:
            self._paths.append(Path(edges=tuple(self._edges), closed=closed))
        self._edges = []
        self._start = self._current = None

    def shape(self, fill_rule: FillRule = FillRule.NONZERO) -> CompoundShape:
        """Return everything drawn so far as a CompoundShape."""
        self._flush(closed=False)
        return CompoundShape.from_paths(self._paths, fill_rule)


def draw_shape(shape: CompoundShape, pen: Any) -> None:
    """Draw a shape into a fontTools pen.

    Args:
        shape: Shape to draw
        pen: Any object implementing the fontTools pen protocol
    """
    for path in shape.paths:
        if path.is_empty():
            continue
        pen.moveTo(path.start.to_tuple())
        for edge in path.edges:
            if isinstance(edge, LineSegment):
                pen.lineTo(edge.end.to_tuple())
            else:
                pen.curveTo(
                    edge.control1.to_tuple(),
                    edge.control2.to_tuple(),
                    edge.end.to_tuple(),
                )
        if path.closed:
            pen.closePath()
        else:
            pen.endPath()


def parse_path_data(data: str, fill_rule: FillRule = FillRule.NONZERO) -> CompoundShape:
    """Parse SVG path data into a CompoundShape.

    Args:
        data: Contents of an SVG path "d" attribute
        fill_rule: Fill rule of the resulting shape

    Returns:
        CompoundShape with one Path per sub-path

    Raises:
        PathDataError: If the path data is malformed
    """
    pen = ShapePen()
    try:
        parse_path(data, pen)
    except (ValueError, IndexError, TypeError) as e:
        raise PathDataError(data, str(e)) from e
    return pen.shape(fill_rule)


def format_path_data(shape: CompoundShape) -> str:
    """Serialize a shape as SVG path data.

    Args:
        shape: Shape to serialize

    Returns:
        Path data string (empty for an empty shape)
    """
    pen = SVGPathPen(None, ntos=format_number)
    draw_shape(shape, pen)
    return pen.getCommands()


def shape_from_recording(
    recording: list[tuple[str, tuple[Any, ...]]],
    fill_rule: FillRule = FillRule.NONZERO,
) -> CompoundShape:
    """Convert a RecordingPen recording into a CompoundShape.

    Args:
        recording: Value of a fontTools RecordingPen
        fill_rule: Fill rule of the resulting shape

    Returns:
        CompoundShape replaying the recorded drawing commands
    """
    pen = ShapePen()
    replayRecording(recording, pen)
    return pen.shape(fill_rule)
