"""Icon composition.

An icon is a box filled with the background colour, the glyph fitted into
its centre, and a long flat shadow cast by the glyph and clipped to the box.
Rounded styles add a soft drop shadow under the glyph and thin highlight and
shade bands along the top and bottom edges of the box.
"""

import structlog

from flatshadow.config import ShadowConfig
from flatshadow.core.context import GeometryContext
from flatshadow.core.silhouette import shadow_of
from flatshadow.domain import (
    CompoundShape,
    CubicSegment,
    Direction,
    IconDrawing,
    Layer,
    LinearGradient,
    Path,
    Point,
)
from flatshadow.domain.segment import Edge, LineSegment
from flatshadow.exceptions import EmptyIconError
from flatshadow.icon.color import adjust_color
from flatshadow.icon.styles import IconStyle
from flatshadow.io.converter import parse_path_data

logger = structlog.get_logger(__name__)

# Circular arc approximation factor for cubic quarter circles
KAPPA = 0.5522847498

# Edge bands drawn for a 70 unit box; scaled to other sizes
REFERENCE_SIZE = 70.0
TOP_BAND = (
    "M4,1.8 L65,1.8 C67.6666667,1.8 69.3333333,1.13333333 70,-0.2 "
    "C70,2.46666667 70,3.46666667 70,2.8 L0,2.8 C0,3.46666667 0,2.46666667 0,-0.2 "
    "C0.666666667,1.13333333 2,1.8 4,1.8 Z"
)
TOP_BAND_MIRROR = 2.8
BOTTOM_BAND = (
    "M4,4 L65,4 C67.6666667,4 69.3333333,3 70,1 C70,3.66666667 70,5 70,5 "
    "L0,5 C0,5 0,3.66666667 0,1 C0.666666667,3 2,4 4,4 Z"
)
BOTTOM_BAND_OFFSET = 65.0
BAND_OPACITY = 0.383


def rounded_rectangle(
    x: float, y: float, width: float, height: float, radius: float = 0.0
) -> Path:
    """Build a rectangle, with cubic quarter-arc corners when radius > 0.

    The radius is clamped to half the shorter side.
    """
    radius = min(radius, width / 2, height / 2)
    x1, y1 = x + width, y + height
    if radius <= 0:
        return Path.polygon([(x, y), (x1, y), (x1, y1), (x, y1)])

    k = radius * KAPPA
    edges: list[Edge] = [
        LineSegment(Point(x + radius, y), Point(x1 - radius, y)),
        CubicSegment(
            Point(x1 - radius, y),
            Point(x1 - radius + k, y),
            Point(x1, y + radius - k),
            Point(x1, y + radius),
        ),
        LineSegment(Point(x1, y + radius), Point(x1, y1 - radius)),
        CubicSegment(
            Point(x1, y1 - radius),
            Point(x1, y1 - radius + k),
            Point(x1 - radius + k, y1),
            Point(x1 - radius, y1),
        ),
        LineSegment(Point(x1 - radius, y1), Point(x + radius, y1)),
        CubicSegment(
            Point(x + radius, y1),
            Point(x + radius - k, y1),
            Point(x, y1 - radius + k),
            Point(x, y1 - radius),
        ),
        LineSegment(Point(x, y1 - radius), Point(x, y + radius)),
        CubicSegment(
            Point(x, y + radius),
            Point(x, y + radius - k),
            Point(x + radius - k, y),
            Point(x + radius, y),
        ),
    ]
    return Path(tuple(edges), closed=True)


def fit_bounds(
    shape: CompoundShape, bounds: tuple[float, float, float, float]
) -> CompoundShape:
    """Scale a shape uniformly so it fits the bounds, centred.

    Args:
        shape: Shape to fit
        bounds: Target box as (x, y, width, height)

    Raises:
        EmptyIconError: If the shape has no extent
    """
    min_x, min_y, max_x, max_y = shape.bounding_box()
    width, height = max_x - min_x, max_y - min_y
    if width <= 0 and height <= 0:
        raise EmptyIconError("outline has zero extent")

    x, y, target_w, target_h = bounds
    scales = []
    if width > 0:
        scales.append(target_w / width)
    if height > 0:
        scales.append(target_h / height)
    scale = min(scales)

    dx = x + target_w / 2 - (min_x + max_x) / 2 * scale
    dy = y + target_h / 2 - (min_y + max_y) / 2 * scale
    return shape.transformed(scale, dx, dy)


class IconComposer:
    """Composes an icon drawing from a glyph outline.

    Example:
        composer = IconComposer(get_style("16.0"))
        drawing = composer.compose(parse_path_data(data))
    """

    def __init__(
        self,
        style: IconStyle,
        context: GeometryContext | None = None,
        shadow: ShadowConfig | None = None,
    ) -> None:
        """Initialize the composer.

        Args:
            style: Icon style to draw with
            context: Geometry context (fresh default if None)
            shadow: Flat shadow length and clipping; angle and opacity
                come from the style
        """
        self.style = style
        self.context = context or GeometryContext.default()
        self.shadow = shadow or ShadowConfig()

    def compose(self, glyph: CompoundShape) -> IconDrawing:
        """Compose the icon for a glyph.

        Args:
            glyph: Glyph outline in any coordinate range

        Returns:
            IconDrawing with layers from bottom to top

        Raises:
            EmptyIconError: If the glyph has nothing to draw
        """
        if glyph.is_empty():
            raise EmptyIconError("no paths")

        style = self.style
        box = CompoundShape(paths=(self._box_path(),))
        icon = self._fit_glyph(glyph)

        layers = [Layer("box", box, self._box_fill())]
        if style.box_inner_shadows:
            layers.extend(self._box_bands(box))
        if style.icon_shadow_offset is not None:
            layers.append(
                Layer(
                    "icon-shadow",
                    icon.translated(0.0, style.icon_shadow_offset),
                    "#000000",
                    style.icon_shadow_opacity,
                )
            )
        layers.append(
            Layer("flat-shadow", self._flat_shadow(icon, box), "#000000", style.flat_shadow_opacity)
        )
        layers.append(Layer("icon", icon, style.icon_color))

        logger.debug(
            "Icon composed",
            version=style.version,
            layers=len(layers),
            glyph_paths=len(icon.paths),
        )
        return IconDrawing(size=style.size, layers=layers, options=style.model_dump())

    def _box_path(self) -> Path:
        size = self.style.size
        return rounded_rectangle(0.0, 0.0, size, size, self.style.box_radius)

    def _box_fill(self) -> str | LinearGradient:
        style = self.style
        if style.background_gradient is None:
            return style.background_color
        return LinearGradient(
            start_color=adjust_color(style.background_color, style.background_gradient),
            end_color=style.background_color,
            origin=(style.size, 0.0),
            destination=(0.0, style.size),
        )

    def _fit_glyph(self, glyph: CompoundShape) -> CompoundShape:
        side = self.style.abs_icon_size
        offset = self.style.size / 2 - side / 2
        return fit_bounds(glyph, (offset, offset, side, side))

    def _flat_shadow(self, icon: CompoundShape, box: CompoundShape) -> CompoundShape:
        distance = self.shadow.distance or self.style.size
        direction = Direction(angle=self.style.flat_shadow_angle, distance=distance)
        clip = box if self.shadow.clip_to_box else None
        return shadow_of(icon, direction, self.context, clip=clip)

    def _box_bands(self, box: CompoundShape) -> list[Layer]:
        scale = self.style.size / REFERENCE_SIZE
        mirror = TOP_BAND_MIRROR * scale

        top = parse_path_data(TOP_BAND).transformed(scale, 0.0, 0.0)
        top = top.mapped(lambda p: Point(p.x, mirror - p.y))
        bottom = parse_path_data(BOTTOM_BAND).transformed(scale, 0.0, BOTTOM_BAND_OFFSET * scale)

        backend = self.context.backend
        return [
            Layer("top-box-shadow", backend.intersection(top, box), "#FFFFFF", BAND_OPACITY),
            Layer("bottom-box-shadow", backend.intersection(bottom, box), "#000000", BAND_OPACITY),
        ]
