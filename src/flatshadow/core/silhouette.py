"""Flat shadow silhouettes of compound shapes.

This module assembles the faces of every edge into one shadow outline:

1. Build the faces of each edge of a path
2. Union the faces of that path, left to right
3. Union the per-path regions, left to right
4. Merge the result with the filled input shape
5. Optionally clip against a container

Unions are folded in input order so the output is reproducible for a given
shape and backend.
"""

from collections.abc import Sequence

import structlog

from flatshadow.core.context import GeometryContext
from flatshadow.core.faces import build_faces
from flatshadow.domain import CompoundShape, Direction, Path, Shape, as_compound
from flatshadow.exceptions import InvalidArgumentError

logger = structlog.get_logger(__name__)


def _fold_union(shapes: list[CompoundShape], context: GeometryContext) -> CompoundShape:
    """Union shapes left to right, skipping empty ones."""
    result: CompoundShape | None = None
    for shape in shapes:
        if shape.is_empty():
            continue
        result = shape if result is None else context.backend.union(result, shape)
    return result if result is not None else CompoundShape()


def _check_finite(shape: CompoundShape) -> None:
    for path in shape.paths:
        for edge in path.edges:
            if not edge.is_finite():
                raise InvalidArgumentError("shape", "coordinates must be finite")


def path_shadow(
    path: Path,
    direction: Direction,
    context: GeometryContext,
) -> CompoundShape:
    """Union all faces swept by the edges of one path.

    Args:
        path: Contour whose edges are swept
        direction: Light direction and shadow length
        context: Tolerances and boolean backend

    Returns:
        Region swept by the path, empty if no edge produced a face
    """
    faces: list[CompoundShape] = []
    for edge in path.edges:
        faces.extend(
            CompoundShape(paths=(face,)) for face in build_faces(edge, direction, context.config)
        )

    if not faces:
        logger.debug("Path skipped", edges=len(path.edges), reason="no faces")
        return CompoundShape()

    region = _fold_union(faces, context)
    logger.debug("Path swept", edges=len(path.edges), faces=len(faces))
    return region


def shadow_of(
    shape: Shape,
    direction: Direction,
    context: GeometryContext | None = None,
    clip: Shape | None = None,
) -> CompoundShape:
    """Compute the flat shadow silhouette of a shape.

    Every boundary edge is swept along the direction; the swept regions are
    merged with the shape itself into one outline.

    Args:
        shape: A Path or a CompoundShape; never modified
        direction: Light direction and shadow length
        context: Tolerances and boolean backend (fresh default if None)
        clip: Optional container the silhouette is clipped against

    Returns:
        New CompoundShape, empty for a degenerate input

    Raises:
        InvalidArgumentError: If the direction has zero or non-finite length,
            or the shape has non-finite coordinates

    Example:
        >>> square = Path.polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> silhouette = shadow_of(square, Direction(angle=135, distance=1))
    """
    direction.validate()
    compound = as_compound(shape)
    _check_finite(compound)
    context = context or GeometryContext.default()

    regions = [path_shadow(path, direction, context) for path in compound.paths]
    swept = _fold_union(regions, context)

    if swept.is_empty():
        logger.debug("Empty shadow", paths=len(compound.paths))
        return CompoundShape()

    silhouette = context.backend.union(swept, compound)

    if clip is not None:
        silhouette = context.backend.intersection(silhouette, as_compound(clip))

    logger.debug(
        "Shadow assembled",
        input_paths=len(compound.paths),
        output_paths=len(silhouette.paths),
    )
    return silhouette


def combine_paths(
    shape: Shape | Sequence[Shape], context: GeometryContext | None = None
) -> CompoundShape:
    """Merge arbitrary vector art into one outer silhouette.

    Open paths are closed first. Each shape is filled under its own fill
    rule, then the filled shapes are united left to right.

    Args:
        shape: A Path, a CompoundShape, or a sequence of them (one per
            drawing element)
        context: Tolerances and boolean backend (fresh default if None)

    Returns:
        Combined CompoundShape, empty if there is nothing to fill
    """
    parts = [shape] if isinstance(shape, (Path, CompoundShape)) else list(shape)
    context = context or GeometryContext.default()
    combined = CompoundShape()
    for part in parts:
        compound = as_compound(part).closed_copy()
        if not compound.is_empty():
            combined = context.backend.union(combined, compound)
    return combined
