"""Domain models for flatshadow.

This module contains the value types the silhouette engine consumes and
produces. All models are:

- Immutable where possible (frozen dataclasses)
- Free of any drawing-library details
- Created per call and discarded afterwards

Key classes:
- Point: A 2D point
- CubicSegment / LineSegment: Outline edges
- Path: A contour of connected edges
- CompoundShape: Several paths under a fill rule
- Direction: Light direction and shadow length
- IconDrawing: Stack of filled layers making up an icon
"""

from flatshadow.domain.drawing import Fill, IconDrawing, Layer, LinearGradient
from flatshadow.domain.segment import CubicSegment, Direction, Edge, LineSegment, Point
from flatshadow.domain.shape import CompoundShape, FillRule, Path, Shape, as_compound

__all__: list[str] = [
    # Enums
    "FillRule",
    # Core types
    "Point",
    "CubicSegment",
    "LineSegment",
    "Edge",
    "Path",
    "CompoundShape",
    "Shape",
    "Direction",
    # Drawings
    "Fill",
    "Layer",
    "LinearGradient",
    "IconDrawing",
    # Helpers
    "as_compound",
]
