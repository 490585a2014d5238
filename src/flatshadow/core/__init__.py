"""Core geometry engine for flatshadow.

This module contains the algorithms for:

- Polynomial root solving (quadratic and cubic, real roots only)
- Bezier parameterization, tangent crossings and subdivision
- Face building (sweeping a monotonic edge along the light direction)
- Silhouette assembly through a boolean union backend

All functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure (inputs are never modified)
- Parameterized by a caller-owned GeometryContext

Key functions:
- solve_cubic / solve_quadratic_or_linear: Real roots of a cubic
- parameterize: Monomial coefficients of a Bezier segment
- crossing_parameters: Where a segment's tangent is parallel to a direction
- split_at: de Casteljau subdivision
- build_faces: Swept faces of one segment
- shadow_of: Flat shadow silhouette of a shape
- combine_paths: Merge vector art into one silhouette

Key classes:
- GeometryContext: Tolerances and boolean backend
- ShapelyBackend: Boolean operations using shapely

Batch icon processing lives in flatshadow.core.processor.
"""

from flatshadow.core.bezier import crossing_parameters, parameterize, point_at, split_at
from flatshadow.core.boolean import BooleanBackend, ShapelyBackend
from flatshadow.core.context import GeometryContext
from flatshadow.core.faces import build_faces
from flatshadow.core.roots import solve_cubic, solve_quadratic_or_linear
from flatshadow.core.silhouette import combine_paths, shadow_of

__all__ = [
    # Boolean operations
    "BooleanBackend",
    "GeometryContext",
    "ShapelyBackend",
    # Faces
    "build_faces",
    "combine_paths",
    # Bezier functions
    "crossing_parameters",
    "parameterize",
    "point_at",
    "shadow_of",
    # Roots
    "solve_cubic",
    "solve_quadratic_or_linear",
    "split_at",
]
