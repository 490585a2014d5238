"""Caller-owned geometry context.

Engine calls receive their tolerances and boolean backend through a
GeometryContext instead of reading process-wide state.
"""

from dataclasses import dataclass, field

from flatshadow.config import GeometryConfig
from flatshadow.core.boolean import BooleanBackend, ShapelyBackend


@dataclass
class GeometryContext:
    """Tolerances and boolean backend for one caller.

    Attributes:
        config: Numeric tolerances
        backend: Boolean union/intersection implementation
    """

    config: GeometryConfig = field(default_factory=GeometryConfig)
    backend: BooleanBackend | None = None

    def __post_init__(self) -> None:
        if self.backend is None:
            self.backend = ShapelyBackend(self.config)

    @classmethod
    def default(cls) -> "GeometryContext":
        """Create a fresh context with default tolerances and shapely backend."""
        return cls()
