"""Configuration settings for FlatShadow."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Numeric tolerances used by the silhouette engine.

    Solver tolerances apply to coefficients normalised to unit scale, so they
    are independent of the coordinate system. Length and area tolerances are
    in drawing units.
    """

    root_epsilon: float = Field(
        default=1e-12,
        gt=0.0,
        le=1e-3,
        description="Tolerance for vanishing coefficients and discriminants",
    )
    crossing_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-2,
        description="Margin excluding crossings at t=0/1 and merging near-equal crossings",
    )
    degenerate_length: float = Field(
        default=1e-9,
        ge=0.0,
        le=1.0,
        description="Sub-segments with all control points this close to the start are dropped",
    )
    flatten_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=10.0,
        description="Maximum deviation when flattening curves for boolean operations",
    )
    min_area: float = Field(
        default=1e-9,
        ge=0.0,
        description="Polygons smaller than this are discarded from boolean results",
    )


class ShadowConfig(BaseModel):
    """Configuration for the flat shadow of an icon."""

    angle: float = Field(
        default=135.0,
        ge=-360.0,
        le=360.0,
        description="Light direction in degrees",
    )
    distance: float | None = Field(
        default=None,
        gt=0.0,
        description="Shadow length (None = icon size)",
    )
    opacity: float = Field(
        default=0.324,
        ge=0.0,
        le=1.0,
        description="Shadow fill opacity",
    )
    clip_to_box: bool = Field(
        default=True,
        description="Clip the shadow against the icon box",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch icon processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )
    skip_empty: bool = Field(
        default=True,
        description="Skip input files without drawable paths",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FlatShadowSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    shadow: ShadowConfig = Field(default_factory=ShadowConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FlatShadowSettings:
    """Get default application settings."""
    return FlatShadowSettings()
