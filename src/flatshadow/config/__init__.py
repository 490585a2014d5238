"""Configuration management for flatshadow.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Numeric tolerances for the silhouette engine
- ShadowConfig: Flat shadow settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- FlatShadowSettings: Main application settings
"""

from flatshadow.config.settings import (
    FlatShadowSettings,
    GeometryConfig,
    LoggingConfig,
    ProcessingConfig,
    ShadowConfig,
    get_default_settings,
)

__all__ = [
    "FlatShadowSettings",
    "GeometryConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "ShadowConfig",
    "get_default_settings",
]
