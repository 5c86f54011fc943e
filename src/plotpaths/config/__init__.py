"""Configuration management for plotpaths.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderOptions: Immutable exporter style and layout options
- MergeConfig / OffsetConfig / SmoothingConfig: Geometry operator settings
- PathFinderConfig: Mesh flow-line extraction settings
- LoggingConfig: Logging settings
- PlotPathsSettings: Main application settings
"""

from plotpaths.config.settings import (
    UNITS_PER_INCH,
    ColorConfig,
    DocumentSize,
    LoggingConfig,
    MergeConfig,
    OffsetConfig,
    PathFinderConfig,
    PlotPathsSettings,
    RenderOptions,
    SmoothingConfig,
    get_default_settings,
)

__all__ = [
    "UNITS_PER_INCH",
    "ColorConfig",
    "DocumentSize",
    "LoggingConfig",
    "MergeConfig",
    "OffsetConfig",
    "PathFinderConfig",
    "PlotPathsSettings",
    "RenderOptions",
    "SmoothingConfig",
    "get_default_settings",
]
