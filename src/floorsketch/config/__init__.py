"""Configuration management for floorsketch.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SnapConfig: Vertex/edge/grid snap radii
- HelperConfig: Helper point generation settings
- SplitConfig: Split engine tolerances
- DrawingConfig: Path closure and validation limits
- LoggingConfig: Logging settings
- SketchSettings: Main application settings
"""

from floorsketch.config.settings import (
    DrawingConfig,
    HelperConfig,
    LoggingConfig,
    SketchSettings,
    SnapConfig,
    SplitConfig,
    get_default_settings,
)

__all__ = [
    "DrawingConfig",
    "HelperConfig",
    "LoggingConfig",
    "SketchSettings",
    "SnapConfig",
    "SplitConfig",
    "get_default_settings",
]
