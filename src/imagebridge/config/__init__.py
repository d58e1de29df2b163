"""Configuration management for imagebridge.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- EngineConfig: Engine session settings
- CentroidConfig: Object centroid filter settings
- SegmentationConfig: K-means segmentation settings
- VariableNames: Engine workspace variable names
- LoggingConfig: Logging settings
- ImageBridgeSettings: Main application settings
"""

from imagebridge.config.settings import (
    CentroidConfig,
    EngineConfig,
    ImageBridgeSettings,
    LoggingConfig,
    MarkerColor,
    SegmentationConfig,
    VariableNames,
    get_default_settings,
)

__all__ = [
    "CentroidConfig",
    "EngineConfig",
    "ImageBridgeSettings",
    "LoggingConfig",
    "MarkerColor",
    "SegmentationConfig",
    "VariableNames",
    "get_default_settings",
]
