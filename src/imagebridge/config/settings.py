"""Configuration settings for imagebridge."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class MarkerColor(str, Enum):
    """Named colors accepted by the engine's shape overlay."""

    GREEN = "green"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    WHITE = "white"
    BLACK = "black"


class EngineConfig(BaseModel):
    """Configuration for the engine session."""

    show_ui: bool = Field(
        default=False,
        description="Show the engine desktop while the session is running",
    )
    startup_options: list[str] = Field(
        default_factory=lambda: ["-nodesktop"],
        description="Options passed to the engine launcher",
    )


class CentroidConfig(BaseModel):
    """Configuration for the object centroid filter."""

    min_object_area: int = Field(
        default=60,
        ge=0,
        description="Regions with an area at or below this pixel count are dropped",
    )
    marker_radius: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Radius of the circle drawn at each centroid",
    )
    marker_line_width: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Line width of the centroid circle",
    )
    marker_color: MarkerColor = Field(
        default=MarkerColor.GREEN,
        description="Color of the centroid circle",
    )
    erosion_size: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Side of the cube structuring element used to shrink the table mask",
    )


class SegmentationConfig(BaseModel):
    """Configuration for the k-means segmentation filter."""

    cluster_count: int = Field(
        default=5,
        ge=2,
        le=64,
        description="Number of color clusters",
    )


class VariableNames(BaseModel):
    """Engine workspace variable names used by the filters."""

    input_image: str = Field(default="img")
    annotated_image: str = Field(default="filteredImg")
    centroids: str = Field(default="finalCentroids")
    segmented_image: str = Field(default="filtered_img")


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


class ImageBridgeSettings(BaseModel):
    """Main application settings."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    centroids: CentroidConfig = Field(default_factory=CentroidConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    variables: VariableNames = Field(default_factory=VariableNames)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ImageBridgeSettings:
    """Get default application settings."""
    return ImageBridgeSettings()
