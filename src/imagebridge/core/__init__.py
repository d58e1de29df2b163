"""Core marshalling and filter orchestration for imagebridge.

This module contains:

- RGB image validation
- Pixel layout conversion between engine arrays and host bitmaps
- Zero-copy buffer moves between foreign arrays
- Engine expression sequences for each filter
- The filter pipeline driving those sequences

Key functions:
- validate_rgb_image: Check the RGB image contract
- rgb_array_to_bitmap: Engine RGB array to top-down BGRX bitmap
- bitmap_to_rgb_array: Top-down BGRX bitmap to engine RGB array
- move_data: Move a buffer from one array into another

Key classes:
- FilterPipeline: Selects and applies filters
- PipelineStage: One engine expression
"""

from imagebridge.core.converter import (
    BGRX_SOURCE_PLANES,
    bgrx_pixel,
    bitmap_to_rgb_array,
    rgb_array_to_bitmap,
)
from imagebridge.core.expressions import PipelineStage, centroid_stages, kmeans_stages
from imagebridge.core.pipeline import FilterPipeline, coerce_filter_id
from imagebridge.core.transfer import check_move_compatible, move_data
from imagebridge.core.validator import is_rgb_image, validate_rgb_image

__all__ = [
    "BGRX_SOURCE_PLANES",
    # Pipeline classes
    "FilterPipeline",
    "PipelineStage",
    # Conversion functions
    "bgrx_pixel",
    "bitmap_to_rgb_array",
    "centroid_stages",
    "check_move_compatible",
    "coerce_filter_id",
    "is_rgb_image",
    "kmeans_stages",
    "move_data",
    "rgb_array_to_bitmap",
    "validate_rgb_image",
]
