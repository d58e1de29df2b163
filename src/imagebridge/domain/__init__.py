"""Domain models for imagebridge.

This module contains the value types exchanged between the host, the bridge
and the engine:

- ForeignArray: Engine array in column-major layout with an owned buffer
- OwnedBuffer: Data vector that can be relinquished exactly once
- Bitmap / BitmapHeader: Host 32-bit BGRX bitmap
- Centroid: Region center returned by the object detection filter
- FilterId / FilterResult: Filter selection and outcome
"""

from imagebridge.domain.array import (
    DEFAULT_ALLOCATOR,
    BufferAllocator,
    ElementType,
    ForeignArray,
    OwnedBuffer,
)
from imagebridge.domain.bitmap import BGRX_PIXEL_SIZE, Bitmap, BitmapHeader
from imagebridge.domain.centroid import Centroid, CentroidList, centroids_from_rows
from imagebridge.domain.filters import FilterId, FilterResult

__all__: list[str] = [
    # Constants
    "BGRX_PIXEL_SIZE",
    "DEFAULT_ALLOCATOR",
    # Enums
    "ElementType",
    "FilterId",
    # Core types
    "Bitmap",
    "BitmapHeader",
    "BufferAllocator",
    "Centroid",
    "CentroidList",
    "FilterResult",
    "ForeignArray",
    "OwnedBuffer",
    "centroids_from_rows",
]
