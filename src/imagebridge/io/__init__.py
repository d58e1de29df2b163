"""Image file I/O for imagebridge.

This module loads image files into engine-layout arrays and writes filtered
images, bitmaps and centroid lists back to disk using Pillow.
"""

from imagebridge.io.image_file import (
    get_filtered_path,
    read_rgb_image,
    write_bitmap,
    write_centroids,
    write_rgb_image,
)

__all__ = [
    "get_filtered_path",
    "read_rgb_image",
    "write_bitmap",
    "write_centroids",
    "write_rgb_image",
]
