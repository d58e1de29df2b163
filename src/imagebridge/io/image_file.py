"""Image file reading and writing.

Images are loaded with Pillow, converted to 8-bit RGB and copied into an
engine-layout ForeignArray. Writing goes the other way, either from an engine
array or from a host bitmap.
"""

import json
from pathlib import Path

import numpy as np
from PIL import Image

from imagebridge.core.validator import validate_rgb_image
from imagebridge.domain import Bitmap, BufferAllocator, CentroidList, ForeignArray

# Byte order of a BGRX pixel read back as RGB
_BGRX_TO_RGB = [2, 1, 0]


def read_rgb_image(path: Path, allocator: BufferAllocator | None = None) -> ForeignArray:
    """Load an image file as an RGB engine array.

    Args:
        path: Path to any image format Pillow can read
        allocator: Allocator for the array's buffer

    Returns:
        ``[height, width, 3]`` uint8 array

    Raises:
        FileNotFoundError: If the file does not exist
        PIL.UnidentifiedImageError: If the file is not a readable image
    """
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    with Image.open(path) as image:
        rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
    return ForeignArray.from_ndarray(rgb, allocator)


def write_rgb_image(array: ForeignArray, path: Path) -> None:
    """Save an RGB engine array as an image file.

    The format is chosen from the file extension.

    Raises:
        ShapeMismatchError: If the array is not a valid RGB image
    """
    validate_rgb_image(array)
    pixels = np.ascontiguousarray(array.as_ndarray())
    Image.fromarray(pixels).save(path)


def write_bitmap(bitmap: Bitmap, path: Path) -> None:
    """Save a 32-bit BGRX bitmap as an image file."""
    pixels = bitmap.as_ndarray()
    if not bitmap.header.is_top_down:
        pixels = pixels[::-1]
    rgb = np.ascontiguousarray(pixels[:, :, _BGRX_TO_RGB])
    Image.fromarray(rgb).save(path)


def write_centroids(centroids: CentroidList, path: Path) -> None:
    """Save centroids as a JSON list of ``{"x": ..., "y": ...}`` objects."""
    path.write_text(
        json.dumps([c.to_dict() for c in centroids], indent=2),
        encoding="utf-8",
    )


def get_filtered_path(input_path: Path, suffix: str = "filtered") -> Path:
    """Generate an output path next to the input.

    Converts: scene.png -> scene-filtered.png

    Args:
        input_path: Original image path
        suffix: Word appended to the stem

    Returns:
        Path with ``-{suffix}`` before the extension
    """
    return input_path.parent / f"{input_path.stem}-{suffix}{input_path.suffix}"
