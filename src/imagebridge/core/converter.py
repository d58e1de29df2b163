"""Pixel layout conversion between engine arrays and host bitmaps.

Engine images are plane-major and column-major: channel ``c`` of the pixel
at row ``y``, column ``x`` of an ``H x W`` image lives at flat offset
``y + x*H + c*W*H``, with planes ordered R, G, B.

Host bitmaps are row-major and interleaved: the pixel at ``(x, y)`` starts at
byte ``(x + y*W) * 4`` and holds ``[Blue, Green, Red, 0]``. Only top-down
bitmaps (negative header height) are produced and accepted.
"""

import numpy as np

from imagebridge.core.validator import validate_rgb_image
from imagebridge.domain.array import BufferAllocator, ElementType, ForeignArray
from imagebridge.domain.bitmap import (
    BGRX_BIT_COUNT,
    BGRX_PIXEL_SIZE,
    Bitmap,
    BitmapHeader,
)
from imagebridge.exceptions import (
    DimensionMismatchError,
    NullArgumentError,
    OutOfMemoryError,
    ShapeMismatchError,
)

# Source RGB plane for each destination byte; the fourth byte is padding
BGRX_SOURCE_PLANES: tuple[int, int, int] = (2, 1, 0)


def source_offset(x: int, y: int, channel: int, height: int, width: int) -> int:
    """Flat offset of one channel sample in an engine RGB array."""
    return y + x * height + channel * width * height


def bitmap_offset(x: int, y: int, width: int) -> int:
    """Byte offset of a pixel in a BGRX bitmap."""
    return (x + y * width) * BGRX_PIXEL_SIZE


def bgrx_pixel(image: ForeignArray, x: int, y: int) -> tuple[int, int, int, int]:
    """Compute the bitmap bytes of one pixel straight from the engine layout.

    Args:
        image: Valid RGB image
        x: Column index
        y: Row index

    Returns:
        ``(blue, green, red, 0)``
    """
    height, width, _ = image.dims
    data = image.data
    b, g, r = (
        int(data[source_offset(x, y, plane, height, width)])
        for plane in BGRX_SOURCE_PLANES
    )
    return b, g, r, 0


def rgb_array_to_bitmap(image: ForeignArray, header: BitmapHeader | None) -> Bitmap:
    """Convert an engine RGB image into a top-down BGRX bitmap.

    Args:
        image: RGB image in engine layout
        header: Target bitmap header; height must be the negated image height

    Returns:
        New bitmap whose buffer is owned by the caller

    Raises:
        NullArgumentError: If image or header is None
        ShapeMismatchError: If image is not a valid RGB image
        DimensionMismatchError: If the header does not match the image size
        OutOfMemoryError: If the pixel buffer cannot be allocated
    """
    validate_rgb_image(image)
    if header is None:
        raise NullArgumentError("header")

    height, width, _ = image.dims
    if height != -header.height or width != header.width:
        raise DimensionMismatchError(
            expected=(-height, width),
            actual=(header.height, header.width),
        )

    nbytes = height * width * BGRX_PIXEL_SIZE
    try:
        bits = np.zeros(nbytes, dtype=np.uint8)
    except MemoryError as e:
        raise OutOfMemoryError(nbytes) from e

    rgb = image.as_ndarray()
    pixels = bits.reshape(height, width, BGRX_PIXEL_SIZE)
    for byte_index, plane in enumerate(BGRX_SOURCE_PLANES):
        pixels[:, :, byte_index] = rgb[:, :, plane]

    return Bitmap(header=header, bits=bits)


def bitmap_to_rgb_array(
    bitmap: Bitmap | None,
    allocator: BufferAllocator | None = None,
) -> ForeignArray:
    """Convert a top-down BGRX bitmap into an engine RGB image.

    The padding byte is dropped.

    Args:
        bitmap: Source bitmap
        allocator: Allocator for the new array's buffer

    Returns:
        New ``[rows, width, 3]`` uint8 array

    Raises:
        NullArgumentError: If bitmap is None
        ShapeMismatchError: If the bitmap is bottom-up or not 32-bit
        DimensionMismatchError: If the buffer size does not match the header
    """
    if bitmap is None:
        raise NullArgumentError("bitmap")

    header = bitmap.header
    if not header.is_top_down:
        raise ShapeMismatchError("bitmap is bottom-up; expected a negative height")
    if header.bit_count != BGRX_BIT_COUNT:
        raise ShapeMismatchError(
            f"bitmap has {header.bit_count} bits per pixel, expected {BGRX_BIT_COUNT}"
        )
    if bitmap.bits.size != header.image_size:
        raise DimensionMismatchError(
            expected=(header.image_size,),
            actual=(int(bitmap.bits.size),),
        )

    image = ForeignArray.create(
        ElementType.UINT8, (header.rows, header.width, 3), allocator
    )
    rgb = image.as_ndarray()
    pixels = bitmap.as_ndarray()
    for byte_index, plane in enumerate(BGRX_SOURCE_PLANES):
        rgb[:, :, plane] = pixels[:, :, byte_index]
    return image
