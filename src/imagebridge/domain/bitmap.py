"""Host bitmap types.

The host draws 32-bit device independent bitmaps: rows of interleaved
``[Blue, Green, Red, unused]`` bytes. A negative header height marks a
top-down bitmap, where the first row in memory is the top row.
"""

from dataclasses import dataclass

import numpy as np

# Bytes per pixel in a 32-bit BGRX bitmap
BGRX_PIXEL_SIZE = 4
BGRX_BIT_COUNT = 32


@dataclass(frozen=True)
class BitmapHeader:
    """Header describing a host bitmap.

    Attributes:
        width: Pixel columns
        height: Pixel rows; negative for top-down row order
        bit_count: Bits per pixel
        planes: Color planes (always 1)
    """

    width: int
    height: int
    bit_count: int = BGRX_BIT_COUNT
    planes: int = 1

    @classmethod
    def top_down(cls, width: int, rows: int) -> "BitmapHeader":
        """Create a top-down 32-bit header for ``rows`` x ``width`` pixels."""
        return cls(width=width, height=-rows)

    @property
    def is_top_down(self) -> bool:
        return self.height < 0

    @property
    def rows(self) -> int:
        """Number of pixel rows regardless of row order."""
        return abs(self.height)

    @property
    def image_size(self) -> int:
        """Size of the pixel buffer in bytes."""
        return self.width * self.rows * self.bit_count // 8


@dataclass
class Bitmap:
    """A host bitmap: header plus a flat byte buffer owned by the caller."""

    header: BitmapHeader
    bits: np.ndarray

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the four bytes of the pixel at column ``x``, row ``y``."""
        offset = (x + y * self.header.width) * BGRX_PIXEL_SIZE
        b, g, r, pad = self.bits[offset : offset + BGRX_PIXEL_SIZE]
        return int(b), int(g), int(r), int(pad)

    def as_ndarray(self) -> np.ndarray:
        """View the bits as a ``(rows, width, 4)`` array."""
        return self.bits.reshape(self.header.rows, self.header.width, BGRX_PIXEL_SIZE)
