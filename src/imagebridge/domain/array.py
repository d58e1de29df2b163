"""Foreign array types exchanged with the engine.

The engine stores every array as a flat, column-major (Fortran order) data
vector plus an element type tag and a list of extents. ForeignArray mirrors
that representation so pixel offsets computed here match the engine's own.

Buffer ownership is explicit: each ForeignArray owns its data vector through
an OwnedBuffer, which can give the vector away exactly once.
"""

from enum import Enum
from typing import Any

import numpy as np

from imagebridge.exceptions import BufferReleasedError

# Minimum dimension count of an engine array
MIN_DIMENSIONS = 2


class ElementType(Enum):
    """Element class tags supported by the bridge."""

    UINT8 = "uint8"
    UINT16 = "uint16"
    INT32 = "int32"
    SINGLE = "single"
    DOUBLE = "double"
    LOGICAL = "logical"

    @property
    def dtype(self) -> np.dtype:
        """Numpy dtype used to store elements of this type."""
        return np.dtype(_NUMPY_DTYPES[self])

    @property
    def element_size(self) -> int:
        """Size of one element in bytes."""
        return self.dtype.itemsize

    @classmethod
    def from_dtype(cls, dtype: Any) -> "ElementType":
        """Look up the element type for a numpy dtype.

        Args:
            dtype: Anything accepted by ``np.dtype``

        Returns:
            Matching ElementType

        Raises:
            ValueError: If the dtype has no engine counterpart
        """
        dtype = np.dtype(dtype)
        for element_type, name in _NUMPY_DTYPES.items():
            if np.dtype(name) == dtype:
                return element_type
        raise ValueError(f"Unsupported element dtype: {dtype}")


_NUMPY_DTYPES: dict[ElementType, str] = {
    ElementType.UINT8: "uint8",
    ElementType.UINT16: "uint16",
    ElementType.INT32: "int32",
    ElementType.SINGLE: "float32",
    ElementType.DOUBLE: "float64",
    ElementType.LOGICAL: "bool",
}


def normalize_dims(shape: tuple[int, ...]) -> tuple[int, ...]:
    """Normalize a shape to engine conventions.

    Engine arrays have at least two dimensions and never carry trailing
    singleton dimensions beyond the second.

    Args:
        shape: Shape as reported by numpy

    Returns:
        Engine-style extents
    """
    dims = list(shape)
    while len(dims) < MIN_DIMENSIONS:
        dims.append(1)
    while len(dims) > MIN_DIMENSIONS and dims[-1] == 1:
        dims.pop()
    return tuple(int(d) for d in dims)


class BufferAllocator:
    """Allocation hooks for array data vectors.

    Numpy reclaims memory once the last reference is dropped, so ``free``
    only has to forget the vector. Subclasses can track allocations.
    """

    def allocate(self, count: int, dtype: np.dtype) -> np.ndarray:
        """Allocate a zero-filled data vector."""
        return np.zeros(count, dtype=dtype)

    def free(self, data: np.ndarray) -> None:
        """Release a data vector previously handed out by ``allocate``."""


DEFAULT_ALLOCATOR = BufferAllocator()


class OwnedBuffer:
    """A data vector with a single owner.

    The vector can be relinquished once; afterwards the buffer is empty and
    freeing it is a no-op.
    """

    __slots__ = ("_allocator", "_data")

    def __init__(
        self,
        data: np.ndarray | None,
        allocator: BufferAllocator | None = None,
    ) -> None:
        self._data = data
        self._allocator = allocator or DEFAULT_ALLOCATOR

    @property
    def data(self) -> np.ndarray | None:
        """The owned data vector, or None once released."""
        return self._data

    @property
    def allocator(self) -> BufferAllocator:
        return self._allocator

    @property
    def is_empty(self) -> bool:
        return self._data is None

    def relinquish(self) -> np.ndarray:
        """Give up ownership of the data vector.

        Returns:
            The data vector; the caller becomes its owner

        Raises:
            BufferReleasedError: If the buffer no longer owns a vector
        """
        if self._data is None:
            raise BufferReleasedError()
        data = self._data
        self._data = None
        return data

    def adopt(
        self,
        data: np.ndarray,
        allocator: BufferAllocator | None = None,
    ) -> None:
        """Free the current vector and take ownership of ``data``.

        Args:
            data: Vector to own from now on
            allocator: Allocator that created ``data``; it frees the vector
                later. Keeps the current allocator if None.
        """
        self.free()
        self._data = data
        if allocator is not None:
            self._allocator = allocator

    def free(self) -> None:
        """Free the owned vector, if any."""
        if self._data is not None:
            self._allocator.free(self._data)
            self._data = None


class ForeignArray:
    """A typed, shaped, buffer-backed array in engine layout.

    Element ``(i0, i1, ..., ik)`` lives at flat offset
    ``i0 + i1*d0 + i2*d0*d1 + ...`` of the data vector.

    Example:
        array = ForeignArray.from_ndarray(rgb)   # rgb is (H, W, 3) uint8
        array.dims                               # (H, W, 3)
        array.destroy()
    """

    def __init__(
        self,
        element_type: ElementType,
        dims: tuple[int, ...],
        buffer: OwnedBuffer,
    ) -> None:
        self._element_type = element_type
        self._dims = normalize_dims(tuple(dims))
        self._buffer = buffer

    @classmethod
    def create(
        cls,
        element_type: ElementType,
        dims: tuple[int, ...],
        allocator: BufferAllocator | None = None,
    ) -> "ForeignArray":
        """Create a zero-filled array.

        Args:
            element_type: Element class of the array
            dims: Extents of each dimension
            allocator: Allocator for the data vector

        Returns:
            New ForeignArray owning a fresh vector
        """
        allocator = allocator or DEFAULT_ALLOCATOR
        count = int(np.prod(dims, dtype=np.int64))
        data = allocator.allocate(count, element_type.dtype)
        return cls(element_type, dims, OwnedBuffer(data, allocator))

    @classmethod
    def from_ndarray(
        cls,
        values: np.ndarray,
        allocator: BufferAllocator | None = None,
    ) -> "ForeignArray":
        """Copy a numpy array into a new ForeignArray.

        Args:
            values: Array indexed the natural way, e.g. ``(row, column, channel)``
            allocator: Allocator for the data vector

        Returns:
            New ForeignArray holding a column-major copy of ``values``

        Raises:
            ValueError: If the dtype is not supported
        """
        values = np.asarray(values)
        element_type = ElementType.from_dtype(values.dtype)
        array = cls.create(element_type, values.shape, allocator)
        array._buffer.data[:] = values.ravel(order="F")
        return array

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def element_size(self) -> int:
        return self._element_type.element_size

    @property
    def dims(self) -> tuple[int, ...]:
        return self._dims

    @property
    def ndim(self) -> int:
        return len(self._dims)

    @property
    def numel(self) -> int:
        return int(np.prod(self._dims, dtype=np.int64))

    @property
    def is_empty(self) -> bool:
        """True if any extent is zero."""
        return any(d == 0 for d in self._dims)

    @property
    def buffer(self) -> OwnedBuffer:
        return self._buffer

    @property
    def data(self) -> np.ndarray | None:
        """Flat column-major data vector, or None if the buffer was moved out."""
        return self._buffer.data

    @property
    def has_data(self) -> bool:
        return not self._buffer.is_empty

    def as_ndarray(self) -> np.ndarray:
        """View the data as an array indexed ``(i0, i1, ...)``.

        The returned array shares memory with the buffer.

        Raises:
            BufferReleasedError: If the buffer no longer owns data
        """
        data = self._buffer.data
        if data is None:
            raise BufferReleasedError()
        return data.reshape(self._dims, order="F")

    def destroy(self) -> None:
        """Free the data vector. Safe on arrays whose data was moved out."""
        self._buffer.free()

    def __repr__(self) -> str:
        state = "owned" if self.has_data else "released"
        return (
            f"ForeignArray({self._element_type.value}, dims={self._dims}, {state})"
        )
