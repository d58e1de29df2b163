"""Buffer moves between foreign arrays.

A move installs the source array's data vector into the destination without
copying it. The destination keeps its element type; a source of a different
type with the same element size has its bytes reinterpreted. The vector keeps
the allocator that created it. The destination's previous vector is freed,
and the source is left as an empty shell that keeps its shape but owns
nothing, so destroying it afterwards frees nothing.
"""

from imagebridge.domain.array import ForeignArray
from imagebridge.exceptions import IncompatibleShapeError, NullArgumentError

MOVE_DIMENSIONS = 3


def check_move_compatible(source: ForeignArray, dest: ForeignArray) -> None:
    """Check that ``dest`` can take ``source``'s buffer.

    Raises:
        IncompatibleShapeError: If element sizes, dimension counts or
            extents differ, or the source is not 3-D
    """
    if source.element_size != dest.element_size:
        raise IncompatibleShapeError(
            f"element size {source.element_size} != {dest.element_size}"
        )
    if source.ndim != MOVE_DIMENSIONS:
        raise IncompatibleShapeError(
            f"source has {source.ndim} dimensions, expected {MOVE_DIMENSIONS}"
        )
    if source.ndim != dest.ndim:
        raise IncompatibleShapeError(
            f"dimension count {source.ndim} != {dest.ndim}"
        )
    if source.dims != dest.dims:
        raise IncompatibleShapeError(f"extents {source.dims} != {dest.dims}")


def move_data(source: ForeignArray | None, dest: ForeignArray | None) -> None:
    """Move the data buffer of ``source`` into ``dest``.

    All checks run before either array is touched; on failure both buffers
    are unchanged.

    Args:
        source: Array giving up its buffer
        dest: Array receiving the buffer; its old buffer is freed

    Raises:
        NullArgumentError: If either array is None
        IncompatibleShapeError: If the arrays are not move-compatible
        BufferReleasedError: If the source no longer owns a buffer
    """
    if source is None:
        raise NullArgumentError("source")
    if dest is None:
        raise NullArgumentError("dest")

    check_move_compatible(source, dest)

    allocator = source.buffer.allocator
    data = source.buffer.relinquish()
    if data.dtype != dest.element_type.dtype:
        # Same element size, so the bytes are reinterpreted in place
        data = data.view(dest.element_type.dtype)
    dest.buffer.adopt(data, allocator)
