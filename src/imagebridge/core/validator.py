"""Validation of foreign arrays against the RGB image contract.

An RGB image is a non-empty ``uint8`` array with exactly three dimensions:
``[height, width, channel]``.
"""

from imagebridge.domain.array import ElementType, ForeignArray
from imagebridge.exceptions import NullArgumentError, ShapeMismatchError

RGB_DIMENSIONS = 3


def rgb_image_violations(array: ForeignArray) -> list[str]:
    """List every way an array breaks the RGB image contract.

    Args:
        array: Array to inspect

    Returns:
        Human-readable violations; empty if the array is a valid RGB image
    """
    violations: list[str] = []
    if array.is_empty:
        violations.append("array is empty")
    if array.element_type is not ElementType.UINT8:
        violations.append(f"element type is {array.element_type.value}, expected uint8")
    if array.ndim != RGB_DIMENSIONS:
        violations.append(f"array has {array.ndim} dimensions, expected {RGB_DIMENSIONS}")
    return violations


def validate_rgb_image(array: ForeignArray | None) -> None:
    """Check that an array can be treated as an RGB image.

    Args:
        array: Array to validate

    Raises:
        NullArgumentError: If array is None
        ShapeMismatchError: If the array is empty, not uint8, or not 3-D
    """
    if array is None:
        raise NullArgumentError("array")

    violations = rgb_image_violations(array)
    if violations:
        raise ShapeMismatchError("; ".join(violations))


def is_rgb_image(array: ForeignArray | None) -> bool:
    """Return True if ``array`` satisfies the RGB image contract."""
    return array is not None and not rgb_image_violations(array)
