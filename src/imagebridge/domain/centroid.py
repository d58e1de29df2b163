"""Centroid annotations produced by the object detection filter."""

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class Centroid:
    """Center of a connected region in image coordinates.

    Coordinates follow the engine's convention: ``x`` is the column and ``y``
    the row, both 1-based and fractional.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Centroid":
        return cls(x=float(data["x"]), y=float(data["y"]))


CentroidList = list[Centroid]


def centroids_from_rows(rows: np.ndarray) -> CentroidList:
    """Build a centroid list from an N x 2 array of ``(x, y)`` rows.

    Row order is preserved. An empty array yields an empty list.

    Args:
        rows: Array with two columns

    Returns:
        List of centroids

    Raises:
        ValueError: If the array cannot be read as pairs
    """
    rows = np.asarray(rows, dtype=np.float64)
    if rows.size == 0:
        return []
    if rows.size % 2 != 0:
        raise ValueError(f"Centroid array of shape {rows.shape} is not a list of pairs")
    return [Centroid(float(x), float(y)) for x, y in rows.reshape(-1, 2)]
