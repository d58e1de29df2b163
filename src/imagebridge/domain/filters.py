"""Filter identifiers and filter results."""

from dataclasses import dataclass, field
from enum import Enum

from imagebridge.domain.centroid import CentroidList


class FilterId(str, Enum):
    """Known image filters.

    - NONE: Leave the image untouched
    - GRAYSCALE_THRESHOLD: Threshold-based object detection on the largest
      background region; draws a marker at each object and returns centroids
    - KMEANS_SEGMENTATION: Color k-means segmentation overlaid on the image
    """

    NONE = "none"
    GRAYSCALE_THRESHOLD = "grayscale_threshold"
    KMEANS_SEGMENTATION = "kmeans_segmentation"


@dataclass
class FilterResult:
    """Outcome of applying a filter to an image.

    Attributes:
        filter_id: Identifier of the selected filter
        applied: Whether a filter actually modified the image
        centroids: Object centroids, only set by GRAYSCALE_THRESHOLD
    """

    filter_id: FilterId | str | int
    applied: bool = False
    centroids: CentroidList = field(default_factory=list)
