"""Filter selection and orchestration.

FilterPipeline holds the color and depth filter selectors and drives the
selected filter's expression sequence against an engine session. The
filtered image is moved back into the caller's array; the object centroid
filter also returns the centroids it found.
"""

import time
from collections.abc import Callable

import structlog

from imagebridge.config import ImageBridgeSettings
from imagebridge.core.expressions import PipelineStage, centroid_stages, kmeans_stages
from imagebridge.core.transfer import move_data
from imagebridge.core.validator import validate_rgb_image
from imagebridge.domain import CentroidList, FilterId, FilterResult, ForeignArray
from imagebridge.domain.centroid import centroids_from_rows
from imagebridge.engine import EngineSession
from imagebridge.exceptions import SessionNotReadyError
from imagebridge.utils import FilterLogger

FilterHandler = Callable[[ForeignArray], FilterResult]


def coerce_filter_id(filter_id: FilterId | str | int) -> FilterId | str | int:
    """Return the FilterId matching ``filter_id``, or the value unchanged."""
    if isinstance(filter_id, FilterId):
        return filter_id
    try:
        return FilterId(filter_id)
    except ValueError:
        return filter_id


class FilterPipeline:
    """Applies the selected filter to images through an engine session.

    Example:
        with EngineSession() as session:
            pipeline = FilterPipeline(session)
            pipeline.set_color_filter(FilterId.GRAYSCALE_THRESHOLD)
            result = pipeline.apply_color_filter(image)
            print(result.centroids)
    """

    def __init__(
        self,
        session: EngineSession,
        settings: ImageBridgeSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the pipeline with both selectors set to no filter.

        Args:
            session: Engine session used for every filter
            settings: Filter settings (defaults used if None)
            logger: Logger to use (module logger if None)
        """
        self.session = session
        self.settings = settings or ImageBridgeSettings()
        self.logger = logger or structlog.get_logger("imagebridge.pipeline")
        self.filter_logger = FilterLogger(self.logger)

        self._color_filter: FilterId | str | int = FilterId.NONE
        self._depth_filter: FilterId | str | int = FilterId.NONE

        self._color_filters: dict[FilterId, FilterHandler] = {
            FilterId.GRAYSCALE_THRESHOLD: self._detect_objects,
            FilterId.KMEANS_SEGMENTATION: self._segment_kmeans,
        }

    @property
    def color_filter(self) -> FilterId | str | int:
        return self._color_filter

    @property
    def depth_filter(self) -> FilterId | str | int:
        return self._depth_filter

    def set_color_filter(self, filter_id: FilterId | str | int) -> None:
        """Select the filter applied to color images."""
        self._color_filter = coerce_filter_id(filter_id)
        self.logger.debug("Color filter selected", filter=str(self._color_filter))

    def set_depth_filter(self, filter_id: FilterId | str | int) -> None:
        """Select the filter for depth images.

        No depth filter is implemented yet; the selection is only stored.
        """
        self._depth_filter = coerce_filter_id(filter_id)
        self.logger.debug("Depth filter selected", filter=str(self._depth_filter))

    def apply_color_filter(self, image: ForeignArray) -> FilterResult:
        """Apply the selected color filter to ``image`` in place.

        Filters without a handler, including FilterId.NONE, leave the image
        untouched.

        Args:
            image: RGB image owned by the caller; receives the filtered pixels

        Returns:
            FilterResult with the centroids found, if any

        Raises:
            SessionNotReadyError: If the engine session is not started
            NullArgumentError: If image is None
            ShapeMismatchError: If image is not a valid RGB image
            EngineError: If any engine round trip fails
            IncompatibleShapeError: If the engine returns a differently sized image
        """
        if not self.session.is_started:
            raise SessionNotReadyError("apply color filter")

        validate_rgb_image(image)

        filter_id = self._color_filter
        handler = (
            self._color_filters.get(filter_id) if isinstance(filter_id, FilterId) else None
        )
        if handler is None:
            self.filter_logger.log_filter_skipped(str(filter_id))
            return FilterResult(filter_id=filter_id)

        start_time = time.time()
        self.filter_logger.log_filter_start(filter_id.value, image.dims)
        try:
            result = handler(image)
        except Exception as e:
            self.filter_logger.log_filter_error(filter_id.value, e)
            raise

        duration_ms = (time.time() - start_time) * 1000
        self.filter_logger.log_filter_complete(
            filter_id.value, len(result.centroids), duration_ms
        )
        return result

    def _run_stages(self, filter_name: str, stages: list[PipelineStage]) -> None:
        for stage in stages:
            start_time = time.time()
            self.session.evaluate(stage.expression)
            self.filter_logger.log_stage(
                filter_name, stage.name, (time.time() - start_time) * 1000
            )

    def _install_result(self, variable: str, image: ForeignArray) -> None:
        """Fetch an engine image and move its buffer into ``image``."""
        filtered = self.session.get_variable(variable)
        try:
            move_data(filtered, image)
        finally:
            filtered.destroy()

    def _detect_objects(self, image: ForeignArray) -> FilterResult:
        """Mark objects lying on the largest background region.

        An image without qualifying objects comes back unchanged with an
        empty centroid list.
        """
        names = self.settings.variables
        self.session.put_variable(names.input_image, image)
        self._run_stages(
            FilterId.GRAYSCALE_THRESHOLD.value,
            centroid_stages(self.settings.centroids, names),
        )

        annotated = self.session.get_variable(names.annotated_image)
        try:
            centroids = self._fetch_centroids(names.centroids)
            move_data(annotated, image)
        finally:
            annotated.destroy()

        return FilterResult(
            filter_id=FilterId.GRAYSCALE_THRESHOLD,
            applied=True,
            centroids=centroids,
        )

    def _fetch_centroids(self, variable: str) -> CentroidList:
        array = self.session.get_variable(variable)
        try:
            if array.is_empty:
                return []
            return centroids_from_rows(array.as_ndarray())
        finally:
            array.destroy()

    def _segment_kmeans(self, image: ForeignArray) -> FilterResult:
        """Overlay color k-means cluster labels on the image."""
        names = self.settings.variables
        self.session.put_variable(names.input_image, image)
        self._run_stages(
            FilterId.KMEANS_SEGMENTATION.value,
            kmeans_stages(self.settings.segmentation, names),
        )
        self._install_result(names.segmented_image, image)
        return FilterResult(filter_id=FilterId.KMEANS_SEGMENTATION, applied=True)
