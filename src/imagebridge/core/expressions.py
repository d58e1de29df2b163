"""Engine expressions evaluated by the image filters.

Each filter is a fixed sequence of stages. A stage is one expression string
sent to the engine; stages communicate through workspace variables. The
input and output variable names come from configuration, the intermediate
names are private to this module.
"""

from dataclasses import dataclass

from imagebridge.config import CentroidConfig, SegmentationConfig, VariableNames


@dataclass(frozen=True)
class PipelineStage:
    """One engine round trip.

    Attributes:
        name: Short stage name used in logs
        expression: Expression evaluated by the engine
    """

    name: str
    expression: str


def _join(*statements: str) -> str:
    return " ".join(statements)


def remove_background_stage(names: VariableNames) -> PipelineStage:
    """Threshold the grayscale image and mask out the background."""
    img = names.input_image
    return PipelineStage(
        name="remove_background",
        expression=_join(
            f"grayscale_img = rgb2gray({img});",
            "threshold = graythresh(grayscale_img);",
            "only_background_mask = imbinarize(grayscale_img, threshold);",
            "not_background_mask = ~only_background_mask;",
            f"no_background_img = {img}.*repmat(uint8(not_background_mask), [1, 1, 3]);",
        ),
    )


def find_table_stage() -> PipelineStage:
    """Pick the largest filled background region as the table surface."""
    return PipelineStage(
        name="find_table",
        expression=_join(
            "only_background_mask = imfill(only_background_mask, 'holes');",
            "background_regions = regionprops(only_background_mask, grayscale_img, "
            "{'Area', 'Centroid', 'PixelIdxList'});",
            "[max_area, max_id] = max([background_regions.Area]);",
            "max_region_pixels = background_regions(max_id).PixelIdxList;",
        ),
    )


def restrict_to_table_stage(config: CentroidConfig) -> PipelineStage:
    """Erode the table mask and keep only foreground pixels on the table."""
    return PipelineStage(
        name="restrict_to_table",
        expression=_join(
            "table_mask = zeros(size(only_background_mask));",
            "table_mask(max_region_pixels) = 1;",
            f"table_mask = imerode(table_mask, strel('cube', {config.erosion_size}));",
            "only_table_img = no_background_img.*repmat(uint8(table_mask), [1, 1, 3]);",
            "no_table_background_mask = table_mask & not_background_mask;",
        ),
    )


def find_centroids_stage(config: CentroidConfig, names: VariableNames) -> PipelineStage:
    """Measure objects on the table and keep centroids of large enough ones."""
    return PipelineStage(
        name="find_centroids",
        expression=_join(
            "objects = regionprops(no_table_background_mask, grayscale_img, "
            "{'Area', 'Centroid'});",
            f"allCentroids = arrayfun(@(n) n > {config.min_object_area}, [objects.Area]);",
            "validCentroidIdx = find(allCentroids == 1);",
            "numValidCentroids = length(validCentroidIdx);",
            "unformattedCentroids = [objects(validCentroidIdx).Centroid];",
            f"{names.centroids} = transpose(reshape(unformattedCentroids, "
            "[2, numValidCentroids]));",
        ),
    )


def draw_markers_stage(config: CentroidConfig, names: VariableNames) -> PipelineStage:
    """Draw a circle at every centroid on a copy of the input image."""
    out = names.annotated_image
    centroids = names.centroids
    return PipelineStage(
        name="draw_markers",
        expression=_join(
            f"{out} = {names.input_image};",
            "for i = 1:numValidCentroids,",
            f"currX = {centroids}(i, 1);",
            f"currY = {centroids}(i, 2);",
            f"{out} = insertShape({out}, 'circle', [currX currY {config.marker_radius}], "
            f"'LineWidth', {config.marker_line_width}, "
            f"'Color', '{config.marker_color.value}');",
            "end",
        ),
    )


def centroid_stages(config: CentroidConfig, names: VariableNames) -> list[PipelineStage]:
    """Stages of the object centroid filter, in evaluation order."""
    return [
        remove_background_stage(names),
        find_table_stage(),
        restrict_to_table_stage(config),
        find_centroids_stage(config, names),
        draw_markers_stage(config, names),
    ]


def kmeans_stages(config: SegmentationConfig, names: VariableNames) -> list[PipelineStage]:
    """Stages of the k-means segmentation filter, in evaluation order."""
    img = names.input_image
    return [
        PipelineStage(
            name="kmeans",
            expression=f"[labels, centers] = imsegkmeans({img}, {config.cluster_count});",
        ),
        PipelineStage(
            name="label_overlay",
            expression=f"{names.segmented_image} = labeloverlay({img}, labels);",
        ),
    ]
