"""Unit tests for the image file I/O layer."""

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from imagebridge.core.converter import rgb_array_to_bitmap
from imagebridge.domain import BitmapHeader, Centroid, ElementType, ForeignArray
from imagebridge.exceptions import ShapeMismatchError
from imagebridge.io import (
    get_filtered_path,
    read_rgb_image,
    write_bitmap,
    write_centroids,
    write_rgb_image,
)


@pytest.fixture
def pixels() -> np.ndarray:
    rng = np.random.default_rng(3)
    return rng.integers(0, 256, size=(3, 5, 3), dtype=np.uint8)


@pytest.fixture
def png_path(tmp_path: Path, pixels: np.ndarray) -> Path:
    path = tmp_path / "scene.png"
    Image.fromarray(pixels).save(path)
    return path


class TestReadRgbImage:
    """Tests for read_rgb_image."""

    def test_read(self, png_path: Path, pixels: np.ndarray) -> None:
        image = read_rgb_image(png_path)

        assert image.dims == (3, 5, 3)
        assert image.element_type is ElementType.UINT8
        np.testing.assert_array_equal(image.as_ndarray(), pixels)

    def test_read_rgba_drops_alpha(self, tmp_path: Path, pixels: np.ndarray) -> None:
        rgba = np.dstack([pixels, np.full(pixels.shape[:2], 128, dtype=np.uint8)])
        path = tmp_path / "alpha.png"
        Image.fromarray(rgba).save(path)

        image = read_rgb_image(path)

        np.testing.assert_array_equal(image.as_ndarray(), pixels)

    def test_read_grayscale_expands(self, tmp_path: Path) -> None:
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((2, 2), 77, dtype=np.uint8)).save(path)

        image = read_rgb_image(path)

        assert image.dims == (2, 2, 3)
        assert set(image.data.tolist()) == {77}

    def test_read_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_rgb_image(tmp_path / "nope.png")

    def test_read_uses_allocator(self, png_path: Path, tracking_allocator) -> None:
        image = read_rgb_image(png_path, tracking_allocator)
        assert tracking_allocator.allocated[-1] is image.data


class TestWriting:
    """Tests for the writers."""

    def test_write_rgb_image(self, tmp_path: Path, pixels: np.ndarray) -> None:
        path = tmp_path / "out.png"

        write_rgb_image(ForeignArray.from_ndarray(pixels), path)

        with Image.open(path) as image:
            np.testing.assert_array_equal(np.asarray(image), pixels)

    def test_write_rejects_non_rgb(self, tmp_path: Path) -> None:
        with pytest.raises(ShapeMismatchError):
            write_rgb_image(ForeignArray.create(ElementType.DOUBLE, (2, 2, 3)), tmp_path / "x.png")

    def test_write_bitmap(self, tmp_path: Path, pixels: np.ndarray) -> None:
        """Test a BGRX bitmap is saved with the original colors."""
        image = ForeignArray.from_ndarray(pixels)
        bitmap = rgb_array_to_bitmap(image, BitmapHeader.top_down(width=5, rows=3))
        path = tmp_path / "bitmap.png"

        write_bitmap(bitmap, path)

        with Image.open(path) as saved:
            np.testing.assert_array_equal(np.asarray(saved), pixels)

    def test_write_centroids(self, tmp_path: Path) -> None:
        path = tmp_path / "centroids.json"

        write_centroids([Centroid(1.5, 2.0), Centroid(3.0, 4.25)], path)

        assert json.loads(path.read_text(encoding="utf-8")) == [
            {"x": 1.5, "y": 2.0},
            {"x": 3.0, "y": 4.25},
        ]


class TestGetFilteredPath:
    """Tests for output path naming."""

    def test_default_suffix(self) -> None:
        assert get_filtered_path(Path("/data/scene.png")) == Path("/data/scene-filtered.png")

    def test_custom_suffix(self) -> None:
        assert get_filtered_path(Path("a.jpg"), "kmeans") == Path("a-kmeans.jpg")
