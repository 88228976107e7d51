"""
Integration tests for the scan pipeline.
"""

import numpy as np
import pytest

from pagescan.alignment.crop_points import initialize_crop_points
from pagescan.alignment.types import FailureReason, GeometryConfig
from pagescan.common.types import RGB, ImageDimensions, PixelBuffer, Rectangle
from pagescan.config_loader import ScannerConfig
from pagescan.enhancement.types import FilterConfig
from pagescan.pipeline.scan_pipeline import ScanPipeline, process_scan


@pytest.fixture
def page_photo():
    """A 300x240 photo: grey table, white page at (50,40)-(250,200), dark ink line."""
    data = np.full((240, 300, 4), 255, dtype=np.uint8)
    data[..., :3] = 90
    data[40:200, 50:250, :3] = 245
    data[100:104, 80:220, :3] = 20
    return PixelBuffer(300, 240, data)


@pytest.fixture
def page_points():
    return initialize_crop_points(Rectangle(50, 40, 200, 160))


class TestScanPipeline:
    """Tests for ScanPipeline class."""

    def test_initialization_default_config(self):
        pipeline = ScanPipeline()

        assert pipeline.config.geometry.min_output_px == 50

    def test_initialization_with_config(self):
        config = ScannerConfig(geometry=GeometryConfig(min_output_px=10))

        assert ScanPipeline(config=config).config is config

    def test_crop_only(self, page_photo, page_points):
        result = ScanPipeline().process(page_photo, 300, 240, page_points)

        assert result.success is True
        assert result.dimensions == ImageDimensions(200, 160)
        np.testing.assert_array_equal(result.buffer.data, page_photo.data[40:200, 50:250])
        assert result.background_removed is False

    def test_full_scan(self, page_photo, page_points):
        """Binarize then clear the white paper: only ink stays opaque."""
        before = page_photo.tobytes()

        result = ScanPipeline().process(
            page_photo,
            300,
            240,
            page_points,
            filters=FilterConfig(black_and_white=True),
            background=RGB(255, 255, 255),
            tolerance=0,
        )

        assert result.success is True
        assert result.background_removed is True
        opaque = result.buffer.alpha == 255
        assert opaque.sum() == 4 * 140
        assert np.all(result.buffer.rgb[opaque] == 0)
        assert page_photo.tobytes() == before

    def test_crop_failure_stops_pipeline(self, page_photo):
        points = initialize_crop_points(Rectangle(0, 0, 10, 10))

        result = ScanPipeline().process(
            page_photo, 300, 240, points, background=RGB(255, 255, 255)
        )

        assert result.success is False
        assert result.failure_reason == FailureReason.TOO_SMALL
        assert result.buffer is None

    def test_configured_bounds_are_used(self, page_photo):
        points = initialize_crop_points(Rectangle(0, 0, 10, 10))
        config = ScannerConfig(geometry=GeometryConfig(min_output_px=5))

        result = ScanPipeline(config=config).crop(page_photo, 300, 240, points)

        assert result.success is True
        assert result.dimensions == ImageDimensions(10, 10)

    def test_invalid_tolerance_reported(self, page_photo, page_points):
        result = ScanPipeline().process(
            page_photo, 300, 240, page_points, background=RGB(0, 0, 0), tolerance=99
        )

        assert result.success is False
        assert "out of range" in result.message

    def test_enhance_is_non_destructive(self, page_photo):
        before = page_photo.tobytes()
        enhanced = ScanPipeline().enhance(page_photo, FilterConfig(brightness=30))

        assert page_photo.tobytes() == before
        assert enhanced.tobytes() != before

    def test_remove_background_uses_default_tolerance(self):
        """Default tolerance 10 reaches 44.1, so distance 40 is cleared."""
        data = np.zeros((1, 1, 4), dtype=np.uint8)
        data[0, 0] = [255, 215, 255, 255]
        buf = PixelBuffer(1, 1, data)

        result = ScanPipeline().remove_background(buf, RGB(255, 255, 255))

        assert result.alpha[0, 0] == 0
        assert buf.alpha[0, 0] == 255


class TestProcessScan:
    def test_one_shot(self, page_photo, page_points):
        result = process_scan(page_photo, page_points, filters=FilterConfig(contrast=10))

        assert result.success is True
        assert result.dimensions == ImageDimensions(200, 160)

    def test_one_shot_with_dpr(self, page_photo):
        """CSS quad at dpr 2 crops the matching region of the buffer."""
        points = initialize_crop_points(Rectangle(25, 20, 100, 80))

        result = process_scan(page_photo, points, dpr=2)

        np.testing.assert_array_equal(result.buffer.data, page_photo.data[40:200, 50:250])
