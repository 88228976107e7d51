"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import numpy as np
import pytest

from pagescan.alignment.types import CropPoint
from pagescan.common.types import PixelBuffer


@pytest.fixture
def noise_buffer():
    """Fixture providing a 200x200 buffer of deterministic random RGBA."""
    rng = np.random.default_rng(42)
    data = rng.integers(0, 256, size=(200, 200, 4), dtype=np.uint8)
    return PixelBuffer(200, 200, data)


@pytest.fixture
def opaque_noise_buffer():
    """Fixture providing a 100x100 buffer of random RGB with alpha 255."""
    rng = np.random.default_rng(7)
    rgb = rng.integers(0, 256, size=(100, 100, 3), dtype=np.uint8)
    return PixelBuffer.from_array(rgb)


@pytest.fixture
def sample_quadrilateral_points():
    """Fixture providing a skewed page quadrilateral, deliberately unordered."""
    return [
        CropPoint(300, 150),  # Top-right area
        CropPoint(80, 380),  # Bottom-left area
        CropPoint(100, 200),  # Top-left area
        CropPoint(320, 400),  # Bottom-right area
    ]


@pytest.fixture
def paper_with_red_dot():
    """Fixture providing a 3x3 white page with one red center pixel."""
    data = np.full((3, 3, 4), 255, dtype=np.uint8)
    data[1, 1] = [255, 0, 0, 255]
    return PixelBuffer(3, 3, data)
