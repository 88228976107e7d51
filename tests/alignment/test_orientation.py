"""
Unit tests for orientation module.
"""

import numpy as np
import pytest

from pagescan.alignment.orientation import (
    calculate_rotated_dimensions,
    normalize_rotation,
    rotate_buffer,
)
from pagescan.common.types import ImageDimensions, PixelBuffer


@pytest.fixture
def labelled_buffer():
    """3 wide x 2 tall buffer whose red channel numbers the pixels 0..5."""
    data = np.zeros((2, 3, 4), dtype=np.uint8)
    data[..., 0] = np.arange(6, dtype=np.uint8).reshape(2, 3)
    data[..., 3] = 255
    return PixelBuffer(3, 2, data)


class TestNormalizeRotation:
    @pytest.mark.parametrize(
        "rotation,expected",
        [(0, 0), (90, 90), (360, 0), (450, 90), (-90, 270), (-360, 0)],
    )
    def test_normalizes_into_full_turn(self, rotation, expected):
        assert normalize_rotation(rotation) == expected


class TestCalculateRotatedDimensions:
    def test_quarter_turns_swap(self):
        assert calculate_rotated_dimensions(300, 200, 90) == ImageDimensions(200, 300)
        assert calculate_rotated_dimensions(300, 200, -90) == ImageDimensions(200, 300)

    def test_half_turn_keeps(self):
        assert calculate_rotated_dimensions(300, 200, 180) == ImageDimensions(300, 200)
        assert calculate_rotated_dimensions(300, 200, 0) == ImageDimensions(300, 200)


class TestRotateBuffer:
    def test_clockwise_quarter_turn(self, labelled_buffer):
        """Top-left pixel moves to the top-right corner."""
        rotated = rotate_buffer(labelled_buffer, 90)

        assert (rotated.width, rotated.height) == (2, 3)
        np.testing.assert_array_equal(
            rotated.data[..., 0], np.array([[3, 0], [4, 1], [5, 2]])
        )

    def test_negative_quarter_equals_three_quarters(self, labelled_buffer):
        np.testing.assert_array_equal(
            rotate_buffer(labelled_buffer, -90).data,
            rotate_buffer(labelled_buffer, 270).data,
        )

    def test_full_turn_is_identity(self, labelled_buffer):
        rotated = rotate_buffer(labelled_buffer, 360)

        np.testing.assert_array_equal(rotated.data, labelled_buffer.data)
        assert not np.shares_memory(rotated.data, labelled_buffer.data)

    def test_source_untouched(self, labelled_buffer):
        before = labelled_buffer.data.copy()
        rotated = rotate_buffer(labelled_buffer, 180)
        rotated.data[:] = 0

        np.testing.assert_array_equal(labelled_buffer.data, before)

    @pytest.mark.parametrize("rotation", [0, 90, 180, 270])
    def test_result_is_contiguous_copy(self, labelled_buffer, rotation):
        rotated = rotate_buffer(labelled_buffer, rotation)

        assert rotated.data.flags["C_CONTIGUOUS"]
        assert not np.shares_memory(rotated.data, labelled_buffer.data)

    def test_non_quarter_angle_raises(self, labelled_buffer):
        with pytest.raises(ValueError, match="multiple of 90"):
            rotate_buffer(labelled_buffer, 45)
