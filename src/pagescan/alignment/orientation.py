"""
Quarter-turn rotation of scanned pages.

Rotating invalidates crop point positions; callers discard their crop points
instead of re-projecting them.
"""

import logging

import numpy as np

from pagescan.common.types import ImageDimensions, PixelBuffer

logger = logging.getLogger(__name__)


def normalize_rotation(rotation: int) -> int:
    """Map any angle in degrees into [0, 360)."""
    return ((rotation % 360) + 360) % 360


def calculate_rotated_dimensions(
    width: int, height: int, rotation: int
) -> ImageDimensions:
    """
    Dimensions of an image after rotation.

    90 and 270 degrees swap width and height (portrait <-> landscape).
    """
    if normalize_rotation(rotation) in (90, 270):
        return ImageDimensions(width=height, height=width)
    return ImageDimensions(width=width, height=height)


def rotate_buffer(buf: PixelBuffer, rotation: int) -> PixelBuffer:
    """
    Rotate a buffer clockwise by a multiple of 90 degrees.

    Args:
        buf: Source buffer (not modified).
        rotation: Angle in degrees, any multiple of 90 (negative allowed).

    Returns:
        New buffer with fresh storage.

    Raises:
        ValueError: If rotation is not a multiple of 90.
    """
    normalized = normalize_rotation(rotation)
    if normalized % 90 != 0:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {rotation}")

    # np.rot90 turns counter-clockwise for positive k
    rotated = np.rot90(buf.data, k=-int(normalized // 90)).copy(order="C")
    dims = calculate_rotated_dimensions(buf.width, buf.height, normalized)
    logger.debug(f"Rotated {buf.width}x{buf.height} by {normalized} degrees")
    return PixelBuffer(dims.width, dims.height, rotated)
