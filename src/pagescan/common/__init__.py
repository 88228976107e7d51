"""Shared types and geometry helpers."""

from pagescan.common.geometry import (
    bounding_rectangle,
    calculate_distance,
    find_crop_point_at_position,
    is_point_inside_circle,
    is_point_inside_rectangle,
)
from pagescan.common.types import (
    RGB,
    ImageDimensions,
    PixelBuffer,
    Point,
    Rectangle,
)

__all__ = [
    "PixelBuffer",
    "Point",
    "Rectangle",
    "ImageDimensions",
    "RGB",
    "calculate_distance",
    "bounding_rectangle",
    "is_point_inside_circle",
    "is_point_inside_rectangle",
    "find_crop_point_at_position",
]
