"""
Crop-point model for the Alignment module.

Creates, moves, validates and orders the four user-placed corners of a
document quadrilateral, and derives the rectified output size from them.
"""

import logging
import math
from typing import List, Sequence

from pagescan.alignment.types import CropPoint
from pagescan.common.geometry import calculate_distance
from pagescan.common.types import ImageDimensions, Rectangle

logger = logging.getLogger(__name__)

NUM_CROP_POINTS = 4


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def initialize_crop_points(rect: Rectangle) -> List[CropPoint]:
    """
    Place crop points at the four corners of an image rectangle.

    Args:
        rect: The on-screen image area, in CSS pixels.

    Returns:
        Points in slot order [Top-Left, Top-Right, Bottom-Left, Bottom-Right].

    Example:
        >>> initialize_crop_points(Rectangle(10, 20, 100, 80))[3]
        CropPoint(x=110, y=100)
    """
    right = rect.x + rect.width
    bottom = rect.y + rect.height
    return [
        CropPoint(rect.x, rect.y),
        CropPoint(right, rect.y),
        CropPoint(rect.x, bottom),
        CropPoint(right, bottom),
    ]


def update_crop_point(
    points: Sequence[CropPoint], index: int, x: float, y: float
) -> List[CropPoint]:
    """
    Return a new list with the point at ``index`` moved to (x, y).

    An out-of-range index returns an unchanged copy.
    """
    updated = list(points)
    if 0 <= index < len(updated):
        updated[index] = CropPoint(x, y)
    return updated


def validate_crop_points(points: Sequence[CropPoint]) -> bool:
    """
    Check that points form a usable quadrilateral.

    Returns False (never raises) unless there are exactly 4 points and every
    coordinate is a finite number.
    """
    if points is None or len(points) != NUM_CROP_POINTS:
        return False

    for point in points:
        try:
            if not (math.isfinite(point.x) and math.isfinite(point.y)):
                return False
        except (TypeError, AttributeError):
            return False
    return True


def order_crop_points(
    points: Sequence[CropPoint], tie_threshold: float = 10.0
) -> List[CropPoint]:
    """
    Order 4 points as [Top-Left, Top-Right, Bottom-Left, Bottom-Right].

    The algorithm uses the coordinate sum as a proxy for "how top-left":
    - Top-Left: smallest x + y
    - Bottom-Right: largest x + y
    - Of the remaining two, the one with smaller y is Top-Right when their
      y values differ by more than ``tie_threshold``; otherwise the one with
      larger x is Top-Right.

    Args:
        points: 4 crop points in any order.
        tie_threshold: y-difference at or below which x decides.

    Returns:
        New list of the same point objects in canonical order.

    Raises:
        ValueError: If there are not exactly 4 points.
    """
    if len(points) != NUM_CROP_POINTS:
        raise ValueError(f"Need exactly 4 crop points, got {len(points)}")

    by_sum = sorted(points, key=lambda p: p.x + p.y)
    top_left, bottom_right = by_sum[0], by_sum[3]
    first, second = by_sum[1], by_sum[2]

    if abs(first.y - second.y) > tie_threshold:
        top_right, bottom_left = (first, second) if first.y < second.y else (second, first)
    else:
        # Near-horizontal pair: larger x is the right-hand corner
        top_right, bottom_left = (first, second) if first.x >= second.x else (second, first)

    ordered = [top_left, top_right, bottom_left, bottom_right]
    logger.debug(
        f"Ordered points: TL={top_left}, TR={top_right}, "
        f"BL={bottom_left}, BR={bottom_right}"
    )
    return ordered


def calculate_output_dimensions(
    points: Sequence[CropPoint], dpr: float = 1.0
) -> ImageDimensions:
    """
    Calculate the rectified output size in buffer pixels.

    Edges are measured by slot position, so points must already be in
    [TL, TR, BL, BR] order (see order_crop_points). Each output side takes
    the longer of its two opposite edges so no content is lost on
    trapezoids.

    Args:
        points: 4 crop points in CSS pixels, slot-ordered.
        dpr: Device pixel ratio applied to the CSS lengths.

    Returns:
        ImageDimensions with round(max_edge * dpr) per axis.

    Raises:
        ValueError: If there are not exactly 4 points, or if an edge
                   length overflows to infinity.

    Example:
        >>> pts = initialize_crop_points(Rectangle(0, 0, 100, 80))
        >>> calculate_output_dimensions(pts, dpr=2)
        ImageDimensions(width=200, height=160)
    """
    if len(points) != NUM_CROP_POINTS:
        raise ValueError("Need exactly 4 crop points to calculate dimensions")

    top_width = calculate_distance(points[0], points[1])
    bottom_width = calculate_distance(points[2], points[3])
    left_height = calculate_distance(points[0], points[2])
    right_height = calculate_distance(points[1], points[3])

    logger.debug(
        f"Edge lengths - Top: {top_width:.1f}, Bottom: {bottom_width:.1f}, "
        f"Left: {left_height:.1f}, Right: {right_height:.1f}"
    )

    width = max(top_width, bottom_width) * dpr
    height = max(left_height, right_height) * dpr
    if not (math.isfinite(width) and math.isfinite(height)):
        raise ValueError(f"Output dimensions are not finite: {width}x{height}")

    return ImageDimensions(
        width=_round_half_up(width),
        height=_round_half_up(height),
    )
