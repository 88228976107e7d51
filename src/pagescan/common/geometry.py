"""
Geometry utilities shared by the crop-point model and the host's hit-testing.

Pure math over points in CSS pixel space. No state.
"""

import math
from typing import Protocol, Sequence

from pagescan.common.types import Rectangle


class HasXY(Protocol):
    x: float
    y: float


def calculate_distance(p1: HasXY, p2: HasXY) -> float:
    """
    Euclidean distance between two points.

    Example:
        >>> calculate_distance(Point(0, 0), Point(3, 4))
        5.0
    """
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def bounding_rectangle(points: Sequence[HasXY]) -> Rectangle:
    """
    Smallest axis-aligned rectangle enclosing all points.

    Raises:
        ValueError: If no points are given.
    """
    if not points:
        raise ValueError("Cannot compute bounding rectangle of zero points")

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    left, top = min(xs), min(ys)
    return Rectangle(x=left, y=top, width=max(xs) - left, height=max(ys) - top)


def is_point_inside_circle(
    x: float, y: float, center_x: float, center_y: float, radius: float
) -> bool:
    """True if (x, y) lies inside or on the circle."""
    return math.hypot(x - center_x, y - center_y) <= radius


def is_point_inside_rectangle(x: float, y: float, rect: Rectangle) -> bool:
    """True if (x, y) lies inside or on the edge of rect."""
    return (
        rect.x <= x <= rect.x + rect.width and rect.y <= y <= rect.y + rect.height
    )


def find_crop_point_at_position(
    x: float, y: float, points: Sequence[HasXY], radius: float = 10.0
) -> int:
    """
    Index of the first point whose handle circle contains (x, y).

    Returns:
        The point index, or -1 if no handle is hit.
    """
    for index, point in enumerate(points):
        if is_point_inside_circle(x, y, point.x, point.y, radius):
            return index
    return -1
