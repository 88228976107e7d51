"""
Background removal for scanned documents.

Makes pixels close to a sampled paper color fully transparent. The matte is
hard (binary alpha), which works on flat, evenly lit paper and leaves halos
on textured or shadowed backgrounds.
"""

import logging
import math
from typing import Optional

import numpy as np

from pagescan.common.types import RGB, PixelBuffer

logger = logging.getLogger(__name__)

# Largest Euclidean distance in 8-bit RGB space
MAX_COLOR_DISTANCE = math.sqrt(3 * 255**2)


def sample_color(buf: PixelBuffer, x: float, y: float) -> Optional[RGB]:
    """
    Sample the color at a buffer position.

    Args:
        buf: Buffer to sample.
        x: Column in buffer pixels (floored).
        y: Row in buffer pixels (floored).

    Returns:
        The pixel's RGB, or None when (x, y) falls outside the buffer. A
        stray click is normal, so this never raises.
    """
    if not (math.isfinite(x) and math.isfinite(y)):
        return None

    col, row = math.floor(x), math.floor(y)
    if col < 0 or col >= buf.width or row < 0 or row >= buf.height:
        return None

    r, g, b = buf.data[row, col, :3]
    return RGB(int(r), int(g), int(b))


def color_distance(c1: RGB, c2: RGB) -> float:
    """
    Euclidean distance between two colors in RGB space.

    Returns:
        0.0 for identical colors up to ~441.67 for black vs. white.
    """
    return math.sqrt((c1.r - c2.r) ** 2 + (c1.g - c2.g) ** 2 + (c1.b - c2.b) ** 2)


def remove_background(
    buf: PixelBuffer,
    target: RGB,
    tolerance: float,
    *,
    tolerance_scale: float = 4.41,
    max_tolerance: float = 50,
) -> PixelBuffer:
    """
    Return a copy of ``buf`` with background-colored pixels made transparent.

    A pixel matches when its RGB distance to ``target`` is at most
    ``tolerance * tolerance_scale``; its alpha becomes 0. Other pixels keep
    their alpha, and RGB channels are never changed.

    Args:
        buf: Source buffer (not modified).
        target: Sampled background color.
        tolerance: Slider value in [0, max_tolerance].
        tolerance_scale: Distance per tolerance step.
        max_tolerance: Upper bound of the slider.

    Returns:
        New PixelBuffer.

    Raises:
        ValueError: If tolerance is outside [0, max_tolerance].

    Example:
        >>> paper = sample_color(buf, 5, 5)
        >>> transparent = remove_background(buf, paper, tolerance=10)
    """
    if not 0 <= tolerance <= max_tolerance:
        raise ValueError(f"Tolerance {tolerance} out of range [0, {max_tolerance}]")

    result = buf.copy()
    max_distance = tolerance * tolerance_scale

    diff = result.rgb.astype(np.float64) - target.as_array()
    distance = np.sqrt(np.sum(diff * diff, axis=2))
    matte = distance <= max_distance
    result.data[..., 3][matte] = 0

    logger.debug(
        f"Background removal: {int(matte.sum())} of {buf.width * buf.height} pixels "
        f"within {max_distance:.2f} of {format_rgb(target)}"
    )
    return result


def create_background_removal_preview(
    buf: PixelBuffer,
    target: RGB,
    tolerance: float,
    *,
    tolerance_scale: float = 4.41,
    max_tolerance: float = 50,
) -> PixelBuffer:
    """Preview of remove_background(); the source stays intact for cancel."""
    return remove_background(
        buf,
        target,
        tolerance,
        tolerance_scale=tolerance_scale,
        max_tolerance=max_tolerance,
    )


def format_rgb(color: RGB) -> str:
    """Display string like ``RGB(255, 255, 255)``."""
    return f"RGB({color.r}, {color.g}, {color.b})"


def rgb_to_css(color: RGB) -> str:
    """CSS color string like ``rgb(255, 255, 255)``."""
    return f"rgb({color.r}, {color.g}, {color.b})"
