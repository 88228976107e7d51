"""
Background: color-distance segmentation and alpha matting

Samples the paper color and makes every pixel within a tolerance of it
transparent.
"""

from pagescan.background.segmentation import (
    MAX_COLOR_DISTANCE,
    color_distance,
    create_background_removal_preview,
    format_rgb,
    remove_background,
    rgb_to_css,
    sample_color,
)
from pagescan.background.types import BackgroundConfig

__all__ = [
    "BackgroundConfig",
    "MAX_COLOR_DISTANCE",
    "sample_color",
    "color_distance",
    "remove_background",
    "create_background_removal_preview",
    "format_rgb",
    "rgb_to_css",
]
