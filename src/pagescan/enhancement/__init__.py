"""
Enhancement: per-pixel photometric filters

Brightness, contrast, saturation and black-and-white conversion over RGBA
pixel buffers, with a fixed composition order.
"""

from pagescan.enhancement.filters import (
    apply_brightness_contrast,
    apply_filters,
    apply_saturation,
    clone_buffer,
    compute_luma,
    convert_to_black_and_white,
    filtered_copy,
    has_active_filters,
)
from pagescan.enhancement.types import (
    DEFAULT_FILTER_CONFIG,
    EnhancementConfig,
    FilterConfig,
)

__all__ = [
    "FilterConfig",
    "EnhancementConfig",
    "DEFAULT_FILTER_CONFIG",
    "apply_brightness_contrast",
    "apply_saturation",
    "convert_to_black_and_white",
    "compute_luma",
    "has_active_filters",
    "apply_filters",
    "clone_buffer",
    "filtered_copy",
]
