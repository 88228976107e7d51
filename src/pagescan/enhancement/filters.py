"""
Photometric Filters - Brightness, Contrast, Saturation and Binarization.

Every operator mutates the buffer it is given and leaves the alpha channel
untouched. Use clone_buffer() or filtered_copy() when the input must survive
(e.g. the "before" snapshot kept for cancel).

Composition order in apply_filters():
    1. Black & white (saturation is skipped, it has no meaning afterwards)
    2. Saturation
    3. Brightness / contrast, always last

Float results are clamped to [0, 255] and rounded half to even when written
back, which is how a clamped byte array stores them.
"""

import logging

import numpy as np

from pagescan.common.types import PixelBuffer
from pagescan.enhancement.types import FilterConfig

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

MIDPOINT = 128.0


def _store(buf: PixelBuffer, rgb: np.ndarray) -> None:
    """Clamp and round float RGB values into the buffer's color channels."""
    buf.data[..., :3] = np.rint(np.clip(rgb, 0.0, 255.0)).astype(np.uint8)


def compute_luma(buf: PixelBuffer) -> np.ndarray:
    """Per-pixel luma as float64, shape (height, width)."""
    rgb = buf.rgb.astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]


def apply_brightness_contrast(buf: PixelBuffer, brightness: int, contrast: int) -> None:
    """
    Adjust brightness and contrast in place.

    Contrast scales each channel around 128 first, then brightness adds a
    constant. The order matters for extreme values.

    Args:
        buf: Buffer to modify.
        brightness: -100..100, mapped to an additive -255..255.
        contrast: -100..100, mapped to a factor 0..2.
    """
    brightness_value = brightness / 100 * 255
    contrast_factor = (contrast + 100) / 100

    rgb = buf.rgb.astype(np.float64)
    rgb = (rgb - MIDPOINT) * contrast_factor + MIDPOINT
    rgb += brightness_value
    _store(buf, rgb)


def apply_saturation(buf: PixelBuffer, saturation: int) -> None:
    """
    Adjust saturation in place by interpolating between luma and color.

    A factor of 0 (saturation=-100) gives grayscale, 1 is identity, and
    values above 1 oversaturate.
    """
    factor = (saturation + 100) / 100

    gray = compute_luma(buf)[..., np.newaxis]
    rgb = buf.rgb.astype(np.float64)
    _store(buf, gray + factor * (rgb - gray))


def convert_to_black_and_white(
    buf: PixelBuffer, floor: int = 128, bias: float = 0.85
) -> None:
    """
    Binarize in place to pure black ink on white paper.

    Two passes: luma per pixel (rounded half up) and its mean, then one
    global threshold ``max(floor, mean * bias)``. Pixels with luma at or
    below the threshold become (0, 0, 0), the rest (255, 255, 255).
    """
    if buf.width == 0 or buf.height == 0:
        return

    gray = np.floor(compute_luma(buf) + 0.5)
    average = float(gray.mean())
    threshold = max(floor, average * bias)
    logger.debug(f"Black & white threshold {threshold:.1f} (mean luma {average:.1f})")

    bw = np.where(gray > threshold, 255, 0).astype(np.uint8)
    buf.data[..., 0] = bw
    buf.data[..., 1] = bw
    buf.data[..., 2] = bw


def has_active_filters(config: FilterConfig) -> bool:
    """True if the config differs from the identity transform."""
    return (
        config.brightness != 0
        or config.contrast != 0
        or config.saturation != 0
        or config.black_and_white
    )


def apply_filters(
    buf: PixelBuffer,
    config: FilterConfig,
    binarize_floor: int = 128,
    binarize_bias: float = 0.85,
) -> None:
    """
    Apply every active filter from ``config`` to ``buf`` in place.

    Example:
        >>> preview = clone_buffer(original)
        >>> apply_filters(preview, FilterConfig(contrast=20, black_and_white=True))
    """
    if not has_active_filters(config):
        return

    if config.black_and_white:
        convert_to_black_and_white(buf, floor=binarize_floor, bias=binarize_bias)
    elif config.saturation != 0:
        apply_saturation(buf, config.saturation)

    if config.brightness != 0 or config.contrast != 0:
        apply_brightness_contrast(buf, config.brightness, config.contrast)

    logger.debug(f"Applied filters {config} to {buf.width}x{buf.height} buffer")


def clone_buffer(buf: PixelBuffer) -> PixelBuffer:
    """Deep copy sharing no storage with ``buf``."""
    return buf.copy()


def filtered_copy(
    buf: PixelBuffer,
    config: FilterConfig,
    binarize_floor: int = 128,
    binarize_bias: float = 0.85,
) -> PixelBuffer:
    """Non-destructive apply_filters(): returns a filtered clone."""
    result = clone_buffer(buf)
    apply_filters(result, config, binarize_floor=binarize_floor, binarize_bias=binarize_bias)
    return result
