"""
Image Rectification Utilities

Provides the perspective crop that maps a user-placed quadrilateral onto an
axis-aligned rectangle. Resampling walks destination pixels through the
inverse homography and copies the nearest source pixel, so the output has no
coverage holes.
"""

import logging
import math
from typing import Sequence

import cv2
import numpy as np

from pagescan.alignment.crop_points import (
    NUM_CROP_POINTS,
    calculate_output_dimensions,
    order_crop_points,
    validate_crop_points,
)
from pagescan.alignment.types import CropPoint, FailureReason, RectificationResult
from pagescan.common.types import CHANNELS, ImageDimensions, PixelBuffer

logger = logging.getLogger(__name__)

# Destination rows resampled per band; bounds temporary float arrays
ROW_BAND_SIZE = 256

# Max corner reprojection error (CSS px) accepted from the solved transform
REPROJECTION_TOLERANCE = 1e-3


def build_inverse_transform(
    ordered_points: Sequence[CropPoint], dimensions: ImageDimensions
) -> np.ndarray:
    """
    Build the destination -> source homography for a perspective crop.

    The forward transform sends [TL, TR, BL, BR] to (0,0), (w,0), (0,h),
    (w,h); its inverse is returned.

    Args:
        ordered_points: 4 crop points in [TL, TR, BL, BR] order (CSS px).
        dimensions: Output rectangle size.

    Returns:
        3x3 float64 inverse homography.

    Raises:
        ValueError: If the quadrilateral is degenerate (e.g. collinear
                   points) and no invertible projective transform exists.
    """
    src = np.array([[p.x, p.y] for p in ordered_points], dtype=np.float32)
    w, h = dimensions.width, dimensions.height
    dst = np.array([[0, 0], [w, 0], [0, h], [w, h]], dtype=np.float32)

    try:
        forward = cv2.getPerspectiveTransform(src, dst)
        inverse = np.linalg.inv(forward)
    except (cv2.error, np.linalg.LinAlgError) as e:
        raise ValueError(f"Cannot build perspective transform: {e}") from e

    if not (np.all(np.isfinite(forward)) and np.all(np.isfinite(inverse))):
        raise ValueError("Perspective transform is not finite; quadrilateral is degenerate")

    # A singular or ill-conditioned solve does not reproduce the corners
    projected = cv2.perspectiveTransform(
        src.reshape(-1, 1, 2).astype(np.float64), forward
    ).reshape(-1, 2)
    error = float(np.max(np.abs(projected - dst)))
    if not math.isfinite(error) or error > REPROJECTION_TOLERANCE * max(w, h, 1):
        raise ValueError(
            f"Quadrilateral is degenerate: corner reprojection error {error:.3g}px"
        )

    return inverse


def _sample_nearest(
    source: PixelBuffer,
    source_width: int,
    source_height: int,
    inverse: np.ndarray,
    dimensions: ImageDimensions,
    dpr: float,
) -> np.ndarray:
    """Resample the destination raster band by band; unmapped pixels stay (0,0,0,0)."""
    w, h = dimensions.width, dimensions.height
    out = np.zeros((h, w, CHANNELS), dtype=np.uint8)
    src_data = source.data.reshape(-1, CHANNELS)
    xs = np.arange(w, dtype=np.float64)

    for y0 in range(0, h, ROW_BAND_SIZE):
        y1 = min(y0 + ROW_BAND_SIZE, h)
        gx, gy = np.meshgrid(xs, np.arange(y0, y1, dtype=np.float64))

        denom = inverse[2, 0] * gx + inverse[2, 1] * gy + inverse[2, 2]
        with np.errstate(divide="ignore", invalid="ignore"):
            sx = (inverse[0, 0] * gx + inverse[0, 1] * gy + inverse[0, 2]) / denom
            sy = (inverse[1, 0] * gx + inverse[1, 1] * gy + inverse[1, 2]) / denom

            # CSS -> buffer pixels, rounded half up
            px = np.floor(sx * dpr + 0.5)
            py = np.floor(sy * dpr + 0.5)

            inside = (
                np.isfinite(px)
                & np.isfinite(py)
                & (px >= 0)
                & (px < source_width)
                & (py >= 0)
                & (py < source_height)
            )

        idx = py[inside].astype(np.int64) * source_width + px[inside].astype(np.int64)
        out[y0:y1][inside] = src_data[idx]

    return out


def rectify(
    source: PixelBuffer,
    source_width: int,
    source_height: int,
    crop_points: Sequence[CropPoint],
    dpr: float = 1.0,
    *,
    min_size: int = 50,
    max_size: int = 5000,
    tie_threshold: float = 10.0,
) -> RectificationResult:
    """
    Rectify the quadrilateral under ``crop_points`` into a rectangle.

    Pipeline:
    1. Require exactly 4 finite crop points
    2. Order them [TL, TR, BL, BR]
    3. Compute output dimensions (dpr applied)
    4. Reject outputs below ``min_size`` or above ``max_size``
    5. Build the inverse homography
    6. Resample destination pixels from the source

    Args:
        source: Source RGBA buffer.
        source_width: Source width in buffer pixels (dpr applied).
        source_height: Source height in buffer pixels (dpr applied).
        crop_points: 4 crop points in CSS pixels, any order.
        dpr: Device pixel ratio between CSS and buffer pixels, at least 1.
        min_size: Smallest accepted output side, in pixels.
        max_size: Largest accepted output side, in pixels.
        tie_threshold: Passed to order_crop_points.

    Returns:
        RectificationResult. Never raises for bad points, bounds or
        degenerate geometry; check ``success``.

    Example:
        >>> result = rectify(buf, buf.width, buf.height, points)
        >>> if result.success:
        ...     rectified = result.buffer
    """
    if source is None or (source.width, source.height) != (source_width, source_height):
        logger.warning("Rectification rejected: no matching source image")
        return RectificationResult.failure(
            FailureReason.INVALID_SOURCE,
            "No image loaded. Please load an image first.",
        )

    if not (math.isfinite(dpr) and dpr >= 1):
        logger.warning(f"Rectification rejected: invalid device pixel ratio {dpr}")
        return RectificationResult.failure(
            FailureReason.INVALID_SOURCE,
            f"Invalid device pixel ratio: {dpr}",
        )

    if crop_points is None or len(crop_points) != NUM_CROP_POINTS:
        logger.warning("Rectification rejected: crop points missing")
        return RectificationResult.failure(
            FailureReason.INVALID_POINTS,
            "Need exactly 4 crop points. Please show crop points first.",
        )

    if not validate_crop_points(crop_points):
        logger.warning("Rectification rejected: non-finite crop point coordinates")
        return RectificationResult.failure(
            FailureReason.INVALID_POINTS,
            "Crop points have invalid coordinates. Please reset the crop points.",
        )

    ordered = order_crop_points(crop_points, tie_threshold=tie_threshold)
    try:
        dimensions = calculate_output_dimensions(ordered, dpr)
    except ValueError as e:
        logger.warning(f"Rectification rejected: {e}")
        return RectificationResult.failure(
            FailureReason.TOO_LARGE,
            f"Crop area too large. Maximum dimensions: {max_size}x{max_size} pixels.",
        )
    logger.debug(f"Calculated output dimensions: {dimensions.width}x{dimensions.height}")

    if dimensions.width < min_size or dimensions.height < min_size:
        logger.warning(
            f"Rectification rejected: {dimensions.width}x{dimensions.height} "
            f"below minimum {min_size}x{min_size}"
        )
        return RectificationResult.failure(
            FailureReason.TOO_SMALL,
            f"Crop area too small. Minimum dimensions: {min_size}x{min_size} pixels.",
        )

    if dimensions.width > max_size or dimensions.height > max_size:
        logger.warning(
            f"Rectification rejected: {dimensions.width}x{dimensions.height} "
            f"above maximum {max_size}x{max_size}"
        )
        return RectificationResult.failure(
            FailureReason.TOO_LARGE,
            f"Crop area too large. Maximum dimensions: {max_size}x{max_size} pixels.",
        )

    try:
        inverse = build_inverse_transform(ordered, dimensions)
    except ValueError as e:
        logger.error(f"Perspective crop failed: {e}")
        return RectificationResult.failure(
            FailureReason.DEGENERATE_GEOMETRY, f"Crop failed: {e}"
        )

    data = _sample_nearest(source, source_width, source_height, inverse, dimensions, dpr)

    logger.info(
        f"Rectified quadrilateral to {dimensions.width}x{dimensions.height} rectangle"
    )
    return RectificationResult(
        success=True,
        message="Perspective crop applied successfully",
        buffer=PixelBuffer(dimensions.width, dimensions.height, data),
        dimensions=dimensions,
    )
