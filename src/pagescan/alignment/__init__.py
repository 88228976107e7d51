"""
Alignment: crop-point geometry and perspective rectification

Turns four user-placed corners on a photographed page into an axis-aligned
rectangle.

Pipeline stages:
1. Point validation (count and finite coordinates)
2. Point ordering [TL, TR, BL, BR]
3. Output sizing (max of opposite edges, dpr applied)
4. Bounds check (50..5000 px per side by default)
5. Inverse-mapped nearest-neighbour resampling
"""

from pagescan.alignment.crop_points import (
    calculate_output_dimensions,
    initialize_crop_points,
    order_crop_points,
    update_crop_point,
    validate_crop_points,
)
from pagescan.alignment.image_rectification import build_inverse_transform, rectify
from pagescan.alignment.orientation import (
    calculate_rotated_dimensions,
    normalize_rotation,
    rotate_buffer,
)
from pagescan.alignment.types import (
    CropPoint,
    FailureReason,
    GeometryConfig,
    RectificationResult,
)

__all__ = [
    "CropPoint",
    "FailureReason",
    "GeometryConfig",
    "RectificationResult",
    "initialize_crop_points",
    "update_crop_point",
    "validate_crop_points",
    "order_crop_points",
    "calculate_output_dimensions",
    "build_inverse_transform",
    "rectify",
    "normalize_rotation",
    "calculate_rotated_dimensions",
    "rotate_buffer",
]
