"""
Data types and structures for the Alignment module.

Provides crop-point values, configuration, and the structured result
returned by perspective rectification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pagescan.common.types import ImageDimensions, PixelBuffer

@dataclass(frozen=True)
class CropPoint:
    """
    One corner of the crop quadrilateral, in CSS pixel space.

    Drag state belongs to the UI layer and is not tracked here.
    """

    x: float
    y: float


class FailureReason(Enum):
    """Specific reasons a rectification request is refused."""

    NONE = "None"  # Succeeded
    INVALID_SOURCE = "Invalid Source"  # No image, size mismatch or bad dpr
    INVALID_POINTS = "Invalid Points"  # Wrong count or non-finite coordinates
    TOO_SMALL = "Too Small"  # Output below minimum dimensions
    TOO_LARGE = "Too Large"  # Output above maximum dimensions
    DEGENERATE_GEOMETRY = "Degenerate Geometry"  # Transform construction failed


@dataclass
class GeometryConfig:
    """Configuration for crop-point ordering and output bounds."""

    order_tie_threshold: float = 10.0  # |dy| at or below which x decides TR/BL
    min_output_px: int = 50
    max_output_px: int = 5000


@dataclass
class RectificationResult:
    """
    Output from perspective rectification.

    Attributes:
        success: True if a rectified buffer was produced.
        message: Human-readable status suitable for direct display.
        failure_reason: Category of failure, NONE on success.
        buffer: The rectified RGBA buffer (None on failure).
        dimensions: Output dimensions (None on failure).
    """

    success: bool
    message: str
    failure_reason: FailureReason = FailureReason.NONE
    buffer: Optional[PixelBuffer] = None
    dimensions: Optional[ImageDimensions] = None

    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> "RectificationResult":
        return cls(success=False, message=message, failure_reason=reason)
