"""
Data types for the scan pipeline.
"""

from dataclasses import dataclass
from typing import Optional

from pagescan.alignment.types import FailureReason
from pagescan.common.types import ImageDimensions, PixelBuffer


@dataclass
class ScanResult:
    """
    Output from the scan pipeline.

    Attributes:
        success: True if every requested stage completed.
        message: Human-readable status suitable for direct display.
        failure_reason: Rectification failure category, NONE otherwise.
        buffer: The finished buffer (None on failure).
        dimensions: Size of the finished buffer (None on failure).
        background_removed: Whether segmentation ran.
    """

    success: bool
    message: str
    failure_reason: FailureReason = FailureReason.NONE
    buffer: Optional[PixelBuffer] = None
    dimensions: Optional[ImageDimensions] = None
    background_removed: bool = False
