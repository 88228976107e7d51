"""
Scan pipeline orchestrating crop, enhancement and background removal.

Stages:
1. Perspective crop (rectify the quadrilateral)
2. Photometric filters (on a copy)
3. Background removal (optional, on a copy)

Fail-fast: stops at the first failing stage. Every stage returns fresh
buffers, so the caller's source stays intact for cancel/restore.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from pagescan.alignment.image_rectification import rectify
from pagescan.alignment.types import CropPoint
from pagescan.background.segmentation import remove_background
from pagescan.common.types import RGB, PixelBuffer
from pagescan.config_loader import ScannerConfig, load_config
from pagescan.enhancement.filters import filtered_copy
from pagescan.enhancement.types import DEFAULT_FILTER_CONFIG, FilterConfig
from pagescan.pipeline.types import ScanResult

logger = logging.getLogger(__name__)


class ScanPipeline:
    """
    Configured entry point for the scanning engine.

    Example:
        >>> pipeline = ScanPipeline()
        >>> result = pipeline.process(
        ...     source, source.width, source.height, points,
        ...     filters=FilterConfig(black_and_white=True),
        ...     background=RGB(255, 255, 255),
        ... )
        >>> if result.success:
        ...     png = export_buffer(result.buffer)
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Initialize the scan pipeline.

        Args:
            config: Pre-loaded configuration object. If None, will load from file.
            config_path: Path to config file. If None, uses default location.
        """
        if config is not None:
            self.config = config
            logger.info("Using provided configuration")
        else:
            self.config = load_config(config_path) if config_path else load_config()
            logger.info("Loaded configuration from file")

    def crop(
        self,
        source: PixelBuffer,
        source_width: int,
        source_height: int,
        crop_points: Sequence[CropPoint],
        dpr: float = 1.0,
    ) -> ScanResult:
        """Rectify the crop quadrilateral using the configured bounds."""
        geometry = self.config.geometry
        result = rectify(
            source,
            source_width,
            source_height,
            crop_points,
            dpr,
            min_size=geometry.min_output_px,
            max_size=geometry.max_output_px,
            tie_threshold=geometry.order_tie_threshold,
        )
        return ScanResult(
            success=result.success,
            message=result.message,
            failure_reason=result.failure_reason,
            buffer=result.buffer,
            dimensions=result.dimensions,
        )

    def enhance(self, buf: PixelBuffer, filters: FilterConfig) -> PixelBuffer:
        """Filtered copy of ``buf``; ``buf`` is not modified."""
        enhancement = self.config.enhancement
        return filtered_copy(
            buf,
            filters,
            binarize_floor=enhancement.binarize_floor,
            binarize_bias=enhancement.binarize_bias,
        )

    def remove_background(
        self, buf: PixelBuffer, target: RGB, tolerance: Optional[float] = None
    ) -> PixelBuffer:
        """Background-removed copy of ``buf`` using the configured tolerance default."""
        background = self.config.background
        if tolerance is None:
            tolerance = background.default_tolerance
        return remove_background(
            buf,
            target,
            tolerance,
            tolerance_scale=background.tolerance_scale,
            max_tolerance=background.max_tolerance,
        )

    def process(
        self,
        source: PixelBuffer,
        source_width: int,
        source_height: int,
        crop_points: Sequence[CropPoint],
        dpr: float = 1.0,
        filters: FilterConfig = DEFAULT_FILTER_CONFIG,
        background: Optional[RGB] = None,
        tolerance: Optional[float] = None,
    ) -> ScanResult:
        """
        Run crop -> filters -> background removal.

        Args:
            source: Source RGBA buffer.
            source_width: Source width in buffer pixels.
            source_height: Source height in buffer pixels.
            crop_points: 4 crop points in CSS pixels.
            dpr: Device pixel ratio.
            filters: Photometric settings; identity skips the stage.
            background: Sampled paper color; None skips segmentation.
            tolerance: Segmentation tolerance; None uses the configured default.

        Returns:
            ScanResult with the finished buffer on success.
        """
        logger.info("[Stage 1/3] Perspective crop")
        cropped = self.crop(source, source_width, source_height, crop_points, dpr)
        if not cropped.success:
            logger.warning(f"Pipeline stopped at crop: {cropped.message}")
            return cropped

        logger.info("[Stage 2/3] Photometric filters")
        output = self.enhance(cropped.buffer, filters)

        removed = False
        if background is not None:
            logger.info("[Stage 3/3] Background removal")
            try:
                output = self.remove_background(output, background, tolerance)
            except ValueError as e:
                logger.warning(f"Pipeline stopped at background removal: {e}")
                return ScanResult(success=False, message=str(e))
            removed = True

        logger.info(f"Scan finished: {output.width}x{output.height}")
        return ScanResult(
            success=True,
            message="Scan processed successfully",
            buffer=output,
            dimensions=output.dimensions,
            background_removed=removed,
        )


def process_scan(
    source: PixelBuffer,
    crop_points: Sequence[CropPoint],
    dpr: float = 1.0,
    filters: FilterConfig = DEFAULT_FILTER_CONFIG,
    background: Optional[RGB] = None,
    tolerance: Optional[float] = None,
    config: Optional[ScannerConfig] = None,
) -> ScanResult:
    """
    Convenience function for one-shot scan processing.

    The source dimensions are taken from the buffer itself.
    """
    pipeline = ScanPipeline(config=config)
    return pipeline.process(
        source,
        source.width,
        source.height,
        crop_points,
        dpr=dpr,
        filters=filters,
        background=background,
        tolerance=tolerance,
    )
