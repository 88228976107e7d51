"""
pagescan: geometric and photometric correction for photographed pages

Turns a photograph of a handwritten page (as an RGBA pixel buffer) into a
perspective-corrected, tonally enhanced, optionally background-removed
raster ready for archival.

Modules:
- alignment: crop-point model and perspective rectification
- enhancement: brightness / contrast / saturation / black & white filters
- background: color-distance background segmentation
- export: PNG / SVG encoding and filename helpers
- pipeline: configured orchestration of the above
"""

from pagescan.alignment import (
    CropPoint,
    RectificationResult,
    calculate_output_dimensions,
    initialize_crop_points,
    order_crop_points,
    rectify,
    validate_crop_points,
)
from pagescan.background import color_distance, remove_background, sample_color
from pagescan.common import RGB, ImageDimensions, PixelBuffer, Point, Rectangle
from pagescan.config_loader import load_config
from pagescan.enhancement import (
    FilterConfig,
    apply_filters,
    clone_buffer,
    has_active_filters,
)
from pagescan.pipeline import ScanPipeline, ScannerConfig, ScanResult, process_scan

__version__ = "0.1.0"

__all__ = [
    "PixelBuffer",
    "Point",
    "Rectangle",
    "ImageDimensions",
    "RGB",
    "CropPoint",
    "RectificationResult",
    "initialize_crop_points",
    "validate_crop_points",
    "order_crop_points",
    "calculate_output_dimensions",
    "rectify",
    "FilterConfig",
    "apply_filters",
    "has_active_filters",
    "clone_buffer",
    "sample_color",
    "color_distance",
    "remove_background",
    "ScannerConfig",
    "ScanResult",
    "ScanPipeline",
    "process_scan",
    "load_config",
]
