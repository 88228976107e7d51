"""
Data structures for photometric enhancement.
"""

from dataclasses import dataclass

# Slider range shared by brightness, contrast and saturation
ADJUSTMENT_MIN = -100
ADJUSTMENT_MAX = 100


@dataclass(frozen=True)
class FilterConfig:
    """
    User-adjustable filter settings. The default is the identity transform.

    Attributes:
        brightness: Additive shift, -100..100 (maps to -255..255).
        contrast: Stretch around mid-grey 128, -100..100.
        saturation: Distance from luma, -100 (grey) .. 100 (double).
        black_and_white: Binarize to pure black/white ink on paper.
    """

    brightness: int = 0
    contrast: int = 0
    saturation: int = 0
    black_and_white: bool = False

    def __post_init__(self):
        for name in ("brightness", "contrast", "saturation"):
            value = getattr(self, name)
            if not ADJUSTMENT_MIN <= value <= ADJUSTMENT_MAX:
                raise ValueError(
                    f"{name}={value} out of range [{ADJUSTMENT_MIN}, {ADJUSTMENT_MAX}]"
                )


DEFAULT_FILTER_CONFIG = FilterConfig()


@dataclass
class EnhancementConfig:
    """Configuration for black-and-white conversion."""

    binarize_floor: int = 128  # Threshold never drops below this luma
    binarize_bias: float = 0.85  # Multiplier on mean luma
