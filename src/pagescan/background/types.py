"""
Data structures for background segmentation.
"""

from dataclasses import dataclass


@dataclass
class BackgroundConfig:
    """Configuration for chroma-distance background removal."""

    # max_distance = tolerance * tolerance_scale; 50 * 4.41 is about half
    # of the largest RGB distance (~441.67)
    tolerance_scale: float = 4.41
    max_tolerance: int = 50
    default_tolerance: int = 10
