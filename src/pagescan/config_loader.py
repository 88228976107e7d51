"""
Configuration loader for the scanning engine.

Loads and validates configuration from config.yaml file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from pagescan.alignment.types import GeometryConfig
from pagescan.background.types import BackgroundConfig
from pagescan.enhancement.types import EnhancementConfig
from pagescan.export.exporter import (
    SUPPORTED_FORMATS,
    ExportConfig,
    validate_filename,
)

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


@dataclass
class ScannerConfig:
    """Complete engine configuration."""

    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    enhancement: EnhancementConfig = field(default_factory=EnhancementConfig)
    background: BackgroundConfig = field(default_factory=BackgroundConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> ScannerConfig:
    """
    Load engine configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated ScannerConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.geometry.min_output_px)
        50
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading scanner config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded scanner configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> ScannerConfig:
    """Parse raw dictionary into structured config objects."""
    return ScannerConfig(
        geometry=GeometryConfig(
            order_tie_threshold=float(raw["geometry"]["order_tie_threshold"]),
            min_output_px=int(raw["geometry"]["min_output_px"]),
            max_output_px=int(raw["geometry"]["max_output_px"]),
        ),
        enhancement=EnhancementConfig(
            binarize_floor=int(raw["enhancement"]["binarize_floor"]),
            binarize_bias=float(raw["enhancement"]["binarize_bias"]),
        ),
        background=BackgroundConfig(
            tolerance_scale=float(raw["background"]["tolerance_scale"]),
            max_tolerance=int(raw["background"]["max_tolerance"]),
            default_tolerance=int(raw["background"]["default_tolerance"]),
        ),
        export=ExportConfig(
            filename_prefix=str(raw["export"]["filename_prefix"]),
            default_format=str(raw["export"]["default_format"]),
        ),
    )


def _validate_config(config: ScannerConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    geometry = config.geometry
    if geometry.min_output_px < 1:
        raise ValueError("min_output_px must be at least 1")
    if geometry.min_output_px >= geometry.max_output_px:
        raise ValueError(
            f"min_output_px ({geometry.min_output_px}) must be less than "
            f"max_output_px ({geometry.max_output_px})"
        )
    if geometry.order_tie_threshold < 0:
        raise ValueError("order_tie_threshold cannot be negative")

    enhancement = config.enhancement
    if not 0 <= enhancement.binarize_floor <= 255:
        raise ValueError("binarize_floor must be within [0, 255]")
    if enhancement.binarize_bias <= 0:
        raise ValueError("binarize_bias must be positive")

    background = config.background
    if background.tolerance_scale <= 0:
        raise ValueError("tolerance_scale must be positive")
    if not 0 <= background.default_tolerance <= background.max_tolerance:
        raise ValueError(
            f"default_tolerance ({background.default_tolerance}) must be within "
            f"[0, {background.max_tolerance}]"
        )

    if config.export.default_format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Invalid default_format: {config.export.default_format}. "
            f"Must be one of {list(SUPPORTED_FORMATS)}"
        )
    prefix_check = validate_filename(config.export.filename_prefix)
    if not prefix_check.valid:
        raise ValueError(f"Invalid filename_prefix: {prefix_check.message}")

    logger.debug("Configuration validation passed")
