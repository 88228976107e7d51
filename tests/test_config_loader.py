"""
Unit tests for config_loader module.
"""

import copy
import tempfile
from pathlib import Path

import pytest
import yaml

from pagescan.config_loader import ScannerConfig, load_config

VALID_CONFIG = {
    "geometry": {
        "order_tie_threshold": 10.0,
        "min_output_px": 50,
        "max_output_px": 5000,
    },
    "enhancement": {"binarize_floor": 128, "binarize_bias": 0.85},
    "background": {
        "tolerance_scale": 4.41,
        "max_tolerance": 50,
        "default_tolerance": 10,
    },
    "export": {"filename_prefix": "scan", "default_format": "png"},
}


@pytest.fixture
def write_config():
    """Write a config dict to a temporary YAML file, removed after the test."""
    paths = []

    def _write(raw):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            yaml.dump(raw, f)
            paths.append(Path(f.name))
        return paths[-1]

    yield _write

    for path in paths:
        path.unlink()


def _variant(section, key, value):
    raw = copy.deepcopy(VALID_CONFIG)
    raw[section][key] = value
    return raw


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_default_config(self):
        """Test loading the packaged configuration file."""
        config = load_config()

        assert isinstance(config, ScannerConfig)
        assert config.geometry.order_tie_threshold == 10.0
        assert config.geometry.min_output_px == 50
        assert config.geometry.max_output_px == 5000
        assert config.enhancement.binarize_floor == 128
        assert config.enhancement.binarize_bias == pytest.approx(0.85)
        assert config.background.tolerance_scale == pytest.approx(4.41)
        assert config.background.max_tolerance == 50
        assert config.export.default_format == "png"

    def test_default_file_matches_dataclass_defaults(self):
        assert load_config() == ScannerConfig()

    def test_load_custom_config(self, write_config):
        raw = _variant("geometry", "min_output_px", 20)
        raw["export"]["default_format"] = "svg"

        config = load_config(write_config(raw))

        assert config.geometry.min_output_px == 20
        assert config.export.default_format == "svg"

    def test_missing_file_raises_error(self):
        with pytest.raises(FileNotFoundError):
            load_config(Path("nonexistent_config.yaml"))

    def test_missing_section(self, write_config):
        raw = copy.deepcopy(VALID_CONFIG)
        del raw["background"]

        with pytest.raises(ValueError, match="Invalid configuration file"):
            load_config(write_config(raw))

    def test_empty_file(self, write_config):
        with pytest.raises(ValueError, match="Invalid configuration file"):
            load_config(write_config(None))

    def test_min_not_below_max(self, write_config):
        raw = _variant("geometry", "min_output_px", 6000)

        with pytest.raises(ValueError, match="must be less than"):
            load_config(write_config(raw))

    def test_negative_tie_threshold(self, write_config):
        raw = _variant("geometry", "order_tie_threshold", -1)

        with pytest.raises(ValueError, match="order_tie_threshold cannot be negative"):
            load_config(write_config(raw))

    def test_binarize_floor_out_of_range(self, write_config):
        raw = _variant("enhancement", "binarize_floor", 300)

        with pytest.raises(ValueError, match="binarize_floor"):
            load_config(write_config(raw))

    def test_default_tolerance_above_max(self, write_config):
        raw = _variant("background", "default_tolerance", 60)

        with pytest.raises(ValueError, match="default_tolerance"):
            load_config(write_config(raw))

    def test_invalid_export_format(self, write_config):
        raw = _variant("export", "default_format", "tiff")

        with pytest.raises(ValueError, match="Invalid default_format"):
            load_config(write_config(raw))

    def test_invalid_filename_prefix(self, write_config):
        raw = _variant("export", "filename_prefix", "scans/")

        with pytest.raises(ValueError, match="Invalid filename_prefix"):
            load_config(write_config(raw))
