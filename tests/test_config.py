"""Tests for the YAML configuration loader."""

import pytest

from hist_texture.config import PipelineConfig, load_config


def test_defaults():
    cfg = load_config()
    assert isinstance(cfg, PipelineConfig)
    assert cfg.name == "hist-texture"
    assert cfg.verbose is False
    assert cfg.histogram.bit_depth is None
    assert cfg.histogram.slice_index is None
    assert cfg.statistics.zero_variance == "zero"
    assert cfg.statistics.empty_region == "nan"
    assert cfg.reporting.json
    assert cfg.reporting.csv


def test_user_overrides(tmp_dir):
    p = tmp_dir / "custom.yaml"
    p.write_text(
        "pipeline:\n"
        "  verbose: true\n"
        "histogram:\n"
        "  bit_depth: 16\n"
        "statistics:\n"
        "  empty_region: raise\n"
        "reporting:\n"
        "  csv: false\n"
    )
    cfg = load_config(str(p))
    assert cfg.verbose is True
    assert cfg.histogram.bit_depth == 16
    assert cfg.statistics.empty_region == "raise"
    # Untouched keys keep their defaults
    assert cfg.statistics.zero_variance == "zero"
    assert cfg.reporting.json is True
    assert cfg.reporting.csv is False


def test_invalid_policy(tmp_dir):
    p = tmp_dir / "bad.yaml"
    p.write_text("statistics:\n  zero_variance: ignore\n")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_invalid_bit_depth(tmp_dir):
    p = tmp_dir / "bad.yaml"
    p.write_text("histogram:\n  bit_depth: 12\n")
    with pytest.raises(ValueError):
        load_config(str(p))
