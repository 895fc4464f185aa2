"""
YAML-based pipeline configuration loader.

Loads default config, merges with user overrides, and exposes a
``PipelineConfig`` dataclass for type-safe access throughout the package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default_config.yaml"


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass
class HistogramConfig:
    bit_depth: Optional[int] = None
    """8 or 16; ``None`` infers the depth from the image dtype."""
    slice_index: Optional[int] = None
    """Slice of a 3-D volume to analyse; ``None`` picks the middle slice."""


@dataclass
class StatisticsConfig:
    zero_variance: str = "zero"
    empty_region: str = "nan"


@dataclass
class ReportingConfig:
    json: bool = True
    csv: bool = True


@dataclass
class PipelineConfig:
    """Top-level configuration for the texture statistics pipeline."""

    name: str = "hist-texture"
    version: str = "1.0.0"
    verbose: bool = False
    histogram: HistogramConfig = field(default_factory=HistogramConfig)
    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge *override* into *base* (mutates *base*)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


_SECTION_TYPES = {
    "HistogramConfig": HistogramConfig,
    "StatisticsConfig": StatisticsConfig,
    "ReportingConfig": ReportingConfig,
}


def _dict_to_dataclass(cls, data: Dict[str, Any]):
    """Recursively convert a nested dict to the corresponding dataclass tree."""
    if not isinstance(data, dict):
        return data
    field_types = {f.name: f.type for f in cls.__dataclass_fields__.values()}
    kwargs = {}
    for key, value in data.items():
        if key not in field_types:
            continue
        ft = field_types[key]
        # Annotations are strings under ``from __future__ import annotations``
        if isinstance(ft, str):
            ft = _SECTION_TYPES.get(ft, ft)
        if hasattr(ft, "__dataclass_fields__") and isinstance(value, dict):
            kwargs[key] = _dict_to_dataclass(ft, value)
        else:
            kwargs[key] = value
    return cls(**kwargs)


def _validate(cfg: PipelineConfig) -> PipelineConfig:
    from .buffer import SUPPORTED_BIT_DEPTHS
    from .metrics.texture import EMPTY_REGION_POLICIES, ZERO_VARIANCE_POLICIES

    if cfg.histogram.bit_depth is not None and cfg.histogram.bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise ValueError(
            f"histogram.bit_depth must be one of {SUPPORTED_BIT_DEPTHS} or null, "
            f"got {cfg.histogram.bit_depth!r}"
        )
    if cfg.statistics.zero_variance not in ZERO_VARIANCE_POLICIES:
        raise ValueError(
            f"statistics.zero_variance must be one of {ZERO_VARIANCE_POLICIES}, "
            f"got {cfg.statistics.zero_variance!r}"
        )
    if cfg.statistics.empty_region not in EMPTY_REGION_POLICIES:
        raise ValueError(
            f"statistics.empty_region must be one of {EMPTY_REGION_POLICIES}, "
            f"got {cfg.statistics.empty_region!r}"
        )
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_config(user_config_path: Optional[str] = None) -> PipelineConfig:
    """Load the pipeline configuration.

    Parameters
    ----------
    user_config_path : str, optional
        Path to a user-provided YAML file whose values override the defaults.

    Returns
    -------
    PipelineConfig
        Fully merged configuration dataclass.

    Raises
    ------
    ValueError
        If a bit depth or degenerate-input policy is not recognised.
    """
    # Load defaults
    with open(_DEFAULT_CONFIG_PATH, "r") as fh:
        base: Dict[str, Any] = yaml.safe_load(fh) or {}

    # Merge user overrides
    if user_config_path is not None:
        with open(user_config_path, "r") as fh:
            overrides: Dict[str, Any] = yaml.safe_load(fh) or {}
        _deep_merge(base, overrides)

    # Flatten 'pipeline' key into top-level
    pipeline_section = base.pop("pipeline", {})
    base.update(pipeline_section)

    return _validate(_dict_to_dataclass(PipelineConfig, base))
