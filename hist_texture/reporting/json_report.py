"""
JSON report generator for histogram texture statistics.

Serialises one or more statistics records together with provenance
metadata into a structured JSON file suitable for machine consumption and
downstream analysis.  Undefined (NaN) values are written as ``null``.
"""

from __future__ import annotations

import hashlib
import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from .. import __version__
from ..metrics.texture import TextureStatistics


def _finite_or_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def record_to_dict(record: TextureStatistics) -> Dict[str, Any]:
    """Flatten a record to ``{"label", <columns>, "n_samples", ...}``."""
    values = {name: _finite_or_none(v) for name, v in record.as_row().items()}
    return {
        "label": record.label,
        **values,
        "n_samples": record.n_samples,
        "n_levels": record.n_levels,
        "warnings": list(record.warnings),
    }


def generate_json_report(
    records: Iterable[TextureStatistics],
    input_files: Dict[str, str],
    config_path: Optional[str] = None,
    output_path: str | Path = "texture_report.json",
) -> Path:
    """Generate a structured JSON statistics report.

    Parameters
    ----------
    records : iterable of TextureStatistics
        Computed statistics, one per image / region.
    input_files : dict
        Mapping of input type → file path for provenance.
    config_path : str, optional
        Path to the configuration YAML used.
    output_path : path-like
        Where to write the JSON report.

    Returns
    -------
    Path
        Absolute path to the generated report.
    """
    output_path = Path(output_path)

    # Provenance
    config_hash = ""
    if config_path:
        with open(config_path, "rb") as f:
            config_hash = hashlib.sha256(f.read()).hexdigest()[:12]

    report = {
        "provenance": {
            "toolbox": "hist-texture",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "config_hash": config_hash,
            "input_files": input_files,
        },
        "statistics": [record_to_dict(r) for r in records],
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as fh:
        json.dump(report, fh, indent=2, allow_nan=False)

    return output_path.resolve()
