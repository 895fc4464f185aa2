"""
Histogram texture statistics for an image region.

Runs the full feature extraction: ROI histogram → normalization → seven
first-order descriptors (mean, standard deviation, relative smoothness,
skewness, kurtosis, uniformity, normalized entropy).  Degenerate inputs
are handled by explicit policies instead of propagating division by zero:

- an empty region yields an all-NaN record (or raises, with
  ``empty_region="raise"``);
- a zero-variance region reports skewness and kurtosis as 0.0 (or NaN,
  with ``zero_variance="nan"``).

Either case is recorded in the record's ``warnings``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..buffer import IntensityBuffer, RegionDescriptor
from . import moments
from .histogram import EmptyRegionError, compute_histogram, normalize_histogram

ZERO_VARIANCE_POLICIES = ("zero", "nan")
EMPTY_REGION_POLICIES = ("nan", "raise")

# Column names of the results table, in display order
COLUMNS: Tuple[str, ...] = (
    "Mean",
    "Std deviation",
    "Relative Smoothness",
    "Skewness",
    "Kurtosis",
    "Uniformity",
    "Entropy",
)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextureStatistics:
    """Histogram texture descriptors of one image region."""

    label: str
    """Identifies the source image / region."""
    mean: float
    std_deviation: float
    relative_smoothness: float
    skewness: float
    kurtosis: float
    uniformity: float
    entropy: float
    """Shannon entropy normalized by log2 of the number of bins."""
    n_samples: int = 0
    """Number of samples included in the histogram."""
    n_levels: int = 0
    """Histogram length (``2**bit_depth``)."""
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.n_samples == 0

    def as_row(self) -> Dict[str, float]:
        """Flat ``column name → value`` mapping of the seven descriptors."""
        return dict(zip(COLUMNS, (
            self.mean,
            self.std_deviation,
            self.relative_smoothness,
            self.skewness,
            self.kurtosis,
            self.uniformity,
            self.entropy,
        )))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _check_policies(zero_variance: str, empty_region: str) -> None:
    if zero_variance not in ZERO_VARIANCE_POLICIES:
        raise ValueError(
            f"Unknown zero_variance policy {zero_variance!r}; "
            f"expected one of {ZERO_VARIANCE_POLICIES}"
        )
    if empty_region not in EMPTY_REGION_POLICIES:
        raise ValueError(
            f"Unknown empty_region policy {empty_region!r}; "
            f"expected one of {EMPTY_REGION_POLICIES}"
        )


def _validate_counts(histogram: np.ndarray) -> np.ndarray:
    counts = np.asarray(histogram)
    if counts.ndim != 1 or counts.size == 0:
        raise ValueError(f"Expected a non-empty 1-D histogram, got shape {counts.shape}")
    if not np.issubdtype(counts.dtype, np.integer):
        if not np.issubdtype(counts.dtype, np.floating) or not np.all(
            np.isfinite(counts) & (counts == np.floor(counts))
        ):
            raise ValueError(
                "Histogram counts must be whole numbers; "
                "pass integer counts, not a normalized histogram."
            )
        counts = counts.astype(np.int64)
    if counts.min() < 0:
        raise ValueError(f"Histogram counts must be non-negative, got {counts.min()}")
    return counts


def _empty_statistics(label: str, n_levels: int) -> TextureStatistics:
    nan = float("nan")
    return TextureStatistics(
        label=label,
        mean=nan,
        std_deviation=nan,
        relative_smoothness=nan,
        skewness=nan,
        kurtosis=nan,
        uniformity=nan,
        entropy=nan,
        n_samples=0,
        n_levels=n_levels,
        warnings=(
            "Region contains no samples; all statistics are undefined (NaN).",
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def compute_statistics_from_histogram(
    histogram: np.ndarray,
    *,
    label: str = "",
    zero_variance: str = "zero",
    empty_region: str = "nan",
) -> TextureStatistics:
    """Compute the texture descriptors from integer histogram counts.

    Parameters
    ----------
    histogram : np.ndarray
        Counts indexed by intensity (length ``2**bit_depth``).
    label : str
        Name of the source image / region, copied into the record.
    zero_variance : {"zero", "nan"}
        Value reported for skewness and kurtosis when the region has a
        single intensity.
    empty_region : {"nan", "raise"}
        Behaviour when the histogram has no samples.

    Returns
    -------
    TextureStatistics

    Raises
    ------
    ValueError
        If the counts are negative or not whole numbers.
    """
    _check_policies(zero_variance, empty_region)
    counts = _validate_counts(histogram)
    n_samples = int(counts.sum())
    n_levels = int(counts.size)

    if n_samples == 0:
        if empty_region == "raise":
            raise EmptyRegionError(
                f"Region {label!r} contains no samples; cannot compute statistics."
            )
        return _empty_statistics(label, n_levels)

    p = normalize_histogram(counts)
    warnings: List[str] = []

    # Mean and variance are shared by every derived descriptor
    mean = moments.mean(p)
    var = moments.variance(p, center=mean)
    std = math.sqrt(max(var, 0.0))
    smoothness = moments.relative_smoothness(moments.normalized_variance(p, var=var))

    undefined = 0.0 if zero_variance == "zero" else float("nan")
    if std == 0.0:
        warnings.append(
            f"Zero variance (single intensity {mean:g}); skewness and "
            f"kurtosis reported as {undefined}."
        )

    return TextureStatistics(
        label=label,
        mean=mean,
        std_deviation=std,
        relative_smoothness=smoothness,
        skewness=moments.skewness(p, undefined, center=mean, std=std),
        kurtosis=moments.kurtosis(p, undefined, center=mean, std=std),
        uniformity=moments.uniformity(p),
        entropy=moments.entropy(p),
        n_samples=n_samples,
        n_levels=n_levels,
        warnings=tuple(warnings),
    )


def compute_texture_statistics(
    buffer: IntensityBuffer,
    region: Optional[RegionDescriptor] = None,
    *,
    label: str = "",
    zero_variance: str = "zero",
    empty_region: str = "nan",
) -> TextureStatistics:
    """Compute histogram texture statistics of *region* within *buffer*.

    Parameters
    ----------
    buffer : IntensityBuffer
        8- or 16-bit image.
    region : RegionDescriptor, optional
        Rectangle and optional mask (whole image if omitted).
    label : str
        Name of the source image / region.
    zero_variance, empty_region : str
        Degenerate-input policies, see
        :func:`compute_statistics_from_histogram`.

    Returns
    -------
    TextureStatistics
    """
    _check_policies(zero_variance, empty_region)
    histogram = compute_histogram(buffer, region)
    return compute_statistics_from_histogram(
        histogram,
        label=label,
        zero_variance=zero_variance,
        empty_region=empty_region,
    )


def compute_regional_statistics(
    buffer: IntensityBuffer,
    regions: Dict[str, RegionDescriptor],
    **kwargs,
) -> Dict[str, TextureStatistics]:
    """Compute texture statistics for each named region.

    Each region is labelled with its name; remaining keyword arguments are
    forwarded to :func:`compute_texture_statistics`.
    """
    return {
        name: compute_texture_statistics(buffer, region, label=name, **kwargs)
        for name, region in regions.items()
    }
