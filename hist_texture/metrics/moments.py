"""
Statistical moments of a normalized intensity histogram.

Every function takes a probability mass function ``p`` indexed by
intensity (``p[i]`` is the fraction of samples at intensity ``i``) and
returns a scalar texture descriptor:

- mean and central moments (variance, standard deviation)
- relative smoothness ``R = 1 - 1 / (1 + σ²_norm)``
- skewness and excess kurtosis
- uniformity ``U = Σ p²``
- Shannon entropy, optionally normalized by ``log2(L)``
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
from scipy import stats as sp_stats


def _as_pmf(p: np.ndarray) -> np.ndarray:
    pmf = np.asarray(p, dtype=np.float64)
    if pmf.ndim != 1 or pmf.size == 0:
        raise ValueError(f"Expected a non-empty 1-D histogram, got shape {pmf.shape}")
    return pmf


def mean(p: np.ndarray) -> float:
    """First raw moment ``Σ i·p_i``."""
    pmf = _as_pmf(p)
    return float(np.dot(np.arange(pmf.size, dtype=np.float64), pmf))


def nth_moment(p: np.ndarray, n: int, center: Optional[float] = None) -> float:
    """Central moment of order *n*: ``Σ (i - mean)^n · p_i``.

    Parameters
    ----------
    p : np.ndarray
        Normalized histogram.
    n : int
        Moment order (non-negative integer).
    center : float, optional
        Precomputed ``mean(p)``; computed from *p* when omitted.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise ValueError(f"Moment order must be a non-negative integer, got {n!r}")
    pmf = _as_pmf(p)
    if center is None:
        center = mean(pmf)
    deviations = np.arange(pmf.size, dtype=np.float64) - center
    return float(np.dot(deviations ** int(n), pmf))


def variance(p: np.ndarray, center: Optional[float] = None) -> float:
    return nth_moment(p, 2, center=center)


def std_deviation(p: np.ndarray, center: Optional[float] = None) -> float:
    # Round-off can leave a tiny negative variance for single-bin histograms
    return math.sqrt(max(variance(p, center=center), 0.0))


def normalized_variance(p: np.ndarray, var: Optional[float] = None) -> float:
    """Variance divided by ``(L - 1)**2``, independent of the bit depth.

    *var* may carry a precomputed ``variance(p)``.
    """
    pmf = _as_pmf(p)
    if pmf.size < 2:
        return 0.0
    if var is None:
        var = variance(pmf)
    return var / float((pmf.size - 1) ** 2)


def relative_smoothness(normalized_var: float) -> float:
    """Relative smoothness ``1 - 1 / (1 + v)`` of a normalized variance *v*.

    0 for a constant region, approaching 1 for high-contrast texture.
    """
    return 1.0 - 1.0 / (1.0 + normalized_var)


def skewness(
    p: np.ndarray,
    zero_variance: float = 0.0,
    *,
    center: Optional[float] = None,
    std: Optional[float] = None,
) -> float:
    """Third standardized moment.

    Returns *zero_variance* when the histogram has no spread (single bin).
    *center* and *std* may carry precomputed ``mean(p)`` / ``std_deviation(p)``.
    """
    if center is None:
        center = mean(p)
    if std is None:
        std = std_deviation(p, center=center)
    if std == 0.0:
        return zero_variance
    return nth_moment(p, 3, center=center) / std ** 3


def kurtosis(
    p: np.ndarray,
    zero_variance: float = 0.0,
    *,
    center: Optional[float] = None,
    std: Optional[float] = None,
) -> float:
    """Excess kurtosis (fourth standardized moment minus 3).

    Returns *zero_variance* when the histogram has no spread (single bin).
    """
    if center is None:
        center = mean(p)
    if std is None:
        std = std_deviation(p, center=center)
    if std == 0.0:
        return zero_variance
    return nth_moment(p, 4, center=center) / std ** 4 - 3.0


def uniformity(p: np.ndarray) -> float:
    """Sum of squared probabilities; 1.0 for a single-valued region."""
    pmf = _as_pmf(p)
    return float(np.dot(pmf, pmf))


def shannon_entropy(p: np.ndarray) -> float:
    """Shannon entropy in bits; empty bins contribute nothing."""
    pmf = _as_pmf(p)
    return float(sp_stats.entropy(pmf, base=2))


def entropy(p: np.ndarray) -> float:
    """Shannon entropy divided by its maximum ``log2(L)``, in ``[0, 1]``."""
    pmf = _as_pmf(p)
    if pmf.size < 2:
        return 0.0
    return shannon_entropy(pmf) / (math.log(pmf.size) / math.log(2.0))
