"""
Intensity histogram extraction within a region of interest.

Counts the samples of an ``IntensityBuffer`` inside a (clipped) bounding
rectangle and, optionally, a binary mask, over the full intensity range
of the buffer's bit depth.  The resulting counts are normalized into a
probability mass function for the moment statistics.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ..buffer import IntensityBuffer, RegionDescriptor


class EmptyRegionError(ValueError):
    """Raised when a region contains no samples to build a distribution from."""


def _check_buffer(buffer: IntensityBuffer) -> None:
    if not isinstance(buffer, IntensityBuffer):
        raise TypeError(
            f"Expected an IntensityBuffer, got {type(buffer).__name__}"
        )


def clip_region(
    buffer: IntensityBuffer,
    region: Optional[RegionDescriptor] = None,
) -> Tuple[int, int, int, int]:
    """Intersect the region's rectangle with the buffer bounds.

    Returns
    -------
    tuple of int
        Half-open bounds ``(x0, y0, x1, y1)``.  Empty when ``x1 <= x0`` or
        ``y1 <= y0``.
    """
    _check_buffer(buffer)
    region = region or RegionDescriptor.full()
    (rx, ry, rw, rh), _ = region.resolve(buffer)

    x0 = min(max(rx, 0), buffer.width)
    y0 = min(max(ry, 0), buffer.height)
    x1 = max(min(rx + rw, buffer.width), x0)
    y1 = max(min(ry + rh, buffer.height), y0)
    return x0, y0, x1, y1


def _included_samples(
    buffer: IntensityBuffer,
    region: Optional[RegionDescriptor],
) -> np.ndarray:
    region = region or RegionDescriptor.full()
    (rx, ry, _, _), mask = region.resolve(buffer)
    x0, y0, x1, y1 = clip_region(buffer, region)
    if x1 <= x0 or y1 <= y0:
        return buffer.data[0:0, 0:0].ravel()

    window = buffer.data[y0:y1, x0:x1]
    if mask is None:
        return window.ravel()

    # Mask is in rectangle-local coordinates
    local = mask[y0 - ry:y1 - ry, x0 - rx:x1 - rx]
    return window[local > 0]


def count_included(
    buffer: IntensityBuffer,
    region: Optional[RegionDescriptor] = None,
) -> int:
    """Number of samples that fall inside *region*."""
    _check_buffer(buffer)
    return int(_included_samples(buffer, region).size)


def compute_histogram(
    buffer: IntensityBuffer,
    region: Optional[RegionDescriptor] = None,
) -> np.ndarray:
    """Compute the intensity histogram of *region* within *buffer*.

    Parameters
    ----------
    buffer : IntensityBuffer
        8- or 16-bit image.
    region : RegionDescriptor, optional
        Rectangle and optional mask.  The rectangle is clipped to the
        buffer bounds; when omitted, every sample is counted once.

    Returns
    -------
    np.ndarray
        ``int64`` counts of length ``2**bit_depth``; index = intensity.
    """
    _check_buffer(buffer)
    samples = _included_samples(buffer, region)
    return np.bincount(
        samples.astype(np.int64, copy=False), minlength=buffer.n_levels
    ).astype(np.int64, copy=False)


def normalize_histogram(histogram: np.ndarray) -> np.ndarray:
    """Divide *histogram* by its total so that the bins sum to one.

    Raises
    ------
    EmptyRegionError
        If the histogram is empty (sums to zero).
    """
    counts = np.asarray(histogram, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        raise EmptyRegionError("Cannot normalize a histogram with no samples.")
    return counts / total
