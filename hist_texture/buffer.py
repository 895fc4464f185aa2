"""
Intensity buffer and region-of-interest descriptors.

An ``IntensityBuffer`` wraps a read-only 2-D integer image with a declared
bit depth; a ``RegionDescriptor`` selects the rectangle (and optional
binary mask) of that image whose histogram is analysed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

SUPPORTED_BIT_DEPTHS: Tuple[int, ...] = (8, 16)


# ---------------------------------------------------------------------------
# Intensity buffer
# ---------------------------------------------------------------------------

def _infer_bit_depth(data: np.ndarray) -> int:
    if data.dtype == np.uint8:
        return 8
    if data.dtype == np.uint16:
        return 16
    if data.size == 0 or int(data.max()) <= 255:
        return 8
    return 16


class IntensityBuffer:
    """Read-only 2-D grid of integer samples in ``[0, 2**bit_depth - 1]``.

    Parameters
    ----------
    data : np.ndarray
        Integer array of shape ``(height, width)``.
    bit_depth : int, optional
        8 or 16.  Inferred from the dtype when omitted.
    """

    def __init__(self, data: np.ndarray, bit_depth: Optional[int] = None) -> None:
        arr = np.asarray(data)
        if arr.ndim != 2:
            raise ValueError(f"Expected 2-D image data, got {arr.ndim}-D")
        if not np.issubdtype(arr.dtype, np.integer):
            raise ValueError(f"Expected integer samples, got dtype {arr.dtype}")

        if bit_depth is None:
            bit_depth = _infer_bit_depth(arr)
        if bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(
                f"Unsupported bit depth {bit_depth}; expected one of {SUPPORTED_BIT_DEPTHS}"
            )

        if arr.size > 0:
            lo, hi = int(arr.min()), int(arr.max())
            if lo < 0 or hi > 2 ** bit_depth - 1:
                raise ValueError(
                    f"Sample values [{lo}, {hi}] exceed the {bit_depth}-bit range "
                    f"[0, {2 ** bit_depth - 1}]"
                )

        view = arr.view()
        view.flags.writeable = False
        self._data = view
        self._bit_depth = int(bit_depth)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def bit_depth(self) -> int:
        return self._bit_depth

    @property
    def n_levels(self) -> int:
        """Number of histogram bins (``2**bit_depth``)."""
        return 2 ** self._bit_depth

    def get(self, x: int, y: int) -> int:
        """Sample at column *x*, row *y*."""
        return int(self._data[y, x])

    def __repr__(self) -> str:
        return (
            f"IntensityBuffer(width={self.width}, height={self.height}, "
            f"bit_depth={self.bit_depth})"
        )


# ---------------------------------------------------------------------------
# Region descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class RegionDescriptor:
    """Rectangle ``(x, y, width, height)`` plus an optional binary mask.

    The mask is expressed in the rectangle's local coordinates: it has
    shape ``(height, width)`` and cell ``mask[j, i]`` governs the buffer
    sample at column ``x + i``, row ``y + j``.  Only strictly positive
    mask cells are included.  ``rect=None`` selects the whole buffer.
    """

    rect: Optional[Tuple[int, int, int, int]] = None
    mask: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.rect is not None:
            if len(self.rect) != 4:
                raise ValueError(f"Rectangle must be (x, y, width, height), got {self.rect}")
            rect = tuple(int(v) for v in self.rect)
            if rect[2] < 0 or rect[3] < 0:
                raise ValueError(f"Rectangle has negative size: {rect}")
            object.__setattr__(self, "rect", rect)

        if self.mask is not None:
            mask = np.asarray(self.mask)
            if mask.ndim != 2:
                raise ValueError(f"Expected 2-D mask, got {mask.ndim}-D")
            if self.rect is not None and mask.shape != (self.rect[3], self.rect[2]):
                raise ValueError(
                    f"Mask shape {mask.shape} does not match rectangle "
                    f"(height, width) = {(self.rect[3], self.rect[2])}"
                )
            object.__setattr__(self, "mask", mask)

    @classmethod
    def full(cls) -> "RegionDescriptor":
        """Region covering the whole buffer, without a mask."""
        return cls()

    def resolve(self, buffer: IntensityBuffer) -> Tuple[Tuple[int, int, int, int], Optional[np.ndarray]]:
        """Return the concrete ``(rect, mask)`` pair for *buffer*.

        A mask given without a rectangle must cover the whole buffer.
        """
        if self.rect is not None:
            return self.rect, self.mask
        if self.mask is not None and self.mask.shape != (buffer.height, buffer.width):
            raise ValueError(
                f"Mask shape {self.mask.shape} does not match image "
                f"(height, width) = {(buffer.height, buffer.width)}"
            )
        return (0, 0, buffer.width, buffer.height), self.mask
