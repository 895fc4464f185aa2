"""
Image and mask I/O utilities.

Wraps **nibabel** for loading / saving NIfTI-1 images (2-D images or a
single slice of a 3-D volume) and numpy for ``.npy`` arrays, converting
the data into an ``IntensityBuffer`` or a boolean ROI mask.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import nibabel as nib
import numpy as np

from .buffer import IntensityBuffer

_NIFTI_SUFFIXES = (".nii", ".nii.gz")


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------

def _is_nifti(path: Path) -> bool:
    return any(path.name.lower().endswith(s) for s in _NIFTI_SUFFIXES)


def _select_slice(data: np.ndarray, slice_index: Optional[int]) -> np.ndarray:
    data = np.squeeze(data)
    if data.ndim == 2:
        return data
    if data.ndim == 3:
        idx = data.shape[-1] // 2 if slice_index is None else slice_index
        if not 0 <= idx < data.shape[-1]:
            raise ValueError(
                f"Slice index {idx} out of range for volume with {data.shape[-1]} slices"
            )
        return data[..., idx]
    raise ValueError(f"Expected 2-D image or 3-D volume, got {data.ndim}-D")


def load_image(path: str | Path, slice_index: Optional[int] = None) -> np.ndarray:
    """Load a 2-D image array from ``.nii``/``.nii.gz`` or ``.npy``.

    Parameters
    ----------
    path : path-like
        Image file.
    slice_index : int, optional
        Slice along the last axis to use for 3-D volumes (default: middle).

    Returns
    -------
    np.ndarray
        2-D array; the first axis is the image row.
    """
    path = Path(path)
    if _is_nifti(path):
        img = nib.load(str(path))
        data = np.asarray(img.dataobj)
    elif path.suffix.lower() == ".npy":
        data = np.load(path)
    else:
        raise ValueError(f"Unsupported image format: {path.name}")
    return _select_slice(data, slice_index)


def load_buffer(
    path: str | Path,
    bit_depth: Optional[int] = None,
    slice_index: Optional[int] = None,
) -> IntensityBuffer:
    """Load an image file as an ``IntensityBuffer``.

    Non-integer data is rounded to the nearest integer; values must still
    fit the 8- or 16-bit range.
    """
    data = load_image(path, slice_index)
    if not np.issubdtype(data.dtype, np.integer):
        if not np.all(np.isfinite(data)):
            raise ValueError(f"Image {path} contains NaN or Inf values")
        data = np.rint(data).astype(np.int64)
    return IntensityBuffer(data, bit_depth=bit_depth)


def load_mask(path: str | Path, slice_index: Optional[int] = None) -> np.ndarray:
    """Load a binary ROI mask; strictly positive values are included."""
    return load_image(path, slice_index) > 0


def save_nifti(data: np.ndarray, path: str | Path) -> Path:
    """Save a 2-D (or 3-D) array as a NIfTI file with an identity affine."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    arr = np.asarray(data)
    # NIfTI has no boolean type and nibabel rejects implicit int64
    if arr.dtype == np.bool_:
        arr = arr.astype(np.uint8)
    elif arr.dtype == np.int64:
        arr = arr.astype(np.int32)
    img = nib.Nifti1Image(arr, np.eye(4))
    nib.save(img, str(path))
    return path
