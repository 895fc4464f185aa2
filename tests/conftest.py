"""
Shared test fixtures for histogram texture statistics.

Generates synthetic 8- and 16-bit images and ROI masks as numpy arrays.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from hist_texture.buffer import IntensityBuffer

# Image dimensions (rows, columns) for the random fixtures
HEIGHT, WIDTH = 32, 48


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

@pytest.fixture
def noise_image() -> np.ndarray:
    """Uniform random 8-bit image."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(HEIGHT, WIDTH), dtype=np.uint8)


@pytest.fixture
def noise_buffer(noise_image: np.ndarray) -> IntensityBuffer:
    return IntensityBuffer(noise_image)


@pytest.fixture
def noise_buffer_16bit() -> IntensityBuffer:
    """Random 16-bit image concentrated around mid-range."""
    rng = np.random.default_rng(7)
    data = rng.normal(30000, 2000, size=(HEIGHT, WIDTH))
    return IntensityBuffer(np.clip(data, 0, 65535).astype(np.uint16))


@pytest.fixture
def constant_buffer() -> IntensityBuffer:
    """Every sample equal to intensity 77."""
    return IntensityBuffer(np.full((10, 12), 77, dtype=np.uint8))


@pytest.fixture
def bimodal_buffer() -> IntensityBuffer:
    """2×2 image: two samples at 0 and two at 255."""
    return IntensityBuffer(np.array([[0, 255], [255, 0]], dtype=np.uint8))


@pytest.fixture
def index_buffer() -> IntensityBuffer:
    """6×8 image whose sample at (x, y) is ``y * 8 + x`` (all distinct)."""
    return IntensityBuffer(np.arange(48, dtype=np.uint8).reshape(6, 8))


# ---------------------------------------------------------------------------
# Masks
# ---------------------------------------------------------------------------

@pytest.fixture
def checker_mask() -> np.ndarray:
    """4×4 checkerboard of 0 / 1 values (8 included cells)."""
    return (np.indices((4, 4)).sum(axis=0) % 2).astype(np.uint8)


@pytest.fixture
def disk_mask() -> np.ndarray:
    """Filled disk covering the centre of a HEIGHT×WIDTH image."""
    yy, xx = np.mgrid[0:HEIGHT, 0:WIDTH]
    return ((yy - HEIGHT / 2) ** 2 + (xx - WIDTH / 2) ** 2) <= 10 ** 2


# ---------------------------------------------------------------------------
# Temporary directory for file I/O tests
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    return tmp_path
