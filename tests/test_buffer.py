"""Tests for the intensity buffer and region descriptor."""

import numpy as np
import pytest

from hist_texture.buffer import IntensityBuffer, RegionDescriptor


def test_infers_bit_depth_from_dtype():
    assert IntensityBuffer(np.zeros((2, 3), dtype=np.uint8)).bit_depth == 8
    assert IntensityBuffer(np.zeros((2, 3), dtype=np.uint16)).bit_depth == 16


def test_infers_bit_depth_from_values():
    assert IntensityBuffer(np.array([[0, 255]], dtype=np.int64)).bit_depth == 8
    assert IntensityBuffer(np.array([[0, 256]], dtype=np.int64)).bit_depth == 16


def test_dimensions_and_accessor(index_buffer):
    assert index_buffer.width == 8
    assert index_buffer.height == 6
    assert index_buffer.n_levels == 256
    assert index_buffer.get(3, 2) == 2 * 8 + 3


def test_rejects_unsupported_bit_depth():
    with pytest.raises(ValueError):
        IntensityBuffer(np.zeros((2, 2), dtype=np.uint8), bit_depth=12)


def test_rejects_out_of_range_samples():
    with pytest.raises(ValueError):
        IntensityBuffer(np.array([[0, 300]], dtype=np.int64), bit_depth=8)
    with pytest.raises(ValueError):
        IntensityBuffer(np.array([[-1, 3]], dtype=np.int64))


def test_rejects_non_integer_and_non_2d():
    with pytest.raises(ValueError):
        IntensityBuffer(np.zeros((2, 2), dtype=np.float64))
    with pytest.raises(ValueError):
        IntensityBuffer(np.zeros((2, 2, 2), dtype=np.uint8))


def test_buffer_is_read_only_but_caller_array_is_not():
    data = np.zeros((3, 3), dtype=np.uint8)
    buf = IntensityBuffer(data)
    with pytest.raises(ValueError):
        buf.data[0, 0] = 1
    data[0, 0] = 5  # caller still owns a writable array
    assert buf.get(0, 0) == 5


def test_region_mask_must_match_rectangle():
    with pytest.raises(ValueError):
        RegionDescriptor(rect=(0, 0, 4, 3), mask=np.ones((4, 4), dtype=np.uint8))


def test_region_rejects_negative_size():
    with pytest.raises(ValueError):
        RegionDescriptor(rect=(0, 0, -1, 3))


def test_full_region_resolves_to_buffer(index_buffer):
    rect, mask = RegionDescriptor.full().resolve(index_buffer)
    assert rect == (0, 0, 8, 6)
    assert mask is None


def test_mask_without_rectangle_must_cover_image(index_buffer):
    region = RegionDescriptor(mask=np.ones((2, 2), dtype=bool))
    with pytest.raises(ValueError):
        region.resolve(index_buffer)
