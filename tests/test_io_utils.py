"""Tests for image and mask loading."""

import numpy as np
import pytest

from hist_texture.io_utils import load_buffer, load_image, load_mask, save_nifti


def test_nifti_round_trip(tmp_dir, noise_image):
    path = save_nifti(noise_image, tmp_dir / "img.nii.gz")
    data = load_image(path)
    np.testing.assert_array_equal(data, noise_image)

    buf = load_buffer(path)
    assert buf.bit_depth == 8
    assert (buf.height, buf.width) == noise_image.shape


def test_npy_buffer_with_explicit_bit_depth(tmp_dir):
    path = tmp_dir / "img.npy"
    np.save(path, np.array([[0, 10], [20, 30]], dtype=np.uint8))
    buf = load_buffer(path, bit_depth=16)
    assert buf.bit_depth == 16
    assert buf.get(1, 1) == 30


def test_float_data_is_rounded(tmp_dir):
    path = tmp_dir / "img.npy"
    np.save(path, np.array([[0.2, 9.7], [100.4, 255.0]]))
    buf = load_buffer(path)
    np.testing.assert_array_equal(buf.data, [[0, 10], [100, 255]])


def test_volume_slice_selection(tmp_dir):
    vol = np.zeros((4, 5, 3), dtype=np.uint16)
    vol[..., 0] = 1
    vol[..., 1] = 2
    vol[..., 2] = 3
    path = save_nifti(vol, tmp_dir / "vol.nii")
    assert load_image(path).max() == 2  # middle slice
    assert load_image(path, slice_index=2).max() == 3
    with pytest.raises(ValueError):
        load_image(path, slice_index=5)


def test_mask_loading(tmp_dir, disk_mask):
    path = save_nifti(disk_mask, tmp_dir / "mask.nii.gz")
    mask = load_mask(path)
    assert mask.dtype == bool
    np.testing.assert_array_equal(mask, disk_mask)


def test_unsupported_format(tmp_dir):
    path = tmp_dir / "img.png"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        load_image(path)


def test_nan_rejected(tmp_dir):
    path = tmp_dir / "img.npy"
    np.save(path, np.array([[np.nan, 1.0]]))
    with pytest.raises(ValueError):
        load_buffer(path)
