import struct

import numpy as np
import pytest

from tinynet.mnist import MNISTFormatError, load_mnist


def _write(tmp_path, pixels, labels, rows=2, cols=2, image_magic=2051, label_magic=2049,
           n_images=None, n_labels=None):
    n_images = len(labels) if n_images is None else n_images
    n_labels = len(labels) if n_labels is None else n_labels
    img = tmp_path / "images.idx3-ubyte"
    lbl = tmp_path / "labels.idx1-ubyte"
    img.write_bytes(struct.pack(">IIII", image_magic, n_images, rows, cols) + bytes(pixels))
    lbl.write_bytes(struct.pack(">II", label_magic, n_labels) + bytes(labels))
    return img, lbl


def test_loads_scaled_images_and_labels(tmp_path):
    pixels = [0, 255, 0, 255, 255, 0, 255, 0]
    img, lbl = _write(tmp_path, pixels, [3, 7])
    images, labels = load_mnist(img, lbl)
    assert images.shape == (2, 4)
    assert np.array_equal(images[0], [0.0, 1.0, 0.0, 1.0])
    assert np.array_equal(images[1], [1.0, 0.0, 1.0, 0.0])
    assert labels.tolist() == [3, 7]


def test_pixel_values_within_unit_interval(tmp_path):
    pixels = list(range(0, 256, 32))
    img, lbl = _write(tmp_path, pixels, [1, 2])
    images, _ = load_mnist(img, lbl)
    assert images.min() >= 0.0 and images.max() <= 1.0
    assert np.allclose(images.ravel() * 255.0, pixels)


def test_bad_image_magic_raises(tmp_path):
    img, lbl = _write(tmp_path, [0] * 4, [1], image_magic=1234)
    with pytest.raises(MNISTFormatError):
        load_mnist(img, lbl)


def test_bad_label_magic_raises(tmp_path):
    img, lbl = _write(tmp_path, [0] * 4, [1], label_magic=2051)
    with pytest.raises(MNISTFormatError):
        load_mnist(img, lbl)


def test_count_mismatch_raises(tmp_path):
    img, lbl = _write(tmp_path, [0] * 8, [1, 2], n_labels=1)
    with pytest.raises(MNISTFormatError):
        load_mnist(img, lbl)


def test_truncated_pixels_raise(tmp_path):
    img, lbl = _write(tmp_path, [0] * 5, [1, 2])
    with pytest.raises(MNISTFormatError):
        load_mnist(img, lbl)


def test_missing_file_raises(tmp_path):
    img, _ = _write(tmp_path, [0] * 4, [1])
    with pytest.raises(FileNotFoundError):
        load_mnist(img, tmp_path / "missing")