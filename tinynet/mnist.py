"""Reader for the MNIST IDX image and label files."""

from __future__ import annotations

import os
import struct
from pathlib import Path

import numpy as np

_IMAGE_MAGIC = 2051
_LABEL_MAGIC = 2049


class MNISTFormatError(ValueError):
    """The files are not a matching pair of MNIST image and label files."""


def load_mnist(
    image_file: str | os.PathLike, label_file: str | os.PathLike
) -> tuple[np.ndarray, np.ndarray]:
    """Load images scaled to ``[0, 1]`` (one row per image) and their labels."""
    images_raw = Path(image_file).read_bytes()
    labels_raw = Path(label_file).read_bytes()
    if len(images_raw) < 16 or len(labels_raw) < 8:
        raise MNISTFormatError("file header is truncated")

    magic_images, num_images, rows, cols = struct.unpack_from(">IIII", images_raw)
    magic_labels, num_labels = struct.unpack_from(">II", labels_raw)
    if magic_images != _IMAGE_MAGIC:
        raise MNISTFormatError(f"bad image file magic number {magic_images}")
    if magic_labels != _LABEL_MAGIC:
        raise MNISTFormatError(f"bad label file magic number {magic_labels}")
    if num_images != num_labels:
        raise MNISTFormatError(
            f"{num_images} images but {num_labels} labels"
        )

    image_size = rows * cols
    pixels = images_raw[16 : 16 + num_images * image_size]
    labels = labels_raw[8 : 8 + num_images]
    if len(pixels) != num_images * image_size or len(labels) != num_images:
        raise MNISTFormatError("file data is truncated")

    images = (
        np.frombuffer(pixels, dtype=np.uint8)
        .reshape(num_images, image_size)
        .astype(float)
        / 255.0
    )
    return images, np.frombuffer(labels, dtype=np.uint8).astype(int)