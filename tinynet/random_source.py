"""Seeded random number source for matrices and vectors."""

from __future__ import annotations

import numpy as np


class Random:
    """A seeded generator producing uniform and normal matrices and vectors."""

    _DEFAULT_SEED = 42
    _global: Random | None = None

    def __init__(self, seed: int) -> None:
        self._generator = np.random.default_rng(seed)

    def uniform_matrix(self, rows: int, cols: int, a: float, b: float) -> np.ndarray:
        """Return a ``rows x cols`` matrix drawn uniformly from ``[a, b)``."""
        return self._generator.uniform(a, b, size=(rows, cols))

    def uniform_vector(self, size: int, a: float, b: float) -> np.ndarray:
        """Return a vector of ``size`` values drawn uniformly from ``[a, b)``."""
        return self._generator.uniform(a, b, size=size)

    def normal_matrix(
        self, rows: int, cols: int, mean: float, stddev: float
    ) -> np.ndarray:
        """Return a ``rows x cols`` matrix of normally distributed values."""
        return self._generator.normal(mean, stddev, size=(rows, cols))

    def normal_vector(self, size: int, mean: float, stddev: float) -> np.ndarray:
        """Return a vector of ``size`` normally distributed values."""
        return self._generator.normal(mean, stddev, size=size)

    @staticmethod
    def global_instance() -> Random:
        """Return the process-wide generator, seeded with the default seed."""
        if Random._global is None:
            Random._global = Random(Random._DEFAULT_SEED)
        return Random._global