"""Activation functions and their derivatives."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

import numpy as np

VectorFunction = Callable[[np.ndarray], np.ndarray]


class ActivationType(IntEnum):
    """Kinds of activation, numbered as stored in model files."""

    RELU = 0
    SIGMOID = 1
    IDENTITY = 2
    TANH = 3
    SOFTMAX = 4


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


def _softmax(x: np.ndarray) -> np.ndarray:
    exps = np.exp(x - x.max())
    return exps / exps.sum()


class ActivationFunction:
    """An element-wise activation paired with its derivative."""

    def __init__(self, apply: VectorFunction, derivative: VectorFunction) -> None:
        self._apply = apply
        self._derivative = derivative

    def apply(self, x) -> np.ndarray:
        """Apply the activation to ``x``."""
        return self._apply(np.asarray(x, dtype=float))

    def derivative(self, x) -> np.ndarray:
        """Return the derivative of the activation evaluated at ``x``."""
        return self._derivative(np.asarray(x, dtype=float))

    @staticmethod
    def relu() -> ActivationFunction:
        return ActivationFunction(
            lambda x: np.maximum(x, 0.0),
            lambda x: (x > 0.0).astype(float),
        )

    @staticmethod
    def sigmoid() -> ActivationFunction:
        def derivative(x: np.ndarray) -> np.ndarray:
            s = _sigmoid(x)
            return s * (1.0 - s)

        return ActivationFunction(_sigmoid, derivative)

    @staticmethod
    def identity() -> ActivationFunction:
        return ActivationFunction(lambda x: x.copy(), lambda x: np.ones_like(x))

    @staticmethod
    def tanh() -> ActivationFunction:
        return ActivationFunction(np.tanh, lambda x: 1.0 - np.tanh(x) ** 2)

    @staticmethod
    def softmax() -> ActivationFunction:
        # The derivative is taken as ones: softmax is paired with cross-entropy,
        # whose gradient already accounts for it.
        return ActivationFunction(_softmax, lambda x: np.ones_like(x))

    @staticmethod
    def create(kind) -> ActivationFunction:
        """Build the activation for ``kind`` (an ``ActivationType`` or its number)."""
        try:
            kind = ActivationType(kind)
        except ValueError:
            raise ValueError(f"unknown activation type: {kind!r}") from None
        factories = {
            ActivationType.RELU: ActivationFunction.relu,
            ActivationType.SIGMOID: ActivationFunction.sigmoid,
            ActivationType.IDENTITY: ActivationFunction.identity,
            ActivationType.TANH: ActivationFunction.tanh,
            ActivationType.SOFTMAX: ActivationFunction.softmax,
        }
        return factories[kind]()