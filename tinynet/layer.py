"""A fully connected layer with an activation and backpropagation."""

from __future__ import annotations

import math

import numpy as np

from tinynet.activation import ActivationFunction, ActivationType
from tinynet.optimizer import Optimizer
from tinynet.random_source import Random


class Layer:
    """A dense layer ``activation(W @ x + b)`` that remembers its last input."""

    def __init__(self, n_in: int, n_out: int, activation=ActivationType.IDENTITY) -> None:
        n_in, n_out = int(n_in), int(n_out)
        if n_in < 0 or n_out < 0:
            raise ValueError("layer dimensions must not be negative")
        stddev = math.sqrt(2.0 / (n_in + n_out)) if n_in + n_out else 0.0
        weights = Random.global_instance().normal_matrix(n_out, n_in, 0.0, stddev)
        self._setup(weights, np.zeros(n_out), activation)

    @classmethod
    def from_parameters(cls, weights, biases, activation=ActivationType.IDENTITY) -> Layer:
        """Build a layer from given weights, biases and activation kind."""
        layer = cls.__new__(cls)
        layer._setup(
            np.array(weights, dtype=float, ndmin=2),
            np.array(biases, dtype=float, ndmin=1),
            activation,
        )
        return layer

    def _setup(self, weights: np.ndarray, biases: np.ndarray, activation) -> None:
        if weights.ndim != 2 or biases.ndim != 1 or biases.shape[0] != weights.shape[0]:
            raise ValueError(
                f"weights of shape {weights.shape} do not fit biases of shape {biases.shape}"
            )
        self._activation_fn = ActivationFunction.create(activation)
        self._activation_type = ActivationType(activation)
        self.weights = weights
        self.biases = biases
        self._last_input = np.zeros(weights.shape[1])
        self._last_z = np.zeros(weights.shape[0])
        self._cache = None
        self._has_cache = False

    @property
    def activation_type(self) -> ActivationType:
        return self._activation_type

    @property
    def n_in(self) -> int:
        return self.weights.shape[1]

    @property
    def n_out(self) -> int:
        return self.weights.shape[0]

    def _check_input(self, x) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.n_in,):
            raise ValueError(f"expected input of length {self.n_in}, got shape {x.shape}")
        return x

    def forward(self, x) -> np.ndarray:
        """Compute the output and remember what backpropagation needs."""
        x = self._check_input(x)
        self._last_input = x.copy()
        self._last_z = self.weights @ x + self.biases
        return self._activation_fn.apply(self._last_z)

    def predict(self, x) -> np.ndarray:
        """Compute the output without changing the layer's state."""
        x = self._check_input(x)
        return self._activation_fn.apply(self.weights @ x + self.biases)

    def backward(self, grad_output, optimizer: Optimizer) -> np.ndarray:
        """Update the parameters and return the gradient for the layer's input."""
        if not self._has_cache:
            raise RuntimeError("Optimizer cache not initialized")
        grad_output = np.asarray(grad_output, dtype=float)
        dz = grad_output * self._activation_fn.derivative(self._last_z)
        grad_w = np.outer(dz, self._last_input)
        optimizer.update(self.weights, self._cache, grad_w)
        optimizer.update(self.biases, self._cache, dz)
        return self.weights.T @ dz

    def set_cache(self, optimizer: Optimizer) -> None:
        """Prepare fresh optimizer state for this layer."""
        self._cache = optimizer.init_cache(*self.weights.shape)
        self._has_cache = True

    def free_cache(self) -> None:
        """Drop the optimizer state."""
        self._cache = None
        self._has_cache = False