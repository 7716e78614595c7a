"""A feed-forward network made of dense layers."""

from __future__ import annotations

from itertools import pairwise
from typing import Callable, Iterable, Sequence

import numpy as np

from tinynet.layer import Layer
from tinynet.loss import mse_grad
from tinynet.optimizer import Optimizer

LossGradient = Callable[[np.ndarray, np.ndarray], np.ndarray]


class Model:
    """A stack of dense layers trained one sample at a time."""

    def __init__(self, layer_sizes: Sequence[int], activations: Sequence) -> None:
        layer_sizes = list(layer_sizes)
        activations = list(activations)
        if len(layer_sizes) != len(activations) + 1:
            raise ValueError("there must be exactly one more layer size than activations")
        self._layers = [
            Layer(n_in, n_out, kind)
            for (n_in, n_out), kind in zip(pairwise(layer_sizes), activations)
        ]

    @classmethod
    def from_layers(cls, layers: Iterable[Layer]) -> Model:
        """Build a model from existing layers."""
        model = cls.__new__(cls)
        model._layers = list(layers)
        return model

    def forward(self, x) -> np.ndarray:
        """Run ``x`` through every layer."""
        if not self._layers:
            raise RuntimeError("Model has no layers.")
        out = np.asarray(x, dtype=float)
        for layer in self._layers:
            out = layer.forward(out)
        return out

    def _forward_train(self, x) -> list[np.ndarray]:
        current = np.asarray(x, dtype=float)
        activations = [current]
        for layer in self._layers:
            current = layer.forward(current)
            activations.append(current)
        return activations

    def _backward(self, grad: np.ndarray, optimizer: Optimizer) -> None:
        for layer in reversed(self._layers):
            grad = layer.backward(grad, optimizer)

    def train_step(self, x, y, loss_grad: LossGradient, optimizer: Optimizer) -> None:
        """Do one forward and backward pass on a single sample."""
        for layer in self._layers:
            layer.set_cache(optimizer)
        try:
            activations = self._forward_train(x)
            grad = loss_grad(activations[-1], np.asarray(y, dtype=float))
            self._backward(grad, optimizer)
        finally:
            for layer in self._layers:
                layer.free_cache()

    def train(self, xs, ys, epochs: int, optimizer: Optimizer) -> None:
        """Train on all samples in order for ``epochs`` passes using squared error."""
        xs, ys = list(xs), list(ys)
        if len(xs) != len(ys):
            raise ValueError("inputs and targets differ in number")
        for _ in range(epochs):
            for x, y in zip(xs, ys):
                self.train_step(x, y, mse_grad, optimizer)

    def layers(self) -> tuple[Layer, ...]:
        """The model's layers, first to last."""
        return tuple(self._layers)