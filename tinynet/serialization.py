"""Saving and loading models as whitespace-separated text, one value per line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import numpy as np

from tinynet.layer import Layer
from tinynet.model import Model


def _array_lines(values: np.ndarray) -> Iterator[str]:
    for value in values.ravel():
        yield repr(float(value))


def _model_lines(model: Model) -> Iterator[str]:
    layers = model.layers()
    yield str(len(layers))
    for layer in layers:
        rows, cols = layer.weights.shape
        yield str(rows)
        yield str(cols)
        yield from _array_lines(layer.weights)
        yield str(layer.biases.shape[0])
        yield from _array_lines(layer.biases)
        yield str(int(layer.activation_type))


def save_model(model: Model, path: str | os.PathLike) -> None:
    """Write ``model`` to ``path``."""
    with open(path, "w", encoding="ascii") as out:
        for line in _model_lines(model):
            out.write(line + "\n")


class _Tokens:
    def __init__(self, text: str) -> None:
        self._tokens = iter(text.split())

    def _next(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise ValueError("model file ends too early") from None

    def count(self) -> int:
        token = self._next()
        try:
            value = int(token)
        except ValueError:
            raise ValueError(f"expected a count, got {token!r}") from None
        if value < 0:
            raise ValueError(f"negative count {value}")
        return value

    def number(self) -> float:
        token = self._next()
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None

    def numbers(self, n: int) -> np.ndarray:
        return np.array([self.number() for _ in range(n)], dtype=float)


def _read_layer(tokens: _Tokens) -> Layer:
    rows, cols = tokens.count(), tokens.count()
    weights = tokens.numbers(rows * cols).reshape(rows, cols)
    biases = tokens.numbers(tokens.count())
    kind = tokens.count()
    return Layer.from_parameters(weights, biases, kind)


def load_model(path: str | os.PathLike) -> Model:
    """Read a model written by :func:`save_model`."""
    tokens = _Tokens(Path(path).read_text(encoding="ascii"))
    n_layers = tokens.count()
    return Model.from_layers(_read_layer(tokens) for _ in range(n_layers))