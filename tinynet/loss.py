"""Loss functions and their gradients with respect to the prediction."""

from __future__ import annotations

import numpy as np

_EPSILON = 1e-12


def _pair(y_pred, y_true) -> tuple[np.ndarray, np.ndarray]:
    pred = np.asarray(y_pred, dtype=float)
    true = np.asarray(y_true, dtype=float)
    if pred.shape != true.shape:
        raise ValueError(
            f"prediction shape {pred.shape} does not match target shape {true.shape}"
        )
    return pred, true


def mse(y_pred, y_true) -> float:
    """Mean squared error."""
    pred, true = _pair(y_pred, y_true)
    diff = pred - true
    return float(np.dot(diff, diff) / diff.size)


def mse_grad(y_pred, y_true) -> np.ndarray:
    """Gradient of the mean squared error."""
    pred, true = _pair(y_pred, y_true)
    return (2.0 / pred.size) * (pred - true)


def cross_entropy(y_pred, y_true) -> float:
    """Cross-entropy of a predicted distribution against a target distribution."""
    pred, true = _pair(y_pred, y_true)
    return float(-(true * np.log(pred + _EPSILON)).sum())


def cross_entropy_grad(y_pred, y_true) -> np.ndarray:
    """Gradient of cross-entropy combined with a softmax output."""
    pred, true = _pair(y_pred, y_true)
    return pred - true