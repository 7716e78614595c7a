"""Parameter update rules: plain gradient descent and Adam."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np


@dataclass
class AdamCache:
    """Moment estimates for one layer's weights and biases, with a shared step count."""

    m_w: np.ndarray
    v_w: np.ndarray
    m_b: np.ndarray
    v_b: np.ndarray
    t: int = 0


class _Rule(Enum):
    SGD = "sgd"
    ADAM = "adam"


@dataclass(frozen=True)
class Optimizer:
    """Updates weight matrices and bias vectors in place from their gradients."""

    _rule: _Rule
    lr: float
    beta1: float = field(default=0.9)
    beta2: float = field(default=0.999)
    eps: float = field(default=1e-8)

    @staticmethod
    def sgd(lr: float) -> Optimizer:
        return Optimizer(_Rule.SGD, lr)

    @staticmethod
    def adam(
        lr: float, beta1: float = 0.9, beta2: float = 0.999, eps: float = 1e-8
    ) -> Optimizer:
        return Optimizer(_Rule.ADAM, lr, beta1, beta2, eps)

    def init_cache(self, rows: int, cols: int) -> AdamCache | None:
        """Create the state a layer of ``rows x cols`` weights needs, if any."""
        if self._rule is _Rule.SGD:
            return None
        return AdamCache(
            m_w=np.zeros((rows, cols)),
            v_w=np.zeros((rows, cols)),
            m_b=np.zeros(rows),
            v_b=np.zeros(rows),
        )

    def update(self, param: np.ndarray, cache, grad) -> np.ndarray:
        """Update ``param`` in place from ``grad`` and return it.

        A two-dimensional parameter uses the weight moments of an Adam cache,
        a one-dimensional one the bias moments.
        """
        grad = np.asarray(grad, dtype=float)
        if param.shape != grad.shape:
            raise ValueError(
                f"gradient shape {grad.shape} does not match parameter shape {param.shape}"
            )
        if self._rule is _Rule.SGD:
            param -= self.lr * grad
            return param

        if not isinstance(cache, AdamCache):
            raise TypeError("Adam update needs an AdamCache")
        cache.t += 1
        if param.ndim == 2:
            cache.m_w = self.beta1 * cache.m_w + (1.0 - self.beta1) * grad
            cache.v_w = self.beta2 * cache.v_w + (1.0 - self.beta2) * grad**2
            m, v = cache.m_w, cache.v_w
        else:
            cache.m_b = self.beta1 * cache.m_b + (1.0 - self.beta1) * grad
            cache.v_b = self.beta2 * cache.v_b + (1.0 - self.beta2) * grad**2
            m, v = cache.m_b, cache.v_b
        # Only the second moment is bias-corrected.
        v_hat = v / (1.0 - self.beta2**cache.t)
        param -= self.lr * (m / (np.sqrt(v_hat) + self.eps))
        return param