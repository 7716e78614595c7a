import math

import numpy as np
import pytest

from tinynet.activation import ActivationFunction, ActivationType

X = np.array([-1.0, 0.0, 2.0])


def test_relu_output():
    y = ActivationFunction.create(ActivationType.RELU).apply(X)
    assert np.array_equal(y, np.array([0.0, 0.0, 2.0]))


def test_relu_derivative():
    d = ActivationFunction.create(ActivationType.RELU).derivative(X)
    assert np.array_equal(d, np.array([0.0, 0.0, 1.0]))


def test_sigmoid_value():
    y = ActivationFunction.create(ActivationType.SIGMOID).apply(X)
    assert abs(y[0] - 0.26894) <= 1e-4


def test_sigmoid_derivative_peak_at_zero():
    d = ActivationFunction.sigmoid().derivative(X)
    assert d[1] == pytest.approx(0.25)
    assert d[1] > d[0] and d[1] > d[2]


def test_tanh_value():
    y = ActivationFunction.create(ActivationType.TANH).apply(X)
    assert abs(y[2] - math.tanh(2)) <= 1e-8


def test_tanh_derivative_at_zero():
    d = ActivationFunction.tanh().derivative(X)
    assert d[1] == pytest.approx(1.0)


def test_identity_returns_input_and_unit_derivative():
    act = ActivationFunction.create(ActivationType.IDENTITY)
    assert np.array_equal(act.apply(X), X)
    assert np.array_equal(act.derivative(X), np.ones(3))


def test_softmax_is_distribution():
    y = ActivationFunction.create(ActivationType.SOFTMAX).apply(X)
    assert y.sum() == pytest.approx(1.0)
    assert np.all(y > 0)
    assert np.argmax(y) == 2


def test_softmax_handles_large_inputs():
    y = ActivationFunction.softmax().apply(np.array([1000.0, 1000.0]))
    assert np.allclose(y, [0.5, 0.5])


def test_softmax_derivative_is_ones():
    assert np.array_equal(ActivationFunction.softmax().derivative(X), np.ones(3))


def test_create_accepts_integer_codes():
    y = ActivationFunction.create(0).apply(X)
    assert np.array_equal(y, np.array([0.0, 0.0, 2.0]))


def test_create_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ActivationFunction.create(99)


def test_custom_function():
    act = ActivationFunction(lambda x: 2 * x, lambda x: np.full_like(x, 2.0))
    assert np.array_equal(act.apply(X), 2 * X)
    assert np.array_equal(act.derivative(X), np.full(3, 2.0))