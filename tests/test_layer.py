import numpy as np
import pytest

from tinynet.activation import ActivationType
from tinynet.layer import Layer
from tinynet.optimizer import Optimizer


def test_forward_backward_gives_input_sized_gradient():
    opt = Optimizer.adam(0.01, 0.9, 0.999, 1e-8)
    layer = Layer(2, 1, ActivationType.IDENTITY)
    layer.set_cache(opt)
    output = layer.forward([1.0, -1.0])
    assert output.shape == (1,)
    grad_in = layer.backward([1.0], opt)
    assert grad_in.shape == (2,)


def test_new_layer_shapes_and_zero_biases():
    layer = Layer(4, 3, ActivationType.RELU)
    assert layer.weights.shape == (3, 4)
    assert np.array_equal(layer.biases, np.zeros(3))
    assert layer.activation_type is ActivationType.RELU


def test_backward_without_cache_raises():
    layer = Layer(2, 2)
    layer.forward([0.5, 0.5])
    with pytest.raises(RuntimeError):
        layer.backward([1.0, 1.0], Optimizer.sgd(0.1))


def test_backward_after_free_cache_raises():
    opt = Optimizer.sgd(0.1)
    layer = Layer(2, 2)
    layer.set_cache(opt)
    layer.free_cache()
    layer.forward([0.5, 0.5])
    with pytest.raises(RuntimeError):
        layer.backward([1.0, 1.0], opt)


def test_forward_rejects_wrong_size():
    layer = Layer(3, 2)
    with pytest.raises(ValueError):
        layer.forward([1.0, 2.0])


def test_sgd_backward_values():
    layer = Layer.from_parameters([[1.0, 2.0]], [0.0], ActivationType.IDENTITY)
    opt = Optimizer.sgd(0.1)
    layer.set_cache(opt)
    out = layer.forward([1.0, -1.0])
    assert out == pytest.approx([-1.0])
    grad_in = layer.backward([1.0], opt)
    assert layer.weights == pytest.approx(np.array([[0.9, 2.1]]))
    assert layer.biases == pytest.approx([-0.1])
    assert grad_in == pytest.approx([0.9, 2.1])


def test_relu_blocks_gradient_for_negative_preactivation():
    layer = Layer.from_parameters([[1.0, 2.0]], [0.0], ActivationType.RELU)
    opt = Optimizer.sgd(0.1)
    layer.set_cache(opt)
    layer.forward([1.0, -1.0])
    grad_in = layer.backward([1.0], opt)
    assert layer.weights == pytest.approx(np.array([[1.0, 2.0]]))
    assert grad_in == pytest.approx([0.0, 0.0])


def test_predict_matches_forward():
    layer = Layer(3, 2, ActivationType.TANH)
    x = [0.2, -0.4, 0.9]
    assert np.allclose(layer.predict(x), layer.forward(x))


def test_from_parameters_rejects_mismatched_biases():
    with pytest.raises(ValueError):
        Layer.from_parameters([[1.0, 2.0]], [0.0, 1.0])