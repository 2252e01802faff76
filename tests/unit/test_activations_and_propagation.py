import numpy as np
import pytest

from symbolnet.core.activations import (
    SIGMOID,
    TANH,
    available_activations,
    get_activation,
    sigmoid,
    sigmoid_deriv,
)
from symbolnet.core.packing import CoefCodec
from symbolnet.core.propagation import add_bias_column, backward, forward, output_error
from symbolnet.core.types import NetLayout


def test_sigmoid_values_and_derivative():
    x = np.array([-2.0, 0.0, 3.0])
    assert np.allclose(sigmoid(x), 1.0 / (1.0 + np.exp(-x)))
    assert sigmoid_deriv(np.array([0.0]))[0] == pytest.approx(0.25)
    h = 1e-6
    numeric = (sigmoid(x + h) - sigmoid(x - h)) / (2 * h)
    assert np.allclose(sigmoid_deriv(x), numeric, atol=1e-8)


def test_activation_registry():
    assert list(available_activations()) == ["sigmoid", "tanh"]
    assert get_activation("sigmoid") is SIGMOID
    assert SIGMOID.is_unit_interval
    assert not TANH.is_unit_interval
    with pytest.raises(KeyError, match="Available activations"):
        get_activation("relu")


def test_add_bias_column():
    x = np.array([[2.0, 3.0], [4.0, 5.0]])
    assert add_bias_column(x).tolist() == [[1.0, 2.0, 3.0], [1.0, 4.0, 5.0]]


def _random_coefs(sizes, seed=0):
    layout = NetLayout(sizes)
    rng = np.random.default_rng(seed)
    return layout, CoefCodec(layout).unpack(rng.uniform(-1, 1, layout.dimensions_count))


def test_forward_shapes_and_retained_state():
    layout, coefs = _random_coefs([3, 4, 5, 2])
    inputs = np.random.default_rng(1).standard_normal((6, 3))
    state = forward(inputs, coefs, SIGMOID, retain=True)
    assert state.output.shape == (6, 2)
    assert [a.shape for a in state.layer_inputs] == [(6, 4), (6, 5), (6, 6)]
    assert [d.shape for d in state.layer_derivs] == [(6, 4), (6, 5)]
    assert all(np.all(a[:, 0] == 1.0) for a in state.layer_inputs)
    assert np.all((state.output > 0) & (state.output < 1))


def test_forward_without_retain_keeps_nothing():
    _, coefs = _random_coefs([3, 4, 2])
    state = forward(np.ones((2, 3)), coefs, SIGMOID)
    assert state.layer_inputs == [] and state.layer_derivs == []
    retained = forward(np.ones((2, 3)), coefs, SIGMOID, retain=True)
    assert np.array_equal(state.output, retained.output)


def test_output_error_subtracts_one_hot_without_mutating():
    outputs = np.array([[0.2, 0.7], [0.6, 0.1]])
    delta = output_error(outputs, np.array([1, 0]))
    assert np.allclose(delta, [[0.2, -0.3], [-0.4, 0.1]])
    assert outputs[0, 1] == 0.7


def test_single_layer_gradient_skips_output_derivative():
    _, coefs = _random_coefs([2, 3])
    inputs = np.array([[0.5, -1.0], [2.0, 0.25]])
    targets = np.array([2, 0])
    state = forward(inputs, coefs, SIGMOID, retain=True)
    (grad,) = backward(state, targets, coefs)
    a = add_bias_column(inputs)
    onehot = np.eye(3)[targets]
    expected = a.T @ (state.output - onehot) / 2
    assert np.allclose(grad, expected)


def test_backward_regularizes_all_rows_but_bias():
    _, coefs = _random_coefs([3, 4, 2], seed=3)
    inputs = np.random.default_rng(4).standard_normal((5, 3))
    targets = np.array([0, 1, 1, 0, 1])
    state = forward(inputs, coefs, SIGMOID, retain=True)
    plain = backward(state, targets, coefs)
    regular = backward(state, targets, coefs, regularization_lambda=2.0)
    for g0, g1, W in zip(plain, regular, coefs):
        assert np.array_equal(g0[0], g1[0])
        assert np.allclose(g1[1:] - g0[1:], 2.0 / 5 * W[1:])


def test_backward_requires_retained_state():
    _, coefs = _random_coefs([3, 4, 2])
    state = forward(np.ones((1, 3)), coefs, SIGMOID)
    with pytest.raises(ValueError):
        backward(state, np.array([0]), coefs)
