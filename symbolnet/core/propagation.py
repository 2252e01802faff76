"""Forward and backward passes over fully-connected layers."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .activations import ActivationFunction
from .types import Array, ForwardState


def add_bias_column(x: Array) -> Array:
    """Prepend a column of ones to ``x``."""

    return np.hstack([np.ones((x.shape[0], 1), dtype=x.dtype), x])


def forward(
    inputs: Array,
    coefs: Sequence[Array],
    activation: ActivationFunction,
    *,
    retain: bool = False,
) -> ForwardState:
    """Propagate ``inputs`` through every layer.

    With ``retain`` the bias-augmented layer inputs and the hidden-layer
    derivatives ``f'(Z_i)`` are kept for :func:`backward`.
    """

    state = ForwardState(output=inputs)
    x = inputs
    last_idx = len(coefs) - 1
    for idx, W in enumerate(coefs):
        a = add_bias_column(x)
        z = a @ W
        if retain:
            state.layer_inputs.append(a)
            if idx < last_idx:
                state.layer_derivs.append(activation.derivative(z))
        x = activation(z)
    state.output = x
    return state


def output_error(outputs: Array, targets: Array) -> Array:
    """Return ``outputs - onehot(targets)``.

    This is the error of the output pre-activations for the cross-entropy cost
    of a ``(0, 1)`` activation: ``f'(Z_k)`` cancels out and must not be applied.
    """

    delta = np.array(outputs, dtype=np.float64, copy=True)
    delta[np.arange(delta.shape[0]), targets] -= 1.0
    return delta


def backward(
    state: ForwardState,
    targets: Array,
    coefs: Sequence[Array],
    regularization_lambda: float = 0.0,
) -> List[Array]:
    """Return the cost gradient for every coefficient matrix.

    ``state`` must come from :func:`forward` with ``retain=True``. Bias rows
    (row 0) are never regularized.
    """

    layer_inputs = state.layer_inputs
    layer_derivs = state.layer_derivs
    if len(layer_inputs) != len(coefs):
        raise ValueError("backward() requires a forward state captured with retain=True")

    batch = state.output.shape[0]
    delta = output_error(state.output, targets)
    last_idx = len(coefs) - 1
    grads: List[Array] = [None] * len(coefs)  # type: ignore[list-item]
    grads[last_idx] = layer_inputs[last_idx].T @ delta / batch
    for idx in reversed(range(last_idx)):
        delta = (delta @ coefs[idx + 1][1:, :].T) * layer_derivs[idx]
        grads[idx] = layer_inputs[idx].T @ delta / batch

    if regularization_lambda:
        scale = regularization_lambda / batch
        for grad, W in zip(grads, coefs):
            grad[1:, :] += scale * W[1:, :]
    return grads


__all__ = ["add_bias_column", "backward", "forward", "output_error"]
