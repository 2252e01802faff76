"""Activation functions consumed by the network definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Tuple

import numpy as np

from .types import Array

ElementwiseFn = Callable[[Array], Array]


def sigmoid(x: Array) -> Array:
    """Return the logistic function of ``x``."""

    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(x: Array) -> Array:
    s = sigmoid(x)
    return s * (1.0 - s)


def tanh(x: Array) -> Array:
    return np.tanh(x)


def tanh_deriv(x: Array) -> Array:
    return 1.0 - np.tanh(x) ** 2


@dataclass(frozen=True)
class ActivationFunction:
    """Elementwise function ``f`` paired with its derivative ``f'``.

    Both are evaluated on pre-activations. ``output_range`` is the open
    interval ``f`` maps into.
    """

    name: str
    fn: ElementwiseFn
    deriv: ElementwiseFn
    output_range: Tuple[float, float]

    def __call__(self, x: Array) -> Array:
        return self.fn(x)

    def derivative(self, x: Array) -> Array:
        return self.deriv(x)

    @property
    def is_unit_interval(self) -> bool:
        return self.output_range == (0.0, 1.0)


SIGMOID = ActivationFunction("sigmoid", sigmoid, sigmoid_deriv, (0.0, 1.0))
TANH = ActivationFunction("tanh", tanh, tanh_deriv, (-1.0, 1.0))

_REGISTRY: Dict[str, ActivationFunction] = {
    SIGMOID.name: SIGMOID,
    TANH.name: TANH,
}


def available_activations() -> Iterable[str]:
    return sorted(_REGISTRY)


def get_activation(name: str) -> ActivationFunction:
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(available_activations())
        raise KeyError(f"Unknown activation {name!r}. Available activations: {available}") from None


__all__ = [
    "ActivationFunction",
    "SIGMOID",
    "TANH",
    "available_activations",
    "get_activation",
    "sigmoid",
    "sigmoid_deriv",
    "tanh",
    "tanh_deriv",
]
