"""Network definition: layer layout paired with its activation function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .core.activations import SIGMOID, ActivationFunction
from .core.packing import CoefCodec
from .core.propagation import forward
from .core.types import Array, NetLayout
from .training.cost import NetCostFunction


@dataclass(frozen=True)
class Net:
    """Network definition: layer layout plus the neuron activation function."""

    layout: NetLayout
    activation: ActivationFunction = SIGMOID

    @classmethod
    def from_sizes(cls, layer_sizes: Sequence[int], activation: ActivationFunction = SIGMOID) -> "Net":
        return cls(layout=NetLayout(layer_sizes), activation=activation)

    @property
    def codec(self) -> CoefCodec:
        return CoefCodec(self.layout)

    def random_point(self, rng: np.random.Generator, epsilon: float | None = None) -> Array:
        """Draw every coefficient uniformly from ``[-eps, eps]``.

        Without ``epsilon`` each matrix uses ``sqrt(6) / sqrt(fan_in + fan_out)``.
        """

        matrices = []
        sizes = self.layout.layer_sizes
        for idx, shape in enumerate(self.layout.coef_shapes):
            eps = epsilon if epsilon is not None else np.sqrt(6.0) / np.sqrt(sizes[idx] + sizes[idx + 1])
            matrices.append(rng.uniform(-eps, eps, size=shape))
        return self.codec.pack(matrices)

    def evaluate(self, inputs: Array, point: Array) -> Array:
        """Return output activations ``(N, output_size)`` for ``inputs``."""

        inputs = np.atleast_2d(np.asarray(inputs, dtype=np.float64))
        if inputs.shape[1] != self.layout.input_size:
            raise ValueError(
                f"inputs must have {self.layout.input_size} features, got {inputs.shape[1]}"
            )
        coefs = self.codec.unpack(point)
        return forward(inputs, coefs, self.activation).output

    def predict(self, inputs: Array, point: Array) -> Array:
        return self.evaluate(inputs, point).argmax(axis=1)

    def cost_function(
        self, inputs: Array, targets: Array, regularization_lambda: float = 0.0
    ) -> NetCostFunction:
        return NetCostFunction(
            self.layout, self.activation, inputs, targets, regularization_lambda
        )


__all__ = ["Net"]
