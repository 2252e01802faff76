"""Cost function exposed to gradient-based optimizers."""

from __future__ import annotations

import logging
import warnings
from typing import List, Protocol

import numpy as np

from ..core.activations import ActivationFunction
from ..core.packing import CoefCodec
from ..core.propagation import backward, forward
from ..core.types import Array, NetLayout, TrainingBatch
from .losses import regularized_cost

logger = logging.getLogger(__name__)


class FunctionWithDerivative(Protocol):
    """Protocol the optimizer relies on."""

    def dimensions(self) -> int:
        """Return the length of the parameter vector."""

    def evaluate(self, point: Array) -> float:
        """Return the function value at ``point``."""

    def derivate(self, grad_out: Array, point: Array) -> Array:
        """Write the gradient at ``point`` into ``grad_out``."""


def check_regularization_lambda(value: float) -> float:
    """Return ``value`` as a float, rejecting negative or non-finite lambdas."""

    lam = float(value)
    if not np.isfinite(lam) or lam < 0:
        raise ValueError(f"regularization_lambda must be a non-negative number, got {lam}")
    return lam


def validate_batch(layout: NetLayout, inputs: Array, targets: Array) -> TrainingBatch:
    """Check shapes and target indices of a training batch against ``layout``."""

    inputs = np.asarray(inputs, dtype=np.float64)
    targets = np.asarray(targets)
    if inputs.ndim != 2 or inputs.shape[1] != layout.input_size:
        raise ValueError(
            f"inputs must have shape (N, {layout.input_size}), got {inputs.shape}"
        )
    if inputs.shape[0] == 0:
        raise ValueError("inputs must contain at least one sample")
    if targets.ndim != 1 or targets.shape[0] != inputs.shape[0]:
        raise ValueError(
            f"targets must be a vector of length {inputs.shape[0]}, got shape {targets.shape}"
        )
    if not np.issubdtype(targets.dtype, np.integer):
        raise ValueError(f"targets must hold integer class indices, got dtype {targets.dtype}")
    bad = (targets < 0) | (targets >= layout.output_size)
    if bad.any():
        first = int(np.flatnonzero(bad)[0])
        raise ValueError(
            f"Target index {int(targets[first])} at sample {first} is outside "
            f"[0, {layout.output_size})"
        )
    return TrainingBatch(inputs=inputs, targets=targets.astype(np.intp, copy=False))


class NetCostFunction:
    """Regularized cross-entropy cost of a network over a fixed batch.

    The instance owns one scratch matrix per layer which every call to
    :meth:`evaluate` or :meth:`derivate` overwrites with the unpacked point.
    It is therefore not thread-safe: concurrent calls on the same instance
    are undefined. Use one instance per thread, or serialize the calls. The
    training batch is only read and may be shared between instances.
    """

    def __init__(
        self,
        layout: NetLayout,
        activation: ActivationFunction,
        inputs: Array,
        targets: Array,
        regularization_lambda: float = 0.0,
    ) -> None:
        regularization_lambda = check_regularization_lambda(regularization_lambda)
        batch = validate_batch(layout, inputs, targets)
        if not activation.is_unit_interval:
            warnings.warn(
                f"Activation {activation.name!r} maps into {activation.output_range}; "
                "the cross-entropy cost and its gradient assume outputs in (0, 1)",
                UserWarning,
                stacklevel=2,
            )

        self.layout = layout
        self.activation = activation
        self.batch = batch
        self.regularization_lambda = regularization_lambda
        self._codec = CoefCodec(layout)
        self._coefs: List[Array] = self._codec.allocate()
        logger.debug(
            "NetCostFunction layout=%s dimensions=%d samples=%d lambda=%g",
            list(layout.layer_sizes),
            self._codec.dimensions,
            batch.samples_count,
            regularization_lambda,
        )

    def dimensions(self) -> int:
        return self._codec.dimensions

    def evaluate(self, point: Array) -> float:
        coefs = self._codec.unpack_into(point, self._coefs)
        state = forward(self.batch.inputs, coefs, self.activation)
        return regularized_cost(
            state.output, self.batch.targets, coefs, self.regularization_lambda
        )

    def derivate(self, grad_out: Array, point: Array) -> Array:
        if (
            not isinstance(grad_out, np.ndarray)
            or grad_out.shape != (self.dimensions(),)
            or not np.issubdtype(grad_out.dtype, np.floating)
        ):
            raise ValueError(
                f"grad_out must be a float vector of length {self.dimensions()}, "
                f"got {getattr(grad_out, 'shape', type(grad_out).__name__)} "
                f"{getattr(grad_out, 'dtype', '')}"
            )
        coefs = self._codec.unpack_into(point, self._coefs)
        state = forward(self.batch.inputs, coefs, self.activation, retain=True)
        grads = backward(state, self.batch.targets, coefs, self.regularization_lambda)
        return self._codec.pack_into(grads, grad_out)

    def gradient(self, point: Array) -> Array:
        """Return the gradient at ``point`` as a new vector."""

        return self.derivate(np.empty(self.dimensions(), dtype=np.float64), point)


__all__ = [
    "FunctionWithDerivative",
    "NetCostFunction",
    "check_regularization_lambda",
    "validate_batch",
]
