"""Cross-entropy cost with L2 regularization of non-bias coefficients."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..core.types import Array


def cross_entropy(outputs: Array, targets: Array) -> float:
    """Average two-outcome cross-entropy summed over all output units.

    The target unit contributes ``-log(y)`` and every other unit ``-log(1 - y)``.
    Saturated outputs yield ``inf``; nothing is clipped.
    """

    samples = outputs.shape[0]
    row_neg_sums = np.log(1.0 - outputs).sum(axis=1)
    response = outputs[np.arange(samples), targets]
    # Sum of log(1 - y) covers the target unit too; swap it for log(y).
    per_sample = np.log(response) + row_neg_sums - np.log(1.0 - response)
    return float(-per_sample.sum() / samples)


def l2_penalty(coefs: Sequence[Array], regularization_lambda: float, samples: int) -> float:
    """Return ``lambda / (2N)`` times the squared non-bias coefficients."""

    if not regularization_lambda:
        return 0.0
    reg_sum = sum(float(np.square(W[1:, :]).sum()) for W in coefs)
    return reg_sum * regularization_lambda / (2 * samples)


def regularized_cost(
    outputs: Array,
    targets: Array,
    coefs: Sequence[Array],
    regularization_lambda: float,
) -> float:
    samples = outputs.shape[0]
    return cross_entropy(outputs, targets) + l2_penalty(coefs, regularization_lambda, samples)


__all__ = ["cross_entropy", "l2_penalty", "regularized_cost"]
