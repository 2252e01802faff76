"""Finite-difference checks for analytic gradients."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.types import Array
from .cost import FunctionWithDerivative


@dataclass(frozen=True)
class GradientCheck:
    """Analytic and numerical gradients at one point."""

    analytic: Array
    numerical: Array
    relative_error: float
    max_abs_diff: float

    def passed(self, tolerance: float = 1e-5) -> bool:
        return self.relative_error <= tolerance


def numerical_gradient(fn: FunctionWithDerivative, point: Array, epsilon: float = 1e-5) -> Array:
    """Central-difference gradient of ``fn.evaluate`` at ``point``."""

    base = np.array(point, dtype=np.float64, copy=True)
    grad = np.empty_like(base)
    for idx in range(base.shape[0]):
        original = base[idx]
        base[idx] = original + epsilon
        plus = fn.evaluate(base)
        base[idx] = original - epsilon
        minus = fn.evaluate(base)
        base[idx] = original
        grad[idx] = (plus - minus) / (2.0 * epsilon)
    return grad


def relative_error(a: Array, b: Array) -> float:
    denom = max(float(np.linalg.norm(a) + np.linalg.norm(b)), np.finfo(np.float64).tiny)
    return float(np.linalg.norm(a - b) / denom)


def check_gradient(
    fn: FunctionWithDerivative, point: Array, epsilon: float = 1e-5
) -> GradientCheck:
    analytic = fn.derivate(np.empty(fn.dimensions(), dtype=np.float64), point)
    numerical = numerical_gradient(fn, point, epsilon=epsilon)
    return GradientCheck(
        analytic=analytic,
        numerical=numerical,
        relative_error=relative_error(analytic, numerical),
        max_abs_diff=float(np.max(np.abs(analytic - numerical))),
    )


__all__ = ["GradientCheck", "check_gradient", "numerical_gradient", "relative_error"]
