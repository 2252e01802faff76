"""Cost evaluation and gradient tooling."""

from .cost import FunctionWithDerivative, NetCostFunction
from .gradcheck import GradientCheck, check_gradient, numerical_gradient

__all__ = [
    "FunctionWithDerivative",
    "GradientCheck",
    "NetCostFunction",
    "check_gradient",
    "numerical_gradient",
]
