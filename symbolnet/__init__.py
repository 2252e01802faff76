"""symbolnet public API."""

from .config import NetConfig, build_net, load_config, load_preset, presets
from .core import activations, packing, propagation, types  # noqa: F401
from .core.activations import ActivationFunction, get_activation
from .core.packing import CoefCodec
from .core.types import NetLayout
from .net import Net
from .training.cost import FunctionWithDerivative, NetCostFunction
from .training.gradcheck import check_gradient, numerical_gradient

__all__ = [
    "ActivationFunction",
    "CoefCodec",
    "FunctionWithDerivative",
    "Net",
    "NetConfig",
    "NetCostFunction",
    "NetLayout",
    "activations",
    "build_net",
    "check_gradient",
    "get_activation",
    "load_config",
    "load_preset",
    "numerical_gradient",
    "packing",
    "presets",
    "propagation",
    "types",
]
