"""Network configuration presets and JSON/YAML loading."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Tuple

import yaml

from .core.activations import get_activation
from .core.types import NetLayout
from .net import Net
from .training.cost import check_regularization_lambda

_PRESETS: Dict[str, Mapping[str, object]] = {
    "tiny": {
        "layer_sizes": [3, 4, 2],
        "activation": "sigmoid",
        "regularization_lambda": 0.1,
    },
    "symbols-8x8": {
        "layer_sizes": [64, 32, 10],
        "activation": "sigmoid",
        "regularization_lambda": 1.0,
    },
    "symbols-16x16-deep": {
        "layer_sizes": [256, 64, 32, 10],
        "activation": "sigmoid",
        "regularization_lambda": 1.0,
    },
}

_KNOWN_KEYS = {"layer_sizes", "activation", "regularization_lambda"}


@dataclass(frozen=True)
class NetConfig:
    """Resolved network and cost configuration."""

    layer_sizes: Tuple[int, ...]
    activation: str = "sigmoid"
    regularization_lambda: float = 0.0

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "NetConfig":
        unknown = set(raw) - _KNOWN_KEYS
        if unknown:
            raise KeyError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        if "layer_sizes" not in raw:
            raise KeyError("Config missing required key: layer_sizes")
        sizes = raw["layer_sizes"]
        if not isinstance(sizes, (list, tuple)):
            raise TypeError("Config 'layer_sizes' must be a list of integers")
        activation = str(raw.get("activation", "sigmoid"))
        get_activation(activation)
        lam = check_regularization_lambda(raw.get("regularization_lambda", 0.0))  # type: ignore[arg-type]
        # NetLayout validates the sizes themselves.
        layout = NetLayout(sizes)
        return cls(
            layer_sizes=layout.layer_sizes,
            activation=activation,
            regularization_lambda=lam,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "layer_sizes": list(self.layer_sizes),
            "activation": self.activation,
            "regularization_lambda": self.regularization_lambda,
        }


def load_config(path: str | Path) -> NetConfig:
    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return NetConfig.from_mapping(data)


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> NetConfig:
    try:
        raw = deepcopy(_PRESETS[name])
    except KeyError:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from None
    return NetConfig.from_mapping(raw)


def build_net(config: NetConfig) -> Net:
    return Net(layout=NetLayout(config.layer_sizes), activation=get_activation(config.activation))


__all__ = ["NetConfig", "build_net", "load_config", "load_preset", "presets"]
