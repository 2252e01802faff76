"""Core typing contracts for symbolnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class NetLayout:
    """Layer widths of a fully-connected network, input layer first.

    Coefficient matrix ``i`` maps layer ``i`` to layer ``i + 1`` and has one
    extra leading row holding the bias coefficients.
    """

    layer_sizes: Tuple[int, ...]

    def __post_init__(self) -> None:
        raw = list(self.layer_sizes)
        for size in raw:
            if isinstance(size, bool) or not isinstance(size, (int, float, np.integer)):
                raise ValueError(f"Layer sizes must be integers, got {raw}")
            if int(size) != size:
                raise ValueError(f"Layer sizes must be integers, got {raw}")
        sizes = tuple(int(size) for size in raw)
        if len(sizes) < 2:
            raise ValueError(
                f"NetLayout needs at least an input and an output layer, got {list(sizes)}"
            )
        if any(size < 1 for size in sizes):
            raise ValueError(f"Layer sizes must be positive, got {list(sizes)}")
        object.__setattr__(self, "layer_sizes", sizes)

    @property
    def input_size(self) -> int:
        return self.layer_sizes[0]

    @property
    def output_size(self) -> int:
        return self.layer_sizes[-1]

    @property
    def coefs_count(self) -> int:
        return len(self.layer_sizes) - 1

    def coef_shape(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.coefs_count:
            raise IndexError(f"Coefficient index {index} out of range [0, {self.coefs_count})")
        return self.layer_sizes[index] + 1, self.layer_sizes[index + 1]

    @property
    def coef_shapes(self) -> List[Tuple[int, int]]:
        return [self.coef_shape(idx) for idx in range(self.coefs_count)]

    @property
    def dimensions_count(self) -> int:
        return int(sum(rows * cols for rows, cols in self.coef_shapes))


@dataclass(frozen=True)
class TrainingBatch:
    """Inputs matrix ``(N, L0)`` with one target class index per row."""

    inputs: Array
    targets: Array

    @property
    def samples_count(self) -> int:
        return int(self.inputs.shape[0])


@dataclass
class ForwardState:
    """Intermediate values captured during a retaining forward pass.

    ``layer_inputs[i]`` is the bias-augmented activation fed into coefficient
    matrix ``i``; ``layer_derivs[i]`` is ``f'(Z_i)`` for hidden layer ``i``.
    The output layer has no stored derivative.
    """

    output: Array
    layer_inputs: List[Array] = field(default_factory=list)
    layer_derivs: List[Array] = field(default_factory=list)
