"""Mapping between the flat parameter vector and per-layer coefficients."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .types import Array, NetLayout


class CoefCodec:
    """Pack and unpack coefficient matrices for a fixed :class:`NetLayout`.

    Matrices are stored one after another in layer order, each in column-major
    order, so ``W_i[r, c]`` lives at ``offset_i + c * rows_i + r``.
    """

    def __init__(self, layout: NetLayout) -> None:
        self.layout = layout
        self._slices: List[Tuple[slice, Tuple[int, int]]] = []
        offset = 0
        for shape in layout.coef_shapes:
            size = shape[0] * shape[1]
            self._slices.append((slice(offset, offset + size), shape))
            offset += size
        self.dimensions = offset

    def allocate(self) -> List[Array]:
        """Return zeroed matrices shaped for the layout."""

        return [np.zeros(shape, dtype=np.float64, order="F") for _, shape in self._slices]

    def unpack(self, point: Array) -> List[Array]:
        return self.unpack_into(point, self.allocate())

    def unpack_into(self, point: Array, out: Sequence[Array]) -> List[Array]:
        vector = self._check_vector(point, "point")
        self._check_matrices(out)
        for (span, shape), matrix in zip(self._slices, out):
            matrix[...] = vector[span].reshape(shape, order="F")
        return list(out)

    def pack(self, matrices: Sequence[Array]) -> Array:
        return self.pack_into(matrices, np.empty(self.dimensions, dtype=np.float64))

    def pack_into(self, matrices: Sequence[Array], out: Array) -> Array:
        self._check_matrices(matrices)
        self._check_vector(out, "out")
        for (span, _), matrix in zip(self._slices, matrices):
            out[span] = np.ravel(matrix, order="F")
        return out

    # ------------------------------------------------------------------
    # Helpers

    def _check_vector(self, vector: Array, name: str) -> Array:
        arr = np.asarray(vector)
        if arr.ndim != 1 or arr.shape[0] != self.dimensions:
            raise ValueError(
                f"{name} must be a vector of length {self.dimensions}, got shape {arr.shape}"
            )
        return arr

    def _check_matrices(self, matrices: Sequence[Array]) -> None:
        if len(matrices) != len(self._slices):
            raise ValueError(
                f"Expected {len(self._slices)} coefficient matrices, got {len(matrices)}"
            )
        for idx, ((_, shape), matrix) in enumerate(zip(self._slices, matrices)):
            if np.shape(matrix) != shape:
                raise ValueError(
                    f"Coefficient matrix {idx} must have shape {shape}, got {np.shape(matrix)}"
                )


__all__ = ["CoefCodec"]
