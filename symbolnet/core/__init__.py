"""Core numerical primitives for symbolnet."""

from . import activations, packing, propagation, types

__all__ = ["activations", "packing", "propagation", "types"]
