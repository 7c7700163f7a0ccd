"""Random sources consumed by the Poisson sampler."""

from .base import RandomSource, exp_rand
from .numpy_source import NumpyRandomSource
from .philox import (
    PhiloxEngine,
    PhiloxState,
    PhiloxSubstream,
    comp_index,
    comp_label,
    comp_u64,
    philox2x64_10,
)

__all__ = [
    "NumpyRandomSource",
    "PhiloxEngine",
    "PhiloxState",
    "PhiloxSubstream",
    "RandomSource",
    "comp_index",
    "comp_label",
    "comp_u64",
    "exp_rand",
    "philox2x64_10",
]
