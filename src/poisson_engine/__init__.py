"""Ahrens-Dieter Poisson deviates with cached per-mean state."""

from .core import PoissonEngineError, SamplerPolicy, err, load_sampler_policy
from .rng import NumpyRandomSource, PhiloxEngine, PhiloxSubstream, RandomSource, exp_rand
from .sampler import (
    DrawRequest,
    DrawRunResult,
    PoissonDrawRunner,
    PoissonSampler,
    sample_many,
    validate_draws,
    validate_inversion_table,
)

__version__ = "0.1.0"

__all__ = [
    "DrawRequest",
    "DrawRunResult",
    "NumpyRandomSource",
    "PhiloxEngine",
    "PhiloxSubstream",
    "PoissonDrawRunner",
    "PoissonEngineError",
    "PoissonSampler",
    "RandomSource",
    "SamplerPolicy",
    "err",
    "exp_rand",
    "load_sampler_policy",
    "sample_many",
    "validate_draws",
    "validate_inversion_table",
]
