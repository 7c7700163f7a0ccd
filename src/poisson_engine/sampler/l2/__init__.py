"""Dispatch and orchestration for the Poisson sampler."""

from .dispatcher import PoissonSampler
from .runner import DrawRequest, DrawRunResult, PoissonDrawRunner, sample_many

__all__ = [
    "DrawRequest",
    "DrawRunResult",
    "PoissonDrawRunner",
    "PoissonSampler",
    "sample_many",
]
