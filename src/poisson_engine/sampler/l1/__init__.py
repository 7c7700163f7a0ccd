"""Logic-level kernels for the Poisson sampler."""

from .cache import HermiteCache, NormalApproxCache, SmallMeanCache
from .diagnostics import IterationGuard, SamplerDiagnostics
from .large_mean import AcceptancePath, accept_candidate, density_terms, sample_large_mean
from .small_mean import sample_small_mean

__all__ = [
    "AcceptancePath",
    "HermiteCache",
    "IterationGuard",
    "NormalApproxCache",
    "SamplerDiagnostics",
    "SmallMeanCache",
    "accept_candidate",
    "density_terms",
    "sample_large_mean",
    "sample_small_mean",
]
