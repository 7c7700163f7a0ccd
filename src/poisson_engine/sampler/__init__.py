"""Public surface for the Ahrens-Dieter Poisson sampler."""

from .l0 import BIG_MU_THRESHOLD, MODULE_NAME, TABLE_SIZE
from .l1 import (
    AcceptancePath,
    HermiteCache,
    IterationGuard,
    NormalApproxCache,
    SamplerDiagnostics,
    SmallMeanCache,
    accept_candidate,
    density_terms,
    sample_large_mean,
    sample_small_mean,
)
from .l2 import DrawRequest, DrawRunResult, PoissonDrawRunner, PoissonSampler, sample_many
from .l3 import validate_draws, validate_inversion_table

__all__ = [
    # L0
    "BIG_MU_THRESHOLD",
    "MODULE_NAME",
    "TABLE_SIZE",
    # L1 kernels
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
    # L2 dispatch/orchestration
    "DrawRequest",
    "DrawRunResult",
    "PoissonDrawRunner",
    "PoissonSampler",
    "sample_many",
    # L3 validation
    "validate_draws",
    "validate_inversion_table",
]
