"""Single-draw entry point owning the cross-call parameter caches."""

from __future__ import annotations

import logging
import math

from ...core.config import SamplerPolicy
from ...core.errors import err
from ...rng.base import RandomSource
from ..l0 import constants as c
from ..l1 import (
    HermiteCache,
    IterationGuard,
    NormalApproxCache,
    SamplerDiagnostics,
    SmallMeanCache,
    sample_large_mean,
    sample_small_mean,
)

logger = logging.getLogger(__name__)


class PoissonSampler:
    """Ahrens-Dieter Poisson generator with per-instance caches.

    Reusing one instance across draws that share ``mu`` amortises the table
    and constant setup.  The caches are mutable and unguarded: use one
    sampler per thread, or serialise calls externally.
    """

    def __init__(self, policy: SamplerPolicy | None = None) -> None:
        self.policy = policy or SamplerPolicy()
        self.small_cache = SmallMeanCache()
        self.normal_cache = NormalApproxCache()
        self.hermite_cache = HermiteCache()
        self.diagnostics = SamplerDiagnostics()

    def sample(self, mu: float, rng: RandomSource) -> float:
        """Return one Poisson(mu) deviate, or ``nan`` when mu is invalid."""

        mu = float(mu)
        if not math.isfinite(mu) or mu < 0.0:
            self.diagnostics.invalid_mean += 1
            if self.policy.invalid_mean == "raise":
                raise err(
                    "E_POISSON_MEAN_INVALID",
                    f"mu must be finite and non-negative (got {mu!r})",
                )
            logger.warning("%s: invalid mean mu=%r, returning NaN", c.MODULE_NAME, mu)
            return math.nan
        if mu == 0.0:
            self.diagnostics.zero_mean += 1
            return 0.0

        guard = IterationGuard(self.policy.max_iterations, mu)
        if mu < c.BIG_MU_THRESHOLD:
            return sample_small_mean(
                mu,
                rng,
                self.small_cache,
                diagnostics=self.diagnostics,
                guard=guard,
            )
        return sample_large_mean(
            mu,
            rng,
            self.normal_cache,
            self.hermite_cache,
            diagnostics=self.diagnostics,
            guard=guard,
        )

    __call__ = sample


__all__ = ["PoissonSampler"]
