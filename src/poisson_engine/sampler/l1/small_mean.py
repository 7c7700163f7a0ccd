"""Table inversion for 0 < mu < 10 (case B)."""

from __future__ import annotations

from ...rng.base import RandomSource
from ..l0 import constants as c
from .cache import SmallMeanCache
from .diagnostics import IterationGuard, SamplerDiagnostics


def sample_small_mean(
    mu: float,
    rng: RandomSource,
    cache: SmallMeanCache,
    *,
    diagnostics: SamplerDiagnostics,
    guard: IterationGuard,
) -> float:
    """Invert one uniform against the memoised cumulative table.

    Draws whose uniform lies beyond ``pp[35]`` are retried with a fresh
    uniform; for mu < 10 that tail has probability below 1e-13.
    """

    cache.refresh(mu)
    while True:
        guard.tick()
        # Step U
        u = rng.uniform()
        if u <= cache.p0:
            diagnostics.inversion += 1
            return 0.0

        # Step T: compare against the part of the table already built.
        if cache.l > 0:
            start = 1 if u <= c.INVERSION_SPLIT else min(cache.l, cache.m)
            for k in range(start, cache.l + 1):
                if u <= cache.pp[k]:
                    diagnostics.inversion += 1
                    return float(k)
            if cache.l == c.TABLE_SIZE:
                diagnostics.table_retries += 1
                continue

        # Step C: extend the table until u is covered.
        diagnostics.table_extensions += 1
        for k in range(cache.l + 1, c.TABLE_SIZE + 1):
            cache.p *= mu / k
            cache.q += cache.p
            cache.pp[k] = cache.q
            if u <= cache.q:
                cache.l = k
                diagnostics.inversion += 1
                return float(k)
        cache.l = c.TABLE_SIZE
        diagnostics.table_retries += 1


__all__ = ["sample_small_mean"]
