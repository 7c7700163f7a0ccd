"""Table inversion for small means."""

from __future__ import annotations

import math

import pytest

from poisson_engine.core.config import SamplerPolicy
from poisson_engine.core.errors import PoissonEngineError
from poisson_engine.rng import NumpyRandomSource
from poisson_engine.sampler import (
    IterationGuard,
    PoissonSampler,
    SamplerDiagnostics,
    SmallMeanCache,
    TABLE_SIZE,
    sample_small_mean,
    validate_draws,
    validate_inversion_table,
)


def _cdf(mu: float, k: int) -> float:
    p = math.exp(-mu)
    total = p
    for i in range(1, k + 1):
        p *= mu / i
        total += p
    return total


def _draw(mu, source, cache, diagnostics=None, limit=None):
    return sample_small_mean(
        mu,
        source,
        cache,
        diagnostics=diagnostics or SamplerDiagnostics(),
        guard=IterationGuard(limit, mu),
    )


def test_uniform_below_p0_returns_zero(scripted_source):
    cache = SmallMeanCache()
    source = scripted_source(uniforms=[0.001])
    assert _draw(2.0, source, cache) == 0.0
    assert cache.l == 0
    assert cache.p0 == pytest.approx(math.exp(-2.0))
    assert cache.m == 2


def test_table_extends_only_as_far_as_needed(scripted_source):
    mu = 3.0
    cache = SmallMeanCache()
    target = (_cdf(mu, 2) + _cdf(mu, 3)) / 2.0
    source = scripted_source(uniforms=[target])
    assert _draw(mu, source, cache) == 3.0
    assert cache.l == 3
    assert cache.table() == pytest.approx(tuple(_cdf(mu, k) for k in range(1, 4)))


def test_existing_table_is_reused_before_extension(scripted_source):
    mu = 3.0
    cache = SmallMeanCache()
    first = (_cdf(mu, 4) + _cdf(mu, 5)) / 2.0
    second = (_cdf(mu, 1) + _cdf(mu, 2)) / 2.0
    source = scripted_source(uniforms=[first, second])
    diagnostics = SamplerDiagnostics()
    assert _draw(mu, source, cache, diagnostics) == 5.0
    assert _draw(mu, source, cache, diagnostics) == 2.0
    assert cache.l == 5
    assert diagnostics.table_extensions == 1
    assert diagnostics.inversion == 2


def test_scan_starts_at_m_above_split(scripted_source):
    mu = 8.5
    cache = SmallMeanCache()
    source = scripted_source(uniforms=[0.999])
    value = _draw(mu, source, cache)
    assert _cdf(mu, int(value) - 1) < 0.999 <= _cdf(mu, int(value))
    assert cache.m == 8

    source = scripted_source(uniforms=[0.7])
    value = _draw(mu, source, cache)
    assert _cdf(mu, int(value) - 1) < 0.7 <= _cdf(mu, int(value))


def test_exhausted_table_retries_with_fresh_uniform(scripted_source):
    mu = 0.5
    cache = SmallMeanCache()
    # A real table reaches 1.0 well before pp[35]; cap it at 0.9 to force
    # the retry path.
    cache.refresh(mu)
    cache.l = TABLE_SIZE
    for k in range(1, TABLE_SIZE + 1):
        cache.pp[k] = 0.9
    diagnostics = SamplerDiagnostics()
    source = scripted_source(uniforms=[0.95, 0.8])
    value = _draw(mu, source, cache, diagnostics)
    assert value >= 1.0
    assert diagnostics.table_retries == 1
    assert source.calls["uniform"] == 2


def test_mean_change_resets_table(scripted_source):
    cache = SmallMeanCache()
    _draw(4.0, scripted_source(uniforms=[0.99]), cache)
    assert cache.l > 0
    cache.refresh(6.0)
    assert cache.l == 0
    assert cache.m == 6
    assert cache.p == cache.q == cache.p0 == pytest.approx(math.exp(-6.0))


def test_table_invariant_after_many_draws():
    sampler = PoissonSampler()
    source = NumpyRandomSource(31337)
    for _ in range(20_000):
        sampler.sample(7.0, source)
    filled = validate_inversion_table(sampler.small_cache)
    assert filled == sampler.small_cache.l
    table = sampler.small_cache.table()
    assert all(a <= b for a, b in zip(table, table[1:]))


def test_small_mean_moments():
    sampler = PoissonSampler()
    source = NumpyRandomSource(5)
    draws = [sampler.sample(5.0, source) for _ in range(100_000)]
    metrics = validate_draws(draws, 5.0)
    assert metrics["sample_mean"] == pytest.approx(5.0, abs=0.05)
    assert metrics["sample_variance"] == pytest.approx(5.0, abs=0.15)


def test_iteration_cap_raises_on_exhaustion(scripted_source):
    sampler = PoissonSampler(SamplerPolicy(max_iterations=2))
    sampler.small_cache.refresh(0.5)
    sampler.small_cache.l = TABLE_SIZE
    for k in range(1, TABLE_SIZE + 1):
        sampler.small_cache.pp[k] = 0.9
    source = scripted_source(uniforms=[0.95, 0.96, 0.97])
    with pytest.raises(PoissonEngineError) as excinfo:
        sampler.sample(0.5, source)
    assert excinfo.value.code == "E_POISSON_ITERATIONS_EXHAUSTED"
    assert source.calls["uniform"] == 2
