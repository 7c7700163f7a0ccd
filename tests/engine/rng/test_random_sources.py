"""Sanity tests for the random sources consumed by the sampler."""

from __future__ import annotations

import math

import numpy as np
import pytest

from poisson_engine.core.errors import PoissonEngineError
from poisson_engine.rng import (
    NumpyRandomSource,
    PhiloxEngine,
    RandomSource,
    comp_index,
    comp_label,
    comp_u64,
    exp_rand,
)


def test_philox_engine_deterministic():
    engine_a = PhiloxEngine(seed=1234)
    engine_b = PhiloxEngine(seed=1234)
    substream_a = engine_a.derive_substream("unit_test", [comp_index(3)])
    substream_b = engine_b.derive_substream("unit_test", [comp_index(3)])
    draws_a = [substream_a.uniform() for _ in range(16)]
    draws_b = [substream_b.uniform() for _ in range(16)]
    assert draws_a == draws_b


def test_philox_substreams_differ_by_label_and_component():
    engine = PhiloxEngine(seed=7)
    base = engine.derive_substream("draws", [comp_index(0)])
    other_index = engine.derive_substream("draws", [comp_index(1)])
    other_label = engine.derive_substream("draws", [comp_label("alt"), comp_index(0)])
    assert base.snapshot() != other_index.snapshot()
    assert base.snapshot() != other_label.snapshot()


def test_philox_uniforms_open_interval_and_counters():
    substream = PhiloxEngine(seed=99).derive_substream("bounds")
    before = substream.snapshot()
    values = [substream.uniform() for _ in range(500)]
    assert all(0.0 < value < 1.0 for value in values)
    assert substream.blocks == 500
    assert substream.draws == 500
    after = substream.snapshot()
    assert (after.counter_hi, after.counter_lo) != (before.counter_hi, before.counter_lo)


def test_philox_normal_and_exponential_consume_blocks():
    substream = PhiloxEngine(seed=5).derive_substream("kinds")
    z = substream.normal()
    assert math.isfinite(z)
    assert substream.blocks == 1
    assert substream.draws == 2
    e = substream.exponential()
    assert e >= 0.0
    assert substream.blocks >= 2


def test_philox_rejects_out_of_range_inputs():
    with pytest.raises(PoissonEngineError) as excinfo:
        PhiloxEngine(seed=-1)
    assert excinfo.value.code == "E_SEED_RANGE"
    with pytest.raises(PoissonEngineError):
        comp_u64(2 ** 64)
    with pytest.raises(PoissonEngineError):
        comp_index(-1)
    with pytest.raises(PoissonEngineError):
        PhiloxEngine(seed=1).derive_substream("")


def test_sources_satisfy_protocol():
    assert isinstance(NumpyRandomSource(1), RandomSource)
    assert isinstance(PhiloxEngine(seed=1).derive_substream("p"), RandomSource)


def test_numpy_source_accepts_generator_and_seed():
    from_seed = NumpyRandomSource(42)
    from_generator = NumpyRandomSource(np.random.default_rng(42))
    assert from_seed.uniform() == from_generator.uniform()
    assert from_seed.normal() == from_generator.normal()


def test_exp_rand_fast_path_uses_single_uniform():
    # 0.3 doubles to 0.6, then 1.2 > 1: a = log 2, fraction 0.2 <= log 2.
    values = iter([0.3])
    result = exp_rand(lambda: next(values))
    assert result == pytest.approx(math.log(2.0) + 0.2)


def test_exp_rand_skips_boundary_uniforms():
    values = iter([0.0, 0.75])
    # 0.75 -> 1.5 > 1 immediately, fraction 0.5
    assert exp_rand(lambda: next(values)) == pytest.approx(0.5)


def test_exp_rand_moments():
    source = NumpyRandomSource(2024)
    sample = np.array([source.exponential() for _ in range(50_000)])
    assert sample.min() >= 0.0
    assert sample.mean() == pytest.approx(1.0, abs=0.03)
    assert sample.var() == pytest.approx(1.0, abs=0.06)
