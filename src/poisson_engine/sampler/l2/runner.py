"""Orchestration for repeated draws at a single mean."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping

import numpy as np
import polars as pl

from ...core.config import SamplerPolicy
from ...core.errors import err
from ...rng.base import RandomSource
from ...rng.philox import PhiloxEngine, PhiloxState, comp_index
from ..l0 import constants as c
from .dispatcher import PoissonSampler

logger = logging.getLogger(__name__)

DRAWS_FILENAME = "draws.parquet"
SUMMARY_FILENAME = "summary.json"


def sample_many(
    n: int,
    mu: float,
    rng: RandomSource,
    *,
    sampler: PoissonSampler | None = None,
) -> np.ndarray:
    """Draw ``n`` deviates at ``mu`` through one sampler instance."""

    if n < 0:
        raise err("E_POISSON_COUNT_INVALID", f"draw count must be non-negative (got {n})")
    sampler = sampler or PoissonSampler()
    out = np.empty(int(n), dtype=np.float64)
    for index in range(int(n)):
        out[index] = sampler.sample(mu, rng)
    return out


@dataclass(frozen=True)
class DrawRequest:
    """Inputs for one draw run."""

    seed: int
    mu: float
    n: int
    label: str = "poisson_draws"
    stream_index: int = 0


@dataclass(frozen=True)
class DrawRunResult:
    """Draws plus the RNG accounting of the run."""

    request: DrawRequest
    draws: np.ndarray
    diagnostics: Mapping[str, int]
    blocks: int
    rng_draws: int
    counter_before: PhiloxState
    counter_after: PhiloxState
    draws_path: Path | None = None
    summary_path: Path | None = None

    def summary(self) -> dict[str, object]:
        finite = self.draws[np.isfinite(self.draws)]
        return {
            "module": c.MODULE_NAME,
            "seed": self.request.seed,
            "mu": self.request.mu,
            "n": self.request.n,
            "label": self.request.label,
            "stream_index": self.request.stream_index,
            "sample_mean": float(finite.mean()) if finite.size else None,
            "sample_variance": float(finite.var(ddof=1)) if finite.size > 1 else None,
            "nan_count": int(self.draws.size - finite.size),
            "blocks": self.blocks,
            "rng_draws": self.rng_draws,
            "rng_counter_before": {
                "hi": self.counter_before.counter_hi,
                "lo": self.counter_before.counter_lo,
            },
            "rng_counter_after": {
                "hi": self.counter_after.counter_hi,
                "lo": self.counter_after.counter_lo,
            },
            "diagnostics": dict(self.diagnostics),
            "draws_path": str(self.draws_path) if self.draws_path else None,
        }


class PoissonDrawRunner:
    """Drive ``sample_many`` over a deterministic Philox substream."""

    def __init__(self, policy: SamplerPolicy | None = None) -> None:
        self.policy = policy or SamplerPolicy()

    def run(self, request: DrawRequest, *, output_dir: Path | None = None) -> DrawRunResult:
        start_perf = time.perf_counter()
        last_checkpoint = start_perf

        def log_progress(message: str) -> None:
            nonlocal last_checkpoint
            now = time.perf_counter()
            logger.info(
                "poisson draws: %s (elapsed=%.2fs, delta=%.2fs)",
                message,
                now - start_perf,
                now - last_checkpoint,
            )
            last_checkpoint = now

        log_progress(f"run initialised (mu={request.mu!r}, n={request.n}, seed={request.seed})")

        engine = PhiloxEngine(seed=request.seed)
        substream = engine.derive_substream(request.label, (comp_index(request.stream_index),))
        sampler = PoissonSampler(self.policy)

        counter_before = substream.snapshot()
        blocks_before = substream.blocks
        draws_before = substream.draws
        draws = sample_many(request.n, request.mu, substream, sampler=sampler)
        counter_after = substream.snapshot()
        blocks = substream.blocks - blocks_before
        rng_draws = substream.draws - draws_before
        if blocks < 0 or rng_draws < 0:
            raise err("E_RNG_COUNTER", "rng counters decreased across draw run")
        log_progress(f"sampled {draws.size} deviates (blocks={blocks})")

        result = DrawRunResult(
            request=request,
            draws=draws,
            diagnostics=sampler.diagnostics.as_dict(),
            blocks=blocks,
            rng_draws=rng_draws,
            counter_before=counter_before,
            counter_after=counter_after,
        )
        if output_dir is not None:
            result = _write_outputs(result, Path(output_dir).expanduser().resolve())
            log_progress(f"wrote outputs to {result.draws_path.parent}")
        log_progress("completed run")
        return result


def _write_outputs(result: DrawRunResult, output_dir: Path) -> DrawRunResult:
    draws_path = output_dir / DRAWS_FILENAME
    summary_path = output_dir / SUMMARY_FILENAME
    frame = pl.DataFrame(
        {
            "draw_index": np.arange(result.draws.size, dtype=np.int64),
            "value": result.draws,
        },
        schema={"draw_index": pl.Int64, "value": pl.Float64},
    )
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        frame.write_parquet(draws_path)
        written = replace(result, draws_path=draws_path, summary_path=summary_path)
        summary_path.write_text(
            json.dumps(written.summary(), indent=2, sort_keys=True),
            encoding="utf-8",
        )
    except OSError as exc:
        raise err("E_IO_WRITE", f"failed to write draw outputs under '{output_dir}': {exc}") from exc
    return written


__all__ = [
    "DRAWS_FILENAME",
    "DrawRequest",
    "DrawRunResult",
    "PoissonDrawRunner",
    "SUMMARY_FILENAME",
    "sample_many",
]
