"""Validation helpers for sampled deviates and the inversion table."""

from __future__ import annotations

import logging
import math
from typing import Dict, Sequence

import numpy as np

from ...core.errors import err
from ..l1.cache import SmallMeanCache

logger = logging.getLogger(__name__)

DEFAULT_Z_MAX = 5.0


def validate_draws(
    draws: Sequence[float] | np.ndarray,
    mu: float,
    *,
    z_max: float = DEFAULT_Z_MAX,
) -> Dict[str, float]:
    """Check domain and first two moments of a Poisson(mu) sample.

    The mean must sit within ``z_max`` standard errors of ``mu`` (Var = mu/n)
    and so must the unbiased sample variance, using Var(s^2) ~ (mu + 2 mu^2)/n
    for the Poisson fourth central moment mu + 3 mu^2.
    """

    values = np.asarray(draws, dtype=np.float64)
    n = int(values.size)
    if n < 2:
        raise err("E_VALIDATION_EMPTY", f"need at least two draws to validate (got {n})")
    if not np.all(np.isfinite(values)):
        raise err("E_VALIDATION_DOMAIN", "sample contains NaN or infinite values")
    if np.any(values < 0.0):
        raise err("E_VALIDATION_DOMAIN", "sample contains negative values")
    if np.any(values != np.floor(values)):
        raise err("E_VALIDATION_DOMAIN", "sample contains non-integer values")

    sample_mean = float(values.mean())
    sample_variance = float(values.var(ddof=1))
    mean_se = math.sqrt(mu / n)
    variance_se = math.sqrt((mu + 2.0 * mu * mu) / n)
    mean_z = (sample_mean - mu) / mean_se if mean_se > 0.0 else 0.0
    variance_z = (sample_variance - mu) / variance_se if variance_se > 0.0 else 0.0

    metrics = {
        "n": float(n),
        "mu": float(mu),
        "sample_mean": sample_mean,
        "sample_variance": sample_variance,
        "mean_z": mean_z,
        "variance_z": variance_z,
    }
    logger.debug("moment check: %s", metrics)
    if abs(mean_z) > z_max:
        raise err(
            "E_VALIDATION_MOMENTS",
            f"sample mean {sample_mean:.6f} deviates from mu={mu} by {mean_z:.2f} SE",
        )
    if abs(variance_z) > z_max:
        raise err(
            "E_VALIDATION_MOMENTS",
            f"sample variance {sample_variance:.6f} deviates from mu={mu} by {variance_z:.2f} SE",
        )
    return metrics


def validate_inversion_table(cache: SmallMeanCache, *, rel_tol: float = 1e-12) -> int:
    """Confirm ``pp[1..l]`` is nondecreasing and equals the running sum of p_i.

    Returns the number of filled entries.
    """

    table = cache.table()
    if not table:
        return 0
    mu = cache.mu_prev
    p = math.exp(-mu)
    running = p
    previous = p
    for k, value in enumerate(table, start=1):
        p *= mu / k
        running += p
        if value < previous:
            raise err(
                "E_VALIDATION_TABLE",
                f"pp[{k}]={value!r} decreases below pp[{k - 1}]={previous!r}",
            )
        if not math.isclose(value, running, rel_tol=rel_tol, abs_tol=0.0):
            raise err(
                "E_VALIDATION_TABLE",
                f"pp[{k}]={value!r} differs from cumulative probability {running!r}",
            )
        previous = value
    return len(table)


__all__ = ["DEFAULT_Z_MAX", "validate_draws", "validate_inversion_table"]
