"""Normal approximation with acceptance-rejection for mu >= 10 (case A).

Step N draws a normal candidate.  Large candidates are accepted at once
(step I), most others by a cheap squeeze (step S).  What remains goes through
the quotient test of step Q and, on failure, through repeated Laplace-hat
candidates tested in step H.  Steps Q and H share one density routine,
:func:`accept_candidate`, selected by :class:`AcceptancePath`.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Tuple

from ...rng.base import RandomSource
from ..l0 import constants as c
from .cache import HermiteCache, NormalApproxCache
from .diagnostics import IterationGuard, SamplerDiagnostics


class AcceptancePath(IntEnum):
    """Which caller reached the shared acceptance test (``kflag``)."""

    QUOTIENT = 0
    HAT = 1


def density_terms(
    pois: int,
    fk: float,
    difmuk: float,
    *,
    mu: float,
    s: float,
    hermite: HermiteCache,
) -> Tuple[float, float, float, float]:
    """Return ``(px, py, fx, fy)`` for a candidate (step F).

    ``py * exp(px)`` approximates the Poisson probability of ``pois`` and
    ``fy * exp(fx)`` the discrete normal probability under the Hermite
    correction.
    """

    if pois < c.FACTORIAL_TABLE_LIMIT:
        px = -mu
        py = mu ** pois / c.FACTORIALS[pois]
    else:
        delta = c.ONE_12 / fk
        delta = delta * (1.0 - c.DEL_CORRECTION * delta * delta)
        v = difmuk / fk
        if abs(v) <= c.POLYNOMIAL_RANGE:
            poly = (
                ((((((c.A7 * v + c.A6) * v + c.A5) * v + c.A4) * v + c.A3) * v + c.A2) * v + c.A1)
                * v
                + c.A0
            )
            px = fk * v * v * poly - delta
        else:
            px = fk * math.log(1.0 + v) - difmuk - delta
        py = c.M_1_SQRT_2PI / math.sqrt(fk)

    x = (0.5 - difmuk) / s
    x *= x
    fx = -0.5 * x
    fy = hermite.omega * (((hermite.c3 * x + hermite.c2) * x + hermite.c1) * x + hermite.c0)
    return px, py, fx, fy


def accept_candidate(
    pois: int,
    fk: float,
    difmuk: float,
    kflag: AcceptancePath,
    *,
    mu: float,
    s: float,
    hermite: HermiteCache,
    u: float,
    e: float = 0.0,
) -> bool:
    """Shared acceptance test for steps Q and H.

    With ``kflag == HAT`` the candidate came from the Laplace hat and ``u``
    is the signed uniform in (-1, 1), ``e`` the exponential that built it.
    With ``kflag == QUOTIENT`` the candidate is a normal draw that failed the
    squeeze and ``u`` is the squeeze uniform; ``e`` is unused.
    """

    px, py, fx, fy = density_terms(pois, fk, difmuk, mu=mu, s=s, hermite=hermite)
    if kflag == AcceptancePath.HAT:
        return hermite.c * abs(u) <= py * math.exp(px + e) - fy * math.exp(fx + e)
    return fy - u * fy <= py * math.exp(px - fx)


def sample_large_mean(
    mu: float,
    rng: RandomSource,
    normal_cache: NormalApproxCache,
    hermite: HermiteCache,
    *,
    diagnostics: SamplerDiagnostics,
    guard: IterationGuard,
) -> float:
    """Draw one deviate for mu >= 10."""

    new_big_mu = normal_cache.refresh(mu)
    s = normal_cache.s

    # Step N
    g = mu + s * rng.normal()

    pending = None
    if g >= 0.0:
        pois = math.floor(g)
        # Step I
        if pois >= normal_cache.big_l:
            diagnostics.immediate_accept += 1
            return float(pois)
        # Step S
        fk = float(pois)
        difmuk = mu - fk
        u = rng.uniform()
        if normal_cache.d * u >= difmuk * difmuk * difmuk:
            diagnostics.squeeze_accept += 1
            return float(pois)
        pending = (pois, fk, difmuk, u)

    # Step P
    hermite.refresh(mu, s, force=new_big_mu)

    if pending is not None:
        # Step Q
        pois, fk, difmuk, u = pending
        if accept_candidate(
            pois, fk, difmuk, AcceptancePath.QUOTIENT, mu=mu, s=s, hermite=hermite, u=u
        ):
            diagnostics.quotient_accept += 1
            return float(pois)

    while True:
        guard.tick()
        # Step E: Laplace hat candidate t = 1.8 +/- E.
        e = rng.exponential()
        u = 2.0 * rng.uniform() - 1.0
        t = c.HAT_CENTER + (e if u >= 0.0 else -e)
        if t <= c.HAT_CUTOFF:
            diagnostics.hat_cutoff += 1
            continue
        pois = math.floor(mu + s * t)
        fk = float(pois)
        difmuk = mu - fk
        # Step H
        if accept_candidate(
            pois, fk, difmuk, AcceptancePath.HAT, mu=mu, s=s, hermite=hermite, u=u, e=e
        ):
            diagnostics.hat_accept += 1
            return float(pois)
        diagnostics.hat_reject += 1


__all__ = ["AcceptancePath", "accept_candidate", "density_terms", "sample_large_mean"]
