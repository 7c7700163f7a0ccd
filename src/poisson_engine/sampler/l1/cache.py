"""Per-sampler parameter caches, refreshed only when the mean changes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from ..l0 import constants as c


def _empty_table() -> List[float]:
    return [0.0] * (c.TABLE_SIZE + 1)


@dataclass
class SmallMeanCache:
    """Inversion state for 0 < mu < 10.

    ``pp[k]`` holds P(X <= k) for ``1 <= k <= l``; slot 0 is unused.  ``p``
    and ``q`` are the last individual and cumulative probabilities written, so
    the table can be extended without recomputation.
    """

    mu_prev: float = 0.0
    m: int = 0
    l: int = 0
    p0: float = 0.0
    p: float = 0.0
    q: float = 0.0
    pp: List[float] = field(default_factory=_empty_table)

    def refresh(self, mu: float) -> bool:
        """Start a new table when ``mu`` differs from the cached mean."""

        if mu == self.mu_prev:
            return False
        self.mu_prev = mu
        self.m = max(1, int(mu))
        self.l = 0
        self.q = self.p0 = self.p = math.exp(-mu)
        return True

    def table(self) -> Tuple[float, ...]:
        """Filled cumulative probabilities ``pp[1..l]``."""

        return tuple(self.pp[1 : self.l + 1])


@dataclass
class NormalApproxCache:
    """Step N/S constants for mu >= 10."""

    mu_prev: float = 0.0
    s: float = 0.0
    d: float = 0.0
    big_l: int = 0

    def refresh(self, mu: float) -> bool:
        if mu == self.mu_prev:
            return False
        self.mu_prev = mu
        self.s = math.sqrt(mu)
        self.d = 6.0 * mu * mu
        self.big_l = math.floor(mu - c.BIG_L_OFFSET)
        return True


@dataclass
class HermiteCache:
    """Step P constants for the Hermite approximation to the discrete normal."""

    mu_prev: float = 0.0
    omega: float = 0.0
    b1: float = 0.0
    b2: float = 0.0
    c0: float = 0.0
    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    c: float = 0.0

    def refresh(self, mu: float, s: float, *, force: bool = False) -> bool:
        # mu_prev here can lag the normal-approx cache: draws that finish in
        # step I or S never reach step P.
        if not force and mu == self.mu_prev:
            return False
        self.mu_prev = mu
        self.omega = c.M_1_SQRT_2PI / s
        self.b1 = c.ONE_24 / mu
        self.b2 = c.HERMITE_B2_SCALE * self.b1 * self.b1
        self.c3 = c.ONE_7 * self.b1 * self.b2
        self.c2 = self.b2 - 15.0 * self.c3
        self.c1 = self.b1 - 6.0 * self.b2 + 45.0 * self.c3
        self.c0 = 1.0 - self.b1 + 3.0 * self.b2 - 15.0 * self.c3
        self.c = c.HAT_MAJORIZER / mu
        return True


__all__ = ["HermiteCache", "NormalApproxCache", "SmallMeanCache"]
