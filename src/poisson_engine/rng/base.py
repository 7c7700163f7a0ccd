"""Random source protocol and the uniform-driven exponential generator."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

# _EXP_Q[k - 1] = sum(log(2)**i / i! for i in 1..k)
_EXP_Q = (
    0.6931471805599453,
    0.9333736875190459,
    0.9888777961838675,
    0.9984959252914960040,
    0.9998292811061389,
    0.9999833164100727,
    0.9999985691438767,
    0.9999998906925558,
    0.9999999924734159,
    0.9999999995283275,
    0.9999999999728814,
    0.9999999999985598,
    0.9999999999999289,
    0.9999999999999968,
    0.9999999999999999,
    1.0000000000000000,
)


@runtime_checkable
class RandomSource(Protocol):
    """Capability consumed by the sampler.

    Implementations advance their own state on every call and have no other
    side effects.
    """

    def uniform(self) -> float:
        """Return a draw in [0, 1)."""

    def normal(self) -> float:
        """Return a standard normal draw."""

    def exponential(self) -> float:
        """Return a standard exponential draw."""


def exp_rand(uniform: Callable[[], float]) -> float:
    """Standard exponential deviate from a uniform stream.

    Ahrens & Dieter (1972), algorithm SA: doubles ``u`` until it leaves
    [0, 1] to extract the integer part in units of ``log(2)``, then uses the
    minimum of a Poisson-distributed number of uniforms for the fraction.
    """

    a = 0.0
    u = uniform()
    while u <= 0.0 or u >= 1.0:
        u = uniform()
    while True:
        u += u
        if u > 1.0:
            break
        a += _EXP_Q[0]
    u -= 1.0

    if u <= _EXP_Q[0]:
        return a + u

    i = 0
    ustar = uniform()
    umin = ustar
    while True:
        ustar = uniform()
        if umin > ustar:
            umin = ustar
        i += 1
        if u <= _EXP_Q[i]:
            break
    return a + umin * _EXP_Q[0]


__all__ = ["RandomSource", "exp_rand"]
