"""Random source backed by ``numpy.random.Generator``."""

from __future__ import annotations

import numpy as np

from .base import exp_rand


class NumpyRandomSource:
    """Adapts a numpy ``Generator`` to the sampler's random source protocol.

    Uniforms and normals come straight from the generator; exponentials are
    built from its uniform stream so the draw sequence matches the reference
    runtime's construction.
    """

    def __init__(self, generator: np.random.Generator | int | None = None) -> None:
        if isinstance(generator, np.random.Generator):
            self.generator = generator
        else:
            self.generator = np.random.default_rng(generator)

    def uniform(self) -> float:
        return float(self.generator.random())

    def normal(self) -> float:
        return float(self.generator.standard_normal())

    def exponential(self) -> float:
        return exp_rand(self.uniform)


__all__ = ["NumpyRandomSource"]
