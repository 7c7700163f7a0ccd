"""Step counters and the optional retry cap for a sampler instance."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict

from ...core.errors import err


@dataclass
class SamplerDiagnostics:
    """Counts which step of the algorithm produced (or rejected) each draw."""

    invalid_mean: int = 0
    zero_mean: int = 0
    inversion: int = 0
    table_extensions: int = 0
    table_retries: int = 0
    immediate_accept: int = 0
    squeeze_accept: int = 0
    quotient_accept: int = 0
    hat_accept: int = 0
    hat_reject: int = 0
    hat_cutoff: int = 0

    @property
    def draws(self) -> int:
        return (
            self.zero_mean
            + self.inversion
            + self.immediate_accept
            + self.squeeze_accept
            + self.quotient_accept
            + self.hat_accept
        )

    def as_dict(self) -> Dict[str, int]:
        payload = asdict(self)
        payload["draws"] = self.draws
        return payload

    def reset(self) -> None:
        for item in fields(self):
            setattr(self, item.name, 0)


class IterationGuard:
    """Counts retry-loop passes of one draw against an optional cap."""

    __slots__ = ("limit", "mu", "passes")

    def __init__(self, limit: int | None, mu: float) -> None:
        self.limit = limit
        self.mu = mu
        self.passes = 0

    def tick(self) -> None:
        self.passes += 1
        if self.limit is not None and self.passes > self.limit:
            raise err(
                "E_POISSON_ITERATIONS_EXHAUSTED",
                f"no deviate accepted for mu={self.mu!r} within {self.limit} iterations",
            )


__all__ = ["IterationGuard", "SamplerDiagnostics"]
