"""Failure taxonomy shared by the sampler, random sources and runners.

Every failure carries a stable ``code`` so that callers and run summaries can
react deterministically.  Codes map onto a small set of categories; unknown
codes fall back to the validation bucket so a typo never hides a failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Tuple


class FailureCategory(Enum):
    """High-level failure buckets."""

    F1_PARAMETER = "invalid_parameter"
    F2_POLICY = "policy_invalid"
    F3_RNG = "rng_violation"
    F4_CONVERGENCE = "iteration_cap_exhausted"
    F5_VALIDATION = "validation_failure"
    F6_IO = "io_failure"


_FAILURE_CODE_MAP: Mapping[str, Tuple[FailureCategory, str]] = {
    "E_POISSON_MEAN_INVALID": (FailureCategory.F1_PARAMETER, "poisson_mean_invalid"),
    "E_POISSON_COUNT_INVALID": (FailureCategory.F1_PARAMETER, "poisson_count_invalid"),
    "E_POISSON_ITERATIONS_EXHAUSTED": (
        FailureCategory.F4_CONVERGENCE,
        "poisson_iterations_exhausted",
    ),
    "E_POLICY_IO": (FailureCategory.F2_POLICY, "policy_file_missing"),
    "E_POLICY_ROOT": (FailureCategory.F2_POLICY, "policy_root_not_mapping"),
    "E_POLICY_SCHEMA": (FailureCategory.F2_POLICY, "policy_schema_violation"),
    "E_POLICY_VALUE": (FailureCategory.F2_POLICY, "policy_value_invalid"),
    "E_SEED_RANGE": (FailureCategory.F3_RNG, "seed_out_of_range"),
    "E_SUBSTREAM_U64": (FailureCategory.F3_RNG, "substream_component_range"),
    "E_SUBSTREAM_INDEX": (FailureCategory.F3_RNG, "substream_component_range"),
    "E_SUBSTREAM_LABEL": (FailureCategory.F3_RNG, "substream_label_invalid"),
    "E_SUBSTREAM_KIND": (FailureCategory.F3_RNG, "substream_component_kind"),
    "E_RNG_COUNTER": (FailureCategory.F3_RNG, "rng_counter_mismatch"),
    "E_VALIDATION_EMPTY": (FailureCategory.F5_VALIDATION, "validation_empty"),
    "E_VALIDATION_DOMAIN": (FailureCategory.F5_VALIDATION, "validation_domain"),
    "E_VALIDATION_MOMENTS": (FailureCategory.F5_VALIDATION, "validation_moments"),
    "E_VALIDATION_TABLE": (FailureCategory.F5_VALIDATION, "validation_table"),
    "E_IO_WRITE": (FailureCategory.F6_IO, "io_write_failure"),
}


@dataclass(frozen=True)
class ErrorContext:
    """Structured payload describing a failure.

    ``code`` is the local ``E_*`` identifier raised by the code; the helper
    properties map it onto the failure taxonomy.
    """

    code: str
    detail: str

    def as_message(self) -> str:
        return f"{self.code}: {self.detail}"

    @property
    def failure_category(self) -> FailureCategory:
        return _FAILURE_CODE_MAP.get(
            self.code, (FailureCategory.F5_VALIDATION, self.code)
        )[0]

    @property
    def failure_code(self) -> str:
        return _FAILURE_CODE_MAP.get(
            self.code, (FailureCategory.F5_VALIDATION, self.code)
        )[1]


class PoissonEngineError(RuntimeError):
    """Runtime error that preserves the canonical failure context."""

    def __init__(self, context: ErrorContext) -> None:
        super().__init__(context.as_message())
        self.context = context

    @property
    def code(self) -> str:
        return self.context.code

    def failure_record(self) -> Dict[str, str]:
        return {
            "code": self.context.code,
            "detail": self.context.detail,
            "failure_category": self.context.failure_category.value,
            "failure_code": self.context.failure_code,
        }


def err(code: str, detail: str) -> PoissonEngineError:
    """Build a :class:`PoissonEngineError` with minimal ceremony."""

    return PoissonEngineError(ErrorContext(code=code, detail=detail))


__all__ = ["ErrorContext", "FailureCategory", "PoissonEngineError", "err"]
