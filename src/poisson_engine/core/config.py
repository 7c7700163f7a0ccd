"""Sampler policy loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from jsonschema import Draft202012Validator

from .errors import err

InvalidMeanPolicy = Literal["nan", "raise"]

POLICY_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "semver": {"type": "string"},
        "poisson_sampler": {
            "type": "object",
            "properties": {
                "invalid_mean": {"enum": ["nan", "raise"]},
                "max_iterations": {
                    "oneOf": [
                        {"type": "integer", "minimum": 1},
                        {"type": "null"},
                    ]
                },
            },
            "additionalProperties": False,
        },
    },
    "required": ["poisson_sampler"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class SamplerPolicy:
    """Policy knobs for a :class:`~poisson_engine.sampler.PoissonSampler`.

    ``max_iterations`` bounds the retry loops of a single draw.  ``None``
    keeps the loops unbounded, which is the behaviour of the published
    algorithm; a finite cap turns a pathological run into an
    ``E_POISSON_ITERATIONS_EXHAUSTED`` failure without touching acceptance
    probabilities.
    """

    invalid_mean: InvalidMeanPolicy = "nan"
    max_iterations: int | None = None
    semver: str | None = None
    source_path: Path | None = None

    def __post_init__(self) -> None:
        if self.invalid_mean not in {"nan", "raise"}:
            raise err(
                "E_POLICY_VALUE",
                f"invalid_mean must be 'nan' or 'raise' (got {self.invalid_mean!r})",
            )
        if self.max_iterations is not None and int(self.max_iterations) <= 0:
            raise err(
                "E_POLICY_VALUE",
                f"max_iterations must be positive when provided (got {self.max_iterations})",
            )


def policy_from_mapping(data: Mapping[str, Any], *, source_path: Path | None = None) -> SamplerPolicy:
    """Validate a decoded policy document and build a :class:`SamplerPolicy`."""

    validator = Draft202012Validator(POLICY_SCHEMA)
    errors = sorted(validator.iter_errors(dict(data)), key=lambda e: [str(part) for part in e.path])
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.path) or "<root>"
        raise err("E_POLICY_SCHEMA", f"{location}: {first.message}")

    section = data["poisson_sampler"]
    max_iterations = section.get("max_iterations")
    return SamplerPolicy(
        invalid_mean=section.get("invalid_mean", "nan"),
        max_iterations=int(max_iterations) if max_iterations is not None else None,
        semver=data.get("semver"),
        source_path=source_path,
    )


def load_sampler_policy(path: Path) -> SamplerPolicy:
    """Load a sampler policy YAML file."""

    path = Path(path).expanduser().resolve()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise err("E_POLICY_IO", f"unable to read sampler policy '{path}': {exc}") from exc
    data = yaml.safe_load(text)
    if not isinstance(data, Mapping):
        raise err(
            "E_POLICY_ROOT",
            f"sampler policy '{path}' must decode to a mapping",
        )
    return policy_from_mapping(data, source_path=path)


__all__ = [
    "InvalidMeanPolicy",
    "POLICY_SCHEMA",
    "SamplerPolicy",
    "load_sampler_policy",
    "policy_from_mapping",
]
