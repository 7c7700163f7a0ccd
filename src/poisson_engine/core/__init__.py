"""Shared errors, logging and policy configuration."""

from .config import SamplerPolicy, load_sampler_policy, policy_from_mapping
from .errors import ErrorContext, FailureCategory, PoissonEngineError, err

__all__ = [
    "ErrorContext",
    "FailureCategory",
    "PoissonEngineError",
    "SamplerPolicy",
    "err",
    "load_sampler_policy",
    "policy_from_mapping",
]
