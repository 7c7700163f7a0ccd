from .validator import DEFAULT_Z_MAX, validate_draws, validate_inversion_table

__all__ = ["DEFAULT_Z_MAX", "validate_draws", "validate_inversion_table"]
