"""Constants for the Poisson sampler."""

from . import constants
from .constants import BIG_MU_THRESHOLD, MODULE_NAME, TABLE_SIZE

__all__ = ["BIG_MU_THRESHOLD", "MODULE_NAME", "TABLE_SIZE", "constants"]
