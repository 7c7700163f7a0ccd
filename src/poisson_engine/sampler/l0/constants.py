"""Frozen constants of the Ahrens-Dieter (1982) Poisson generator.

The coefficients encode the accuracy of the Hermite/Laplace approximations
from Ahrens & Dieter, "Computer generation of Poisson deviates from modified
normal distributions", ACM TOMS 8 (1982) 163-179.  Keep them verbatim.
"""

from __future__ import annotations

MODULE_NAME = "poisson_engine.ahrens_dieter"

# Branch split: small means use table inversion, means >= this use case A.
BIG_MU_THRESHOLD = 10.0

# Largest index of the cumulative probability table pp[1..TABLE_SIZE].
TABLE_SIZE = 35
# ~= pp[9] for mu = 10; below it the table scan restarts from k = 1.
INVERSION_SPLIT = 0.458

# big_l = floor(mu - BIG_L_OFFSET) bounds m(mu) from above for mu >= 10.
BIG_L_OFFSET = 1.1484
HAT_CENTER = 1.8
# For t <= HAT_CUTOFF, pk < fk for every mu >= 10.
HAT_CUTOFF = -0.6744
HAT_MAJORIZER = 0.1069
DEL_CORRECTION = 4.8
HERMITE_B2_SCALE = 0.3
POLYNOMIAL_RANGE = 0.25
FACTORIAL_TABLE_LIMIT = 10

A0 = -0.5
A1 = 0.3333333
A2 = -0.2500068
A3 = 0.2000118
A4 = -0.1661269
A5 = 0.1421878
A6 = -0.1384794
A7 = 0.125006

ONE_7 = 0.1428571428571428571
ONE_12 = 0.0833333333333333333
ONE_24 = 0.0416666666666666667
M_1_SQRT_2PI = 0.398942280401432677939946059934

# (0..9)!
FACTORIALS = (1.0, 1.0, 2.0, 6.0, 24.0, 120.0, 720.0, 5040.0, 40320.0, 362880.0)

__all__ = [
    "A0",
    "A1",
    "A2",
    "A3",
    "A4",
    "A5",
    "A6",
    "A7",
    "BIG_L_OFFSET",
    "BIG_MU_THRESHOLD",
    "DEL_CORRECTION",
    "FACTORIALS",
    "FACTORIAL_TABLE_LIMIT",
    "HAT_CENTER",
    "HAT_CUTOFF",
    "HAT_MAJORIZER",
    "HERMITE_B2_SCALE",
    "INVERSION_SPLIT",
    "M_1_SQRT_2PI",
    "MODULE_NAME",
    "ONE_12",
    "ONE_24",
    "ONE_7",
    "POLYNOMIAL_RANGE",
    "TABLE_SIZE",
]
