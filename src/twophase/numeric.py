from __future__ import annotations

"""
Tolerant comparisons for tableau entries.

Repeated row operations leave values such as 0.9999999999999998 or -1e-17
where the exact answer is 1 or 0. Matching a tableau entry against an exact
0 or 1 truncates it to SIMPLEX_PRECISION decimal places first. Sign and
magnitude checks use the raw value and only ignore drift below EPS.
"""

from fractions import Fraction
from typing import Union
import math

import numpy as np

SIMPLEX_PRECISION = 4
EPS = 1e-12

Num = Union[int, float, np.floating]


def normalize(x, precision: int = SIMPLEX_PRECISION):
    """Truncate x toward zero to `precision` decimal places.

    Accepts scalars and numpy arrays; arrays are normalized elementwise.
    """
    scale = 10.0 ** precision
    if isinstance(x, np.ndarray):
        return np.trunc(x * scale) / scale
    return math.trunc(x * scale) / scale


def is_zero(x: Num, precision: int = SIMPLEX_PRECISION) -> bool:
    return normalize(float(x), precision) == 0


def is_one(x: Num, precision: int = SIMPLEX_PRECISION) -> bool:
    return normalize(float(x), precision) == 1


def is_positive(x: Num, eps: float = EPS) -> bool:
    return x > eps


def is_negligible(x: Num, eps: float = EPS) -> bool:
    return abs(x) <= eps


def fmt_num(x: Num) -> str:
    """Pretty-print numbers as integers or reduced fractions for traces."""
    x = float(x)
    if math.isnan(x) or math.isinf(x):
        return str(x)
    if abs(x) < 1e-12:
        return "0"
    fr = Fraction.from_float(x).limit_denominator(10**6)
    if fr.denominator == 1:
        return str(fr.numerator)
    sign = '-' if fr.numerator * fr.denominator < 0 else ''
    return f"{sign}{abs(fr.numerator)}/{abs(fr.denominator)}"
