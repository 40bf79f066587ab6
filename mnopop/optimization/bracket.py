# Libraries to import:
import math
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

from ..errors import InputError

INV_PHI = (math.sqrt(5) - 1) / 2  # ~0.618
INV_PHI2 = 1 - INV_PHI  # ~0.382

@dataclass(frozen=True)
class SearchState:
    """Four ordered abscissas a <= l <= m <= b and the density at each of them"""
    a: float
    l: float
    m: float
    b: float
    fa: float = math.nan
    fl: float = math.nan
    fm: float = math.nan
    fb: float = math.nan

    @property
    def points(self) -> Tuple[float, float, float, float]:
        return (self.a, self.l, self.m, self.b)

    @property
    def values(self) -> Tuple[float, float, float, float]:
        return (self.fa, self.fl, self.fm, self.fb)

    @property
    def width(self) -> float:
        return self.b - self.a

    def is_degenerate(self) -> bool:
        return not self.b - self.a > 0

    def with_values(self, values) -> "SearchState":
        fa, fl, fm, fb = (float(v) for v in values)
        return replace(self, fa=fa, fl=fl, fm=fm, fb=fb)

def _check_count(value, name):
    if not np.isfinite(value) or value < 0:
        raise InputError(f"{name} must be a non-negative count, got {value}")

def initial_bracket(n_mno, n_reg) -> SearchState:
    """
    Initial bracket for the mode of lambda in one cell: from a quarter to three
    quarters of the total observed count, with interior points at the golden
    section positions.
    """
    _check_count(n_mno, "nMNO")
    _check_count(n_reg, "nReg")
    total = float(n_mno) + float(n_reg)
    a = max(total / 4, 0.0)
    b = 3 * total / 4
    return SearchState(
        a=a,
        l=a + INV_PHI2 * (b - a),
        m=a + INV_PHI * (b - a),
        b=b,
    )
