# Libraries to import:
from typing import Callable, Mapping, Protocol, Sequence, Tuple

import numpy as np
import pandas as pd

from ..errors import NumericalError
from ..priors import PriorSpec

DENSITY_FIELD = "probLambda"


class DensityEvaluator(Protocol):
    """
    Unnormalized posterior density of lambda for one cell.

    Returns a mapping (dict or DataFrame) whose 'probLambda' entry holds one
    density value per candidate lambda, in the order of `lambdas`.
    """

    def __call__(
        self,
        lambdas: Sequence[float],
        n_mno: int,
        n_reg: int,
        fu: PriorSpec,
        fv: PriorSpec,
        flambda: PriorSpec,
        rel_tol: float,
        n_sim: int,
        n_strata: Tuple[int, int],
        verbose: bool,
        n_threads: int,
    ) -> Mapping:
        ...


def extract_density(result, lambdas) -> np.ndarray:
    """Density values of an evaluator result, checked for length and finiteness"""
    try:
        values = result[DENSITY_FIELD]
    except (KeyError, TypeError, IndexError):
        raise NumericalError(f"Density evaluator result has no '{DENSITY_FIELD}' field") from None

    values = np.asarray(values, dtype=float).reshape(-1)
    lambdas = np.asarray(lambdas, dtype=float).reshape(-1)
    if values.size != lambdas.size:
        raise NumericalError(
            f"Density evaluator returned {values.size} values for {lambdas.size} candidate lambdas"
        )

    bad = ~np.isfinite(values)
    if bad.any():
        pairs = ", ".join(f"f({x:.6g})={v}" for x, v in zip(lambdas[bad], values[bad]))
        raise NumericalError(f"Non-finite posterior density: {pairs}")
    return values


class FunctionDensity:
    """
    Wrap a plain vectorized function f(lambdas) -> values as a DensityEvaluator.

    The counts, priors and Monte Carlo settings are ignored; useful for
    synthetic or closed-form densities.
    """

    def __init__(self, func: Callable[[np.ndarray], np.ndarray]):
        self.func = func
        self.n_calls = 0
        self.n_points = 0

    def __call__(self, lambdas, n_mno, n_reg, fu, fv, flambda, rel_tol, n_sim, n_strata, verbose, n_threads):
        x = np.asarray(lambdas, dtype=float).reshape(-1)
        self.n_calls += 1
        self.n_points += x.size
        values = np.broadcast_to(np.asarray(self.func(x), dtype=float), x.shape)
        return pd.DataFrame({"lambda": x, DENSITY_FIELD: values})
