# Libraries to import:
import math
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import ModeLambdaConfig
from ..density.evaluator import extract_density
from ..errors import InputError, NumericalError
from ..priors import parse_prior
from ..utils.logger import make_reporter
from .bracket import INV_PHI, INV_PHI2, SearchState, initial_bracket

@dataclass
class ModeSearchResult:
    """Outcome of the mode search in one cell"""
    mode: float
    density: float  # density at the mode, nan when nothing was evaluated
    n_iter: int
    n_evals: int
    bracket: SearchState  # initial bracket
    converged_by: str  # "relative", "width" or "degenerate"
    trace: List[SearchState] = field(default_factory=list)

def _scalar_prior(prior, name):
    spec = parse_prior(prior)
    k = spec.n_cells()
    if k is None:
        return spec
    if k == 1:
        return spec.slice(0)
    raise InputError(f"{name} carries parameters for {k} cells; a single-cell search needs one value per parameter")

class GoldenSectionOptimizer:
    """
    Golden section search for the mode of the unnormalized posterior density
    of lambda in a single cell.

    The search starts from the bracket given by `initial_bracket` and keeps
    four points a <= l <= m <= b. Each iteration drops the outer segment next
    to the smaller of f(l), f(m) and evaluates the density at one new interior
    point. It stops when the density values in the new bracket agree to
    within rel_tol (relative to the density at the best point) or when the
    bracket is narrower than abs_tol.
    """

    def __init__(self, config: Optional[ModeLambdaConfig], evaluator, reporter=None):
        self.config = config if config is not None else ModeLambdaConfig()
        self.evaluator = evaluator
        self.reporter = make_reporter(reporter, self.config.verbose)

    def _evaluate(self, lambdas, n_mno, n_reg, fu, fv, flambda):
        result = self.evaluator(
            list(lambdas), n_mno, n_reg, fu, fv, flambda,
            rel_tol=self.config.rel_tol,
            n_sim=self.config.n_sim,
            n_strata=self.config.n_strata,
            verbose=self.config.verbose,
            n_threads=self.config.n_threads,
        )
        return extract_density(result, lambdas)

    def _stopping_rule(self, state: SearchState, f_best: float) -> str:
        x1, x2, x3, x4 = state.points
        f1, f2, f3, f4 = state.values
        tol = f_best * self.config.rel_tol
        if abs(f3 - f2) <= tol or abs(f4 - f1) <= tol:
            return "relative"
        if x3 - x1 < self.config.abs_tol or x4 - x2 < self.config.abs_tol:
            return "width"
        return ""

    def run(self, n_mno, n_reg, fu, fv, flambda) -> ModeSearchResult:
        fu = _scalar_prior(fu, "fu")
        fv = _scalar_prior(fv, "fv")
        flambda = _scalar_prior(flambda, "flambda")

        bracket = initial_bracket(n_mno, n_reg)
        self.reporter.search_started(n_mno, n_reg, bracket)

        # Zero counts give a = b = 0: nothing to search
        if bracket.is_degenerate():
            result = ModeSearchResult(
                mode=bracket.a, density=math.nan, n_iter=0, n_evals=0,
                bracket=bracket, converged_by="degenerate",
            )
            self.reporter.search_finished(result)
            return result

        state = bracket.with_values(self._evaluate(bracket.points, n_mno, n_reg, fu, fv, flambda))
        n_evals = 4
        trace = [state] if self.config.record_trace else []
        max_iter = self.config.max_iter

        n_iter = 0
        converged_by = ""
        while not converged_by:
            if max_iter is not None and n_iter >= max_iter:
                raise NumericalError(
                    f"Mode search for nMNO={n_mno}, nReg={n_reg} did not converge in {max_iter} iterations; "
                    f"last bracket [{state.a:.10g}, {state.b:.10g}]"
                )

            a, l, m, b = state.points
            fa, fl, fm, fb = state.values
            if fl >= fm:
                # maximum in [a, m]
                new_l = a + INV_PHI2 * (m - a)
                f_new = self._evaluate([new_l], n_mno, n_reg, fu, fv, flambda)[0]
                state = SearchState(a, new_l, l, m, fa, f_new, fl, fm)
                best, f_best = l, fl
            else:
                # maximum in [l, b]
                new_m = l + INV_PHI * (b - l)
                f_new = self._evaluate([new_m], n_mno, n_reg, fu, fv, flambda)[0]
                state = SearchState(l, m, new_m, b, fl, fm, f_new, fb)
                best, f_best = m, fm

            n_iter += 1
            n_evals += 1
            if self.config.record_trace:
                trace.append(state)
            self.reporter.iteration(n_iter, state, best)
            converged_by = self._stopping_rule(state, f_best)

        result = ModeSearchResult(
            mode=best, density=f_best, n_iter=n_iter, n_evals=n_evals,
            bracket=bracket, converged_by=converged_by, trace=trace,
        )
        self.reporter.search_finished(result)
        return result
