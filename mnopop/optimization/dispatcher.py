# Libraries to import:
import dataclasses
from concurrent.futures import ThreadPoolExecutor
from typing import List, NamedTuple, Optional, Union

import numpy as np

from ..config import ModeLambdaConfig
from ..errors import InputError, NumericalError
from ..priors import PriorSpec, cell_priors
from ..utils.logger import make_reporter
from .golden_section import GoldenSectionOptimizer, ModeSearchResult

class Cell(NamedTuple):
    """Inputs of the mode search in one cell"""
    n_mno: int
    n_reg: int
    fu: PriorSpec
    fv: PriorSpec
    flambda: PriorSpec

def _as_counts(values, name):
    arr = np.atleast_1d(np.asarray(values))
    if arr.ndim != 1:
        raise InputError(f"{name} must be a 1-D vector of counts, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.number):
        raise InputError(f"{name} must be numeric, got dtype {arr.dtype}")
    if arr.size and (not np.all(np.isfinite(arr)) or np.any(arr < 0)):
        raise InputError(f"{name} must contain non-negative counts")
    return arr

def _count(value):
    return int(value) if float(value).is_integer() else float(value)

class CellDispatcher:
    """
    Runs the single-cell mode search over a batch of cells.

    Counts are vectors of equal length N; each prior either has shared or
    N-long per-cell parameters, or is a list of N per-cell priors. Cells are
    independent and processed in input order (or on a thread pool when
    config.n_workers > 1); results always come back in input order.
    """

    def __init__(self, config: Optional[ModeLambdaConfig], evaluator, reporter=None):
        self.config = config if config is not None else ModeLambdaConfig()
        self.reporter = make_reporter(reporter, self.config.verbose)
        self.optimizer = GoldenSectionOptimizer(self.config, evaluator, self.reporter)

    def cells(self, n_mno, n_reg, fu, fv, flambda) -> List[Cell]:
        """Validate the batch and split it into per-cell inputs"""
        n_mno = _as_counts(n_mno, "nMNO")
        n_reg = _as_counts(n_reg, "nReg")
        n_cells = n_mno.size
        if n_reg.size != n_cells:
            raise InputError(f"nReg and nMNO must have the same length ({n_reg.size} != {n_cells})")

        priors = {}
        for name, prior in (("fu", fu), ("fv", fv), ("flambda", flambda)):
            try:
                priors[name] = cell_priors(prior, n_cells)
            except InputError as e:
                raise InputError(f"{name}: {e}") from None

        return [
            Cell(_count(n_mno[i]), _count(n_reg[i]), priors["fu"][i], priors["fv"][i], priors["flambda"][i])
            for i in range(n_cells)
        ]

    def _run_cell(self, i, cell: Cell, n_cells: int) -> Optional[ModeSearchResult]:
        self.reporter.cell_started(i, n_cells)
        try:
            result = self.optimizer.run(*cell)
        except NumericalError as error:
            self.reporter.cell_failed(i, error)
            if self.config.on_cell_error == "raise":
                raise
            return None
        self.reporter.cell_finished(i, result.mode)
        return result

    def run_detailed(self, n_mno, n_reg, fu, fv, flambda) -> List[Optional[ModeSearchResult]]:
        """
        Search results for every cell, in input order. With
        on_cell_error="nan" a failed cell is None.
        """
        cells = self.cells(n_mno, n_reg, fu, fv, flambda)

        if len(cells) == 1:
            return [self.optimizer.run(*cells[0])]

        if self.config.n_workers > 1 and len(cells) > 1:
            with ThreadPoolExecutor(max_workers=self.config.n_workers) as pool:
                return list(pool.map(
                    lambda args: self._run_cell(args[0], args[1], len(cells)),
                    enumerate(cells),
                ))

        return [self._run_cell(i, cell, len(cells)) for i, cell in enumerate(cells)]

    def run(self, n_mno, n_reg, fu, fv, flambda) -> Union[float, np.ndarray]:
        """Mode of lambda: a float for a single cell, an array of N modes otherwise"""
        results = self.run_detailed(n_mno, n_reg, fu, fv, flambda)
        if np.ndim(n_mno) == 0 or len(results) == 1:
            return float(results[0].mode)
        return np.array([r.mode if r is not None else np.nan for r in results], dtype=float)

def mode_lambda(n_mno, n_reg, fu, fv, flambda, evaluator, config=None, reporter=None, **options):
    """
    Mode of the unnormalized posterior density of lambda for each cell.

    Args:
        n_mno, n_reg: non-negative counts per cell from the network operator
            and from the register (scalars or equal-length vectors)
        fu, fv: priors of the two auxiliary variables of the Monte Carlo
            integration
        flambda: prior of lambda
        evaluator: DensityEvaluator computing the posterior density
        config: ModeLambdaConfig; keyword options (rel_tol, n_sim, n_strata,
            verbose, n_threads, ...) override its fields
        reporter: ProgressReporter for progress notifications

    Returns:
        float for a single cell, numpy array of modes (input order) otherwise
    """
    if config is None:
        config = ModeLambdaConfig(**options)
    elif options:
        config = dataclasses.replace(config, **options)
    return CellDispatcher(config, evaluator, reporter).run(n_mno, n_reg, fu, fv, flambda)
