#!/usr/bin/env python3
"""
Example: mode of lambda over a batch of three cells with per-cell priors
"""

import sys
from pathlib import Path
from datetime import datetime
# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pandas as pd
from scipy import stats

from mnopop.config import ModeLambdaConfig
from mnopop import CellDispatcher, UniformPrior, GammaPrior
from mnopop.density import DENSITY_FIELD
from mnopop.utils import mode_table, print_mode_table, start_logging, stop_logging

def toy_density(lambdas, n_mno, n_reg, fu, fv, flambda, rel_tol, n_sim, n_strata, verbose, n_threads):
    """
    Illustrative stand-in for the Monte Carlo posterior density: the lambda
    prior times a Poisson likelihood of the total count at rate 2*lambda
    """
    x = np.asarray(lambdas, dtype=float)
    values = flambda.frozen().pdf(x) * stats.poisson.pmf(n_mno + n_reg, 2 * x)
    return pd.DataFrame({"lambda": x, DENSITY_FIELD: values})

def main():
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    logger = start_logging(f"multi_cell_log_{timestamp}.txt")

    try:
        n_mno = [20, 17, 25]
        n_reg = [115, 123, 119]

        # Per-cell parameters as vectors sharing one distribution tag
        fu = UniformPrior(x_min=[0.3, 0.35, 0.25], x_max=[0.5, 0.45, 0.43])
        fv = GammaPrior(shape=[11, 12, 13], scale=[12, 12.3, 11.5])
        flambda = GammaPrior(shape=[11, 12, 13], scale=[12, 12.3, 12])

        config = ModeLambdaConfig(verbose=True, rel_tol=1e-8)
        dispatcher = CellDispatcher(config, toy_density)
        results = dispatcher.run_detailed(n_mno, n_reg, fu, fv, flambda)

        print_mode_table(mode_table(n_mno, n_reg, results))
    finally:
        stop_logging(logger)

if __name__ == "__main__":
    main()
