#!/usr/bin/env python3
"""
Example: mode of lambda in a single cell with a synthetic density
"""

import sys
from pathlib import Path
# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from mnopop.config import ModeLambdaConfig
from mnopop import FunctionDensity, GoldenSectionOptimizer, UniformPrior, GammaPrior
from mnopop.visualization import save_convergence_plot

def main():
    """
    nMNO = nReg = 20: the search starts on [10, 30]. The synthetic density
    peaks at lambda = 20.
    """
    config = ModeLambdaConfig(verbose=True, record_trace=True)
    density = FunctionDensity(lambda x: np.exp(-0.5 * ((x - 20.0) / 3.0) ** 2))

    optimizer = GoldenSectionOptimizer(config, density)
    result = optimizer.run(
        20, 20,
        fu=UniformPrior(0.3, 0.5),
        fv=GammaPrior(11, 12),
        flambda=GammaPrior(11, 12),
    )

    print(f"\nMode: {result.mode:.8f} ({result.n_iter} iterations, {result.n_evals} density evaluations, "
          f"stopped by {result.converged_by} criterion)")
    save_convergence_plot(result.trace, filename="basic_mode_search_convergence.png")

if __name__ == "__main__":
    main()
