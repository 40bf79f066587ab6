"""
Pytest fixtures for the mode-of-lambda test suite.
"""

import os
import sys

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from mnopop.config import ModeLambdaConfig
from mnopop import FunctionDensity, UniformPrior, GammaPrior


class PeakedDensity:
    """
    Cell-aware synthetic density with its peak at 0.55 * (nMNO + nReg).
    Records the inputs of every call.
    """

    def __init__(self, rel_width=0.1):
        self.rel_width = rel_width
        self.calls = []

    def __call__(self, lambdas, n_mno, n_reg, fu, fv, flambda, **options):
        self.calls.append({
            "lambdas": list(lambdas), "n_mno": n_mno, "n_reg": n_reg,
            "fu": fu, "fv": fv, "flambda": flambda, "options": options,
        })
        x = np.asarray(lambdas, dtype=float)
        centre = 0.55 * (n_mno + n_reg)
        return {"probLambda": np.exp(-0.5 * ((x - centre) / (self.rel_width * centre)) ** 2)}


@pytest.fixture
def config():
    return ModeLambdaConfig(n_threads=2)


@pytest.fixture
def priors():
    """Scalar priors for a single cell: fu, fv, flambda"""
    return UniformPrior(0.3, 0.5), GammaPrior(11, 12), GammaPrior(11, 12)


@pytest.fixture
def batch_priors():
    """Per-cell priors for the three-cell example batch"""
    fu = UniformPrior(x_min=[0.3, 0.35, 0.25], x_max=[0.5, 0.45, 0.43])
    fv = GammaPrior(shape=[11, 12, 13], scale=[12, 12.3, 11.5])
    flambda = GammaPrior(shape=[11, 12, 13], scale=[12, 12.3, 12])
    return fu, fv, flambda


@pytest.fixture
def quadratic():
    """f(x) = -(x - 20)^2"""
    return FunctionDensity(lambda x: -(x - 20.0) ** 2)


@pytest.fixture
def peaked():
    return PeakedDensity()
