from .errors import ModeLambdaError, InputError, NumericalError
from .config import ModeLambdaConfig
from .priors import (
    PriorSpec,
    UniformPrior,
    DegeneratePrior,
    TriangularPrior,
    GammaPrior,
    parse_prior
)
from .density import DensityEvaluator, FunctionDensity
from .optimization import (
    initial_bracket,
    GoldenSectionOptimizer,
    CellDispatcher,
    mode_lambda
)

__version__ = "0.1.0"

__all__ = [
    "ModeLambdaError",
    "InputError",
    "NumericalError",
    "ModeLambdaConfig",
    "PriorSpec",
    "UniformPrior",
    "DegeneratePrior",
    "TriangularPrior",
    "GammaPrior",
    "parse_prior",
    "DensityEvaluator",
    "FunctionDensity",
    "initial_bracket",
    "GoldenSectionOptimizer",
    "CellDispatcher",
    "mode_lambda"
]
