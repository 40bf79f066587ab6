from .evaluator import DensityEvaluator, FunctionDensity, extract_density, DENSITY_FIELD

__all__ = [
    "DensityEvaluator",
    "FunctionDensity",
    "extract_density",
    "DENSITY_FIELD"
]
