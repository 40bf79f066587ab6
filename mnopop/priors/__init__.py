from .prior_spec import (
    PriorSpec,
    UniformPrior,
    DegeneratePrior,
    TriangularPrior,
    GammaPrior,
    PRIOR_TYPES,
    parse_prior,
    prior_length,
    cell_priors
)

__all__ = [
    "PriorSpec",
    "UniformPrior",
    "DegeneratePrior",
    "TriangularPrior",
    "GammaPrior",
    "PRIOR_TYPES",
    "parse_prior",
    "prior_length",
    "cell_priors"
]
