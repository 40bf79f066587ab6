# Libraries to import:
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import InputError

@dataclass
class ModeLambdaConfig:
    """Configuration for the mode search of the lambda posterior"""

    # Passed through to the density evaluator
    rel_tol: float = 1e-6  # also the relative stopping tolerance of the search
    n_sim: int = 10000  # Monte Carlo points per density evaluation
    n_strata: Tuple[int, int] = (1, 100)  # strata in each dimension
    verbose: bool = False
    n_threads: Optional[int] = None  # None -> all available cores

    # Golden section search
    abs_tol: float = 1e-8  # bracket width below which the search stops
    max_iter: Optional[int] = 1000  # None -> no iteration cap
    record_trace: bool = False

    # Batch of cells
    n_workers: int = 1  # >1 runs cells on a thread pool
    on_cell_error: str = "raise"  # "raise" or "nan"

    def __post_init__(self):
        if self.n_threads is None:
            self.n_threads = os.cpu_count() or 1

        if self.rel_tol < 0:
            raise InputError(f"rel_tol must be non-negative, got {self.rel_tol}")
        if self.abs_tol <= 0:
            raise InputError(f"abs_tol must be positive, got {self.abs_tol}")
        if self.n_sim < 1:
            raise InputError(f"n_sim must be at least 1, got {self.n_sim}")
        if len(self.n_strata) != 2:
            raise InputError(f"n_strata must have 2 elements, got {self.n_strata}")
        self.n_strata = tuple(int(s) for s in self.n_strata)
        if self.max_iter is not None and self.max_iter < 1:
            raise InputError(f"max_iter must be at least 1 or None, got {self.max_iter}")
        if self.n_threads < 1:
            raise InputError(f"n_threads must be at least 1, got {self.n_threads}")
        if self.n_workers < 1:
            raise InputError(f"n_workers must be at least 1, got {self.n_workers}")
        if self.on_cell_error not in ("raise", "nan"):
            raise InputError(f"Unknown on_cell_error: {self.on_cell_error}")
