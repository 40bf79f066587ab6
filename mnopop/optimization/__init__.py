from .bracket import SearchState, initial_bracket, INV_PHI
from .golden_section import GoldenSectionOptimizer, ModeSearchResult
from .dispatcher import CellDispatcher, Cell, mode_lambda

__all__ = [
    "SearchState",
    "initial_bracket",
    "INV_PHI",
    "GoldenSectionOptimizer",
    "ModeSearchResult",
    "CellDispatcher",
    "Cell",
    "mode_lambda"
]
