from .plotting import save_convergence_plot

__all__ = [
    "save_convergence_plot"
]
