import matplotlib.pyplot as plt
import numpy as np

def save_convergence_plot(trace, filename="mode_lambda_convergence.png", prefix="", title=None):
    """
    Bracket bounds, interior points and bracket width per iteration of one
    mode search (trace from a search run with record_trace=True)
    """
    if not trace:
        return None

    if prefix:
        filename = prefix + filename

    iters = np.arange(len(trace))
    a = np.array([s.a for s in trace])
    l = np.array([s.l for s in trace])
    m = np.array([s.m for s in trace])
    b = np.array([s.b for s in trace])
    width = b - a

    fig, ax1 = plt.subplots(figsize=(10, 6))
    color_bracket = '#2c3e50'
    ax1.set_xlabel('Iteration')
    ax1.set_ylabel('Lambda', color=color_bracket, fontsize=12, fontweight='bold')
    ax1.fill_between(iters, a, b, color=color_bracket, alpha=0.15, label='Bracket [a, b]')
    ax1.plot(iters, l, marker='o', color=color_bracket, linewidth=1.5, label='l')
    ax1.plot(iters, m, marker='s', color='#16a085', linewidth=1.5, label='m')
    ax1.tick_params(axis='y', labelcolor=color_bracket)
    ax1.grid(True, which="both", ls="-", alpha=0.2)
    ax1.legend(loc='upper left')

    ax2 = ax1.twinx()
    color_width = '#e74c3c'
    ax2.set_ylabel('Bracket width', color=color_width, fontsize=12, fontweight='bold')
    ax2.plot(iters, width, color=color_width, linestyle='--', alpha=0.6, label='Width')
    ax2.set_yscale('log')
    ax2.tick_params(axis='y', labelcolor=color_width)

    plt.title(title or 'Golden Section Search: Bracket vs Iteration', fontsize=14)
    fig.tight_layout()
    plt.savefig(filename)
    plt.close(fig)
    print(f"Saved: {filename}")
    return filename
