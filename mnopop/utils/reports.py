# Libraries to import:
import numpy as np
import pandas as pd

def mode_table(n_mno, n_reg, results):
    """
    One row per cell with the counts, the initial bracket and the search outcome.

    Args:
        n_mno, n_reg: counts per cell
        results: ModeSearchResult per cell (None for a failed cell), as returned
            by CellDispatcher.run_detailed

    Returns:
        pandas DataFrame
    """
    n_mno = np.atleast_1d(n_mno)
    n_reg = np.atleast_1d(n_reg)
    if not (len(n_mno) == len(n_reg) == len(results)):
        raise ValueError(f"Got {len(results)} results for {len(n_mno)} cells")

    rows = []
    for i, (nm, nr, res) in enumerate(zip(n_mno, n_reg, results)):
        row = {'cell': i + 1, 'nMNO': nm, 'nReg': nr}
        if res is None:
            row.update({'a': np.nan, 'b': np.nan, 'mode': np.nan, 'probLambda': np.nan,
                        'n_iter': 0, 'n_evals': 0, 'converged_by': 'failed'})
        else:
            row.update({
                'a': res.bracket.a,
                'b': res.bracket.b,
                'mode': res.mode,
                'probLambda': res.density,
                'n_iter': res.n_iter,
                'n_evals': res.n_evals,
                'converged_by': res.converged_by,
            })
        rows.append(row)
    return pd.DataFrame(rows, columns=['cell', 'nMNO', 'nReg', 'a', 'b', 'mode', 'probLambda',
                                       'n_iter', 'n_evals', 'converged_by'])

def print_mode_table(table, title="MODE OF LAMBDA PER CELL"):
    print("\n" + "="*90)
    print(title)
    print("="*90)
    print(f"{'Cell':<6} | {'nMNO':>8} | {'nReg':>8} | {'Bracket':>23} | {'Mode':>12} | {'Iter':>5} | {'Stop':<10}")
    print("-" * 90)
    for _, row in table.iterrows():
        bracket = f"[{row['a']:.3f}, {row['b']:.3f}]"
        print(f"{row['cell']:<6} | {row['nMNO']:>8} | {row['nReg']:>8} | {bracket:>23} | "
              f"{row['mode']:>12.6f} | {row['n_iter']:>5} | {row['converged_by']:<10}")
    print("="*90)
