import sys
from pathlib import Path
from datetime import datetime

class ProgressReporter:
    """
    Receives progress notifications from the mode search. Every hook is a
    no-op; subclasses override the ones they care about.
    """

    def search_started(self, n_mno, n_reg, state):
        pass

    def iteration(self, k, state, best):
        pass

    def search_finished(self, result):
        pass

    def cell_started(self, i, n_cells):
        pass

    def cell_finished(self, i, mode):
        pass

    def cell_failed(self, i, error):
        pass

class ConsoleReporter(ProgressReporter):
    """
    Prints progress to stdout.

    level 1 reports cells and searches, level 2 also every bracket update.
    """

    def __init__(self, level=1):
        self.level = level

    def search_started(self, n_mno, n_reg, state):
        print('Searching maximum...')
        if self.level >= 2:
            print(f"   nMNO={n_mno}, nReg={n_reg}: initial bracket [{state.a:.4f}, {state.b:.4f}]")

    def iteration(self, k, state, best):
        if self.level >= 2:
            print(f"Iter {k:03d} | Bracket: [{state.a:.6f}, {state.b:.6f}] (width: {state.width:.3e}), best={best:.6f}")

    def search_finished(self, result):
        if self.level >= 2:
            print(f"   Mode {result.mode:.6f} after {result.n_iter} iterations ({result.n_evals} density evaluations)")

    def cell_started(self, i, n_cells):
        print(f"Computing for cell {i + 1}...")

    def cell_finished(self, i, mode):
        print(' ok.')

    def cell_failed(self, i, error):
        print(f" failed: {error}")

def make_reporter(reporter=None, verbose=False):
    """Explicit reporter first, then the console when verbose, otherwise silence"""
    if reporter is not None:
        return reporter
    return ConsoleReporter() if verbose else ProgressReporter()

class ConsoleLogger:
    """
    Tees stdout to a log file. Used as a context manager it captures the
    console for the duration of the block:

        with ConsoleLogger("modes.txt"):
            mode_lambda(...)
    """
    def __init__(self, log_file=None):
        self.terminal = sys.stdout
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"mode_lambda_log_{timestamp}.txt"
        self.log_file = Path(log_file)
        self.file = open(self.log_file, 'w', encoding='utf-8')

    def write(self, message):
        self.terminal.write(message)
        self.file.write(message)
        self.file.flush()

    def flush(self):
        self.terminal.flush()
        self.file.flush()

    def close(self):
        if not self.file.closed:
            self.file.close()

    def __enter__(self):
        sys.stdout = self
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        sys.stdout = self.terminal
        self.close()

def start_logging(log_file=None):
    """Start logging console output to file"""
    return ConsoleLogger(log_file).__enter__()

def stop_logging(logger):
    """Stop logging and restore normal console output"""
    logger.__exit__(None, None, None)
    print(f"\nLog saved to: {logger.log_file}")
