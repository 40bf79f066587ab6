from .logger import (
    ProgressReporter,
    ConsoleReporter,
    make_reporter,
    ConsoleLogger,
    start_logging,
    stop_logging
)
from .reports import mode_table, print_mode_table

__all__ = [
    "ProgressReporter",
    "ConsoleReporter",
    "make_reporter",
    "ConsoleLogger",
    "start_logging",
    "stop_logging",
    "mode_table",
    "print_mode_table"
]
