"""Exhaustive N-Queens sweep with a live latest-solution display."""

from .board import Board, Queen, queens_non_attacking
from .display import DisplayThread, format_board, format_duration, render_result
from .reporter import LatestResult, ProgressReporter
from .search import SolutionCounter, SweepResult, parallel_search, run, search, sweep, sweep_sizes
from .utils import KNOWN_SOLUTION_COUNTS, attacking_pairs, is_valid_solution

__all__ = [
    "Board",
    "Queen",
    "queens_non_attacking",
    "LatestResult",
    "ProgressReporter",
    "SolutionCounter",
    "SweepResult",
    "search",
    "parallel_search",
    "sweep",
    "sweep_sizes",
    "run",
    "DisplayThread",
    "format_board",
    "format_duration",
    "render_result",
    "KNOWN_SOLUTION_COUNTS",
    "attacking_pairs",
    "is_valid_solution",
]
