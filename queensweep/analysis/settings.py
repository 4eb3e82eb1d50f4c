"""Global settings for the queensweep command line.

Values can be overridden at runtime via the configuration loader in
`queensweep.analysis.cli.apply_configuration` and by command line flags.
The live sweep has no upper size: it starts at START_SIDE_SIZE and keeps
going until interrupted.
"""
from __future__ import annotations

import os
from typing import List

# First board size of the live sweep (fixed; not read from configuration)
START_SIDE_SIZE: int = 4

# Search variant for the live sweep: 'sequential' | 'parallel'
SEARCH_MODE: str = "sequential"

# Worker threads used by the parallel search
NUM_WORKERS: int = max(1, (os.cpu_count() or 1) - 1)

# Number of leading columns expanded before handing boards to workers
FAN_OUT_DEPTH: int = 1

# Seconds to keep the final board of a size on screen before the next size
PAUSE_SECONDS: float = 2.0

# Benchmark sizes and repetitions (the benchmark only; never the live sweep)
BENCHMARK_SIZES: List[int] = [4, 5, 6, 7, 8, 9]
BENCHMARK_RUNS: int = 3

# Show a timing chart after the benchmark table
BENCHMARK_PLOT: bool = False

SEARCH_MODES: List[str] = ["sequential", "parallel"]


def set_search(mode: str, workers: int, fan_out_depth: int) -> None:
    """Configure the search variant and print the active choice.

    Raises ValueError for an unknown mode or non-positive worker count.
    """
    global SEARCH_MODE, NUM_WORKERS, FAN_OUT_DEPTH
    if mode not in SEARCH_MODES:
        raise ValueError(f"Unknown search mode '{mode}'. Allowed: {', '.join(SEARCH_MODES)}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    if fan_out_depth < 0:
        raise ValueError(f"fan_out_depth must be >= 0, got {fan_out_depth}")
    SEARCH_MODE = mode
    NUM_WORKERS = workers
    FAN_OUT_DEPTH = fan_out_depth

    print("Search settings configured:")
    print(f"   - mode: {SEARCH_MODE}")
    if SEARCH_MODE == "parallel":
        print(f"   - workers: {NUM_WORKERS}, fan-out depth: {FAN_OUT_DEPTH}")
