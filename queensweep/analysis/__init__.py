"""
Benchmark and command-line package for queensweep.

This package contains:
- settings: global knobs for the live sweep and the benchmark
- stats: typed benchmark records and pandas summaries
- benchmark: timed sequential/parallel sweeps over a bounded list of sizes
- plots: timing chart
- cli: argument parser and entry points
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    ProgressPrinter,
    SweepRecord,
    records_to_frame,
    summarize_records,
)

__all__ = [
    # types
    "SweepRecord",
    # utils
    "ProgressPrinter",
    "records_to_frame",
    "summarize_records",
    # settings module
    "settings",
]
