"""Timing benchmark comparing the sequential and parallel searches.

Each requested size is swept ``runs`` times per mode. Solution counts are
checked against ``KNOWN_SOLUTION_COUNTS`` (when known) and against the
sequential count, so a scheduling bug in the parallel search surfaces as an
error instead of a misleading timing. Results stay in memory; nothing is
written to disk.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from queensweep.reporter import ProgressReporter
from queensweep.search import sweep
from queensweep.utils import KNOWN_SOLUTION_COUNTS

from . import settings
from .stats import ProgressPrinter, SweepRecord


def run_benchmark(
    sizes: List[int],
    runs: int = 1,
    modes: Optional[List[str]] = None,
    workers: Optional[int] = None,
    fan_out_depth: Optional[int] = None,
    progress_label: str = "Benchmark",
) -> List[SweepRecord]:
    """Time full sweeps for every size, mode and repetition.

    Parameters
    ----------
    sizes : List[int]
        Board sizes to enumerate, in the order given.
    runs : int
        Repetitions per (size, mode).
    modes : List[str] | None
        Subset of ``settings.SEARCH_MODES``; all modes when None.
    workers, fan_out_depth : int | None
        Parallel search knobs; default to the current settings.

    Returns
    -------
    List[SweepRecord]
        One record per timed sweep.

    Raises
    ------
    ValueError
        On an unknown mode or ``runs < 1``.
    AssertionError
        If a sweep's solution count disagrees with the known count or with
        the sequential count for the same size.
    """
    modes = list(modes or settings.SEARCH_MODES)
    unknown = [mode for mode in modes if mode not in settings.SEARCH_MODES]
    if unknown:
        raise ValueError(f"Unknown search modes: {', '.join(unknown)}")
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")
    workers = workers or settings.NUM_WORKERS
    fan_out_depth = settings.FAN_OUT_DEPTH if fan_out_depth is None else fan_out_depth

    # The benchmark has no display; publications just overwrite this slot.
    reporter = ProgressReporter()
    records: List[SweepRecord] = []
    progress = ProgressPrinter(len(sizes) * len(modes) * runs, progress_label)
    step = 0

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="queensweep") as executor:
        for side_size in sizes:
            reference: Optional[int] = KNOWN_SOLUTION_COUNTS.get(side_size)
            for mode in modes:
                for run_index in range(runs):
                    result = sweep(
                        side_size,
                        reporter,
                        executor if mode == "parallel" else None,
                        fan_out_depth,
                    )
                    if reference is None:
                        reference = result.solutions
                    elif result.solutions != reference:
                        raise AssertionError(
                            f"{mode} search found {result.solutions} solutions for size {side_size}, "
                            f"expected {reference}"
                        )
                    records.append(
                        SweepRecord(
                            side_size=side_size,
                            mode=mode,
                            run=run_index,
                            solutions=result.solutions,
                            seconds=result.elapsed,
                        )
                    )
                    step += 1
                    progress.update(step, f"N={side_size} {mode} run {run_index + 1}: {result.elapsed:.4f}s")

    return records
