"""Command-line interface for the queensweep live sweep and benchmark.

This module wires together configuration loading, the live display of the
unbounded sweep, the timing benchmark and the quick self-test. It isolates
argument parsing and console output from the core modules so that the rest
of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from config_manager import ConfigManager
from queensweep.display import DisplayThread
from queensweep.reporter import ProgressReporter
from queensweep.search import run, sweep
from queensweep.utils import KNOWN_SOLUTION_COUNTS, is_valid_solution

from . import settings
from .benchmark import run_benchmark
from .stats import summarize_records

# Name prefix of the live sweep worker threads
SWEEP_THREAD_PREFIX = "queensweep-sweep"


# ------------- Utils --------------------------------------------------------

def parse_sizes(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize benchmark size inputs into a list of ints.

    Accepts repeated flags (``-s 4 -s 5``), comma-separated lists (``-s 4,6``)
    and inclusive ranges (``-s 4-9``). Returns None when nothing is given so
    callers fall back to the configured sizes.
    """
    if not size_args:
        return None
    sizes: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                if "-" in token:
                    low, high = (int(part) for part in token.split("-", 1))
                    if low > high:
                        raise ValueError
                    sizes.extend(range(low, high + 1))
                else:
                    sizes.append(int(token))
            except ValueError:
                raise ValueError(f"Invalid board size '{token}'") from None
    if any(size < 0 for size in sizes):
        raise ValueError("Board sizes must be >= 0")
    unique = list(dict.fromkeys(sizes))
    return unique or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and update the ``settings`` module in place."""
    config_mgr = ConfigManager(config_path)

    sweep_settings = config_mgr.get_sweep_settings()
    if sweep_settings:
        settings.set_search(
            str(sweep_settings.get("search_mode", settings.SEARCH_MODE)),
            int(sweep_settings.get("workers", settings.NUM_WORKERS)),
            int(sweep_settings.get("fan_out_depth", settings.FAN_OUT_DEPTH)),
        )
        settings.PAUSE_SECONDS = float(sweep_settings.get("pause_seconds", settings.PAUSE_SECONDS))

    benchmark_settings = config_mgr.get_benchmark_settings()
    if benchmark_settings:
        settings.BENCHMARK_SIZES = [int(n) for n in benchmark_settings.get("sizes", settings.BENCHMARK_SIZES)]
        settings.BENCHMARK_RUNS = int(benchmark_settings.get("runs", settings.BENCHMARK_RUNS))
        settings.BENCHMARK_PLOT = bool(benchmark_settings.get("plot", settings.BENCHMARK_PLOT))

    if settings.PAUSE_SECONDS < 0:
        raise ValueError("pause_seconds must be >= 0")
    return config_mgr


# ------------- Pipelines ----------------------------------------------------

def main_sweep(stop_event: Optional[threading.Event] = None) -> None:
    """Run the unbounded sweep with the live display until interrupted.

    Any exit, including Ctrl+C, sets the cancel event so running search
    tasks return and the worker threads are joined before this returns.
    """
    reporter = ProgressReporter()
    display = DisplayThread(reporter)
    display.start()

    cancel_event = threading.Event()
    executor: Optional[ThreadPoolExecutor] = None
    if settings.SEARCH_MODE == "parallel":
        executor = ThreadPoolExecutor(max_workers=settings.NUM_WORKERS, thread_name_prefix=SWEEP_THREAD_PREFIX)
    try:
        run(
            reporter,
            start=settings.START_SIDE_SIZE,
            executor=executor,
            fan_out_depth=settings.FAN_OUT_DEPTH,
            pause_seconds=settings.PAUSE_SECONDS,
            stop_event=stop_event,
            cancel_event=cancel_event,
        )
    finally:
        cancel_event.set()
        reporter.close()
        display.stop(timeout=1.0)
        if executor is not None:
            executor.shutdown(wait=True, cancel_futures=True)


def main_benchmark(sizes: List[int], runs: int, plot: bool = False) -> None:
    """Time both search variants and print the summary table."""
    print(f"Benchmarking sizes {sizes} ({runs} run(s) per mode, {settings.NUM_WORKERS} worker(s))")
    records = run_benchmark(sizes, runs=runs)
    summary = summarize_records(records)
    print()
    print(summary.to_string(index=False, float_format=lambda v: f"{v:.6f}"))

    if plot:
        import matplotlib.pyplot as plt  # local import to avoid heavy import if unused

        from .plots import plot_sweep_timings

        plot_sweep_timings(summary)
        plt.show()


# ------------- Quick self-test ----------------------------------------------

def run_quick_self_test(max_size: int = 8) -> None:
    """Check both search variants against the known counts for sizes 0..max_size.

    Also verifies that the last published board of every size with solutions
    is a complete, non-attacking placement.
    """
    print(f"Running quick self-test (N=0..{max_size}) for sequential and parallel search...")
    with ThreadPoolExecutor(max_workers=4, thread_name_prefix="queensweep-test") as executor:
        for side_size in range(max_size + 1):
            expected = KNOWN_SOLUTION_COUNTS[side_size]
            for mode, pool in (("sequential", None), ("parallel", executor)):
                reporter = ProgressReporter()
                result = sweep(side_size, reporter, pool)
                if result.solutions != expected:
                    raise AssertionError(
                        f"{mode} search found {result.solutions} solutions for N={side_size}, expected {expected}."
                    )
                latest = reporter.latest()
                if expected and latest is not None:
                    board = latest.board
                    if not board.is_complete() or not is_valid_solution(board.positions()):
                        raise AssertionError(f"{mode} search published an invalid board for N={side_size}: {board}.")
            print(f"  N={side_size}: {expected} solution(s) [OK]")
    print("Quick self-test passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Enumerate every N-Queens solution for N = 4, 5, 6, ... with a live display."
    )
    parser.add_argument(
        "--mode",
        choices=settings.SEARCH_MODES,
        help="Search variant: sequential (default) or parallel across a thread pool.",
    )
    parser.add_argument("--workers", "-w", type=int, help="Worker threads for the parallel search.")
    parser.add_argument("--fan-out-depth", type=int, help="Leading columns expanded before dispatching to workers.")
    parser.add_argument("--pause", type=float, help="Seconds to keep each finished size on screen (default: 2).")
    parser.add_argument("--config", help="Path to a JSON configuration file (e.g. config.json).")
    parser.add_argument("--benchmark", action="store_true", help="Time both search variants instead of the live sweep.")
    parser.add_argument(
        "--sizes",
        "-s",
        action="append",
        help="Benchmark board sizes (comma-separated, ranges like 4-9, or multiple flags).",
    )
    parser.add_argument("--runs", type=int, help="Benchmark repetitions per size and mode.")
    parser.add_argument("--plot", action="store_true", help="Show a timing chart after the benchmark.")
    parser.add_argument("--quick-test", action="store_true", help="Run the quick self-test (N=0..8) and exit.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_self_test()
        return

    try:
        if args.config:
            apply_configuration(args.config)
        if args.mode or args.workers is not None or args.fan_out_depth is not None:
            settings.set_search(
                args.mode or settings.SEARCH_MODE,
                settings.NUM_WORKERS if args.workers is None else args.workers,
                settings.FAN_OUT_DEPTH if args.fan_out_depth is None else args.fan_out_depth,
            )
        if args.pause is not None:
            if args.pause < 0:
                raise ValueError("--pause must be >= 0")
            settings.PAUSE_SECONDS = args.pause
        sizes = parse_sizes(args.sizes) or settings.BENCHMARK_SIZES
        runs = settings.BENCHMARK_RUNS if args.runs is None else args.runs
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        if args.benchmark:
            main_benchmark(sizes, runs, plot=args.plot or settings.BENCHMARK_PLOT)
        else:
            main_sweep()
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
