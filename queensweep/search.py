"""Exhaustive backtracking search over increasing board sizes.

Entry points
------------
- search(board, next_column, counter, reporter, cancel_event=None): recursive
  depth-first enumeration, one column per level, rows tried top-to-bottom.
  Discovery order is deterministic.
- parallel_search(board, next_column, counter, reporter, executor, fan_out_depth=1, cancel_event=None):
  expands the first ``fan_out_depth`` columns in the calling thread, runs one
  ``search`` task per frontier board on the executor and joins them all.
  Discovery order is undefined; the final count matches ``search``.
- sweep(side_size, reporter, ...): times the enumeration of one size and
  attaches the elapsed time to the reporter.
- sweep_sizes(reporter, start=4, ...): yields one ``SweepResult`` per size,
  without bound.
- run(reporter, ...): the top-level driver; pauses between sizes and stops
  when the optional stop event is set.

Every complete board increments a shared ``SolutionCounter`` and is offered
to the reporter with the new counter value. Publication is best effort; the
counter is exact regardless of how many publications the reporter skipped.

Cancellation
------------
``cancel_event`` aborts a sweep in flight: every recursive call checks it
before expanding, so worker tasks return promptly once it is set. A
cancelled sweep is flagged in its ``SweepResult`` and its partial count is
not reported as a timing.
"""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import CancelledError, Executor
from dataclasses import dataclass
from time import perf_counter
from typing import Iterator, List, Optional, Tuple

from .board import Board
from .reporter import ProgressReporter


class SolutionCounter:
    """Shared completion counter; increments never get lost between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        """Add one and return the new value, atomically with respect to other threads."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass(frozen=True)
class SweepResult:
    """Outcome of enumerating one board size.

    ``solutions`` is exact unless ``cancelled`` is True, in which case it
    counts only the boards found before the cancel event was set.
    ``elapsed`` is wall-clock seconds measured with ``perf_counter``.
    """

    side_size: int
    solutions: int
    elapsed: float
    cancelled: bool = False


def search(
    board: Board,
    next_column: int,
    counter: SolutionCounter,
    reporter: ProgressReporter,
    cancel_event: Optional[threading.Event] = None,
) -> None:
    """Enumerate every completion of ``board`` starting at ``next_column``.

    Returns early, without visiting further boards, once ``cancel_event`` is set.
    """
    if cancel_event is not None and cancel_event.is_set():
        return
    if board.is_complete():
        reporter.publish(board, counter.increment())
        return

    for child in board.children_in_column(next_column):
        search(child, next_column + 1, counter, reporter, cancel_event)


def _frontier(
    board: Board,
    next_column: int,
    depth: int,
    executor: Executor,
) -> Iterator[Tuple[Board, int]]:
    if depth <= 0 or board.is_complete():
        yield board, next_column
        return
    for child in board.children_in_column_concurrent(next_column, executor):
        yield from _frontier(child, next_column + 1, depth - 1, executor)


def parallel_search(
    board: Board,
    next_column: int,
    counter: SolutionCounter,
    reporter: ProgressReporter,
    executor: Executor,
    fan_out_depth: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> None:
    """Fan the first ``fan_out_depth`` columns out across ``executor``.

    Tasks running on the pool never submit further work, so a bounded pool
    cannot starve itself while this call waits on the join. Every task
    watches ``cancel_event`` and stops once it is set.
    """
    frontier = list(_frontier(board, next_column, fan_out_depth, executor))
    futures = [
        executor.submit(search, child, column, counter, reporter, cancel_event)
        for child, column in frontier
    ]
    for future in futures:
        try:
            future.result()
        except CancelledError:
            # Pending tasks are dropped when the pool shuts down after a cancel.
            if cancel_event is None or not cancel_event.is_set():
                raise


def sweep(
    side_size: int,
    reporter: ProgressReporter,
    executor: Optional[Executor] = None,
    fan_out_depth: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> SweepResult:
    """Enumerate all solutions of one size and publish the elapsed time.

    Uses ``parallel_search`` when an executor is given, ``search`` otherwise.
    When ``cancel_event`` ends the enumeration early, no elapsed time is
    published and the result is flagged as cancelled.
    """
    board = Board.new(side_size)
    counter = SolutionCounter()
    start = perf_counter()
    if executor is None:
        search(board, 0, counter, reporter, cancel_event)
    else:
        parallel_search(board, 0, counter, reporter, executor, fan_out_depth, cancel_event)
    elapsed = perf_counter() - start
    if cancel_event is not None and cancel_event.is_set():
        return SweepResult(side_size, counter.value, elapsed, cancelled=True)
    reporter.publish_elapsed(elapsed, side_size)
    return SweepResult(side_size, counter.value, elapsed)


def sweep_sizes(
    reporter: ProgressReporter,
    start: int = 4,
    executor: Optional[Executor] = None,
    fan_out_depth: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> Iterator[SweepResult]:
    """Yield a ``SweepResult`` for ``start``, ``start + 1``, ... forever."""
    for side_size in itertools.count(start):
        yield sweep(side_size, reporter, executor, fan_out_depth, cancel_event)


def run(
    reporter: ProgressReporter,
    start: int = 4,
    executor: Optional[Executor] = None,
    fan_out_depth: int = 1,
    pause_seconds: float = 2.0,
    stop_event: Optional[threading.Event] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[SweepResult]:
    """Sweep increasing sizes until ``stop_event`` or ``cancel_event`` is set.

    After each size the driver pauses ``pause_seconds`` so the last board and
    its timing stay on screen. ``stop_event`` is only checked between sizes
    and lets the current size finish; ``cancel_event`` also aborts the size
    in flight. Returns the results of the sizes completed so far; a
    cancelled size is not included.
    """
    stop_event = stop_event or threading.Event()
    completed: List[SweepResult] = []
    for result in sweep_sizes(reporter, start, executor, fan_out_depth, cancel_event):
        if result.cancelled:
            break
        completed.append(result)
        if stop_event.wait(pause_seconds):
            break
    return completed
