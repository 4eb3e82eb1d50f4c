"""Tests for the sequential and parallel searches and the sweep driver."""

from pathlib import Path
import itertools
import sys
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensweep.board import Board
from queensweep.reporter import ProgressReporter
from queensweep.search import SolutionCounter, parallel_search, run, search, sweep, sweep_sizes
from queensweep.utils import KNOWN_SOLUTION_COUNTS, is_valid_solution


class RecordingReporter(ProgressReporter):
    """Reporter that also keeps every offered board, in offer order."""

    def __init__(self):
        super().__init__()
        self._record_lock = threading.Lock()
        self.offered = []

    def publish(self, board, sequence_number):
        with self._record_lock:
            self.offered.append((board, sequence_number))
        return super().publish(board, sequence_number)


def _sequential(side_size):
    reporter = RecordingReporter()
    counter = SolutionCounter()
    search(Board.new(side_size), 0, counter, reporter)
    return counter.value, reporter.offered


def _parallel(side_size, workers=4, fan_out_depth=1):
    reporter = RecordingReporter()
    counter = SolutionCounter()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        parallel_search(Board.new(side_size), 0, counter, reporter, executor, fan_out_depth)
    return counter.value, reporter.offered


class SolutionCounterTests(unittest.TestCase):
    def test_concurrent_increments_are_not_lost(self):
        counter = SolutionCounter()

        def bump():
            for _ in range(1000):
                counter.increment()

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(counter.value, 8000)


class SequentialSearchTests(unittest.TestCase):
    def test_known_counts(self):
        for side_size in range(0, 9):
            with self.subTest(side_size=side_size):
                count, offered = _sequential(side_size)
                self.assertEqual(count, KNOWN_SOLUTION_COUNTS[side_size])
                self.assertEqual(len(offered), count)

    def test_every_board_is_a_solution(self):
        _, offered = _sequential(6)
        for board, _ in offered:
            self.assertTrue(board.is_complete())
            self.assertEqual(len(board.queens), 6)
            self.assertTrue(is_valid_solution(board.positions()))

    def test_sequence_numbers_follow_discovery(self):
        _, offered = _sequential(6)
        self.assertEqual([seq for _, seq in offered], [1, 2, 3, 4])

    def test_deterministic_order(self):
        _, first = _sequential(7)
        _, second = _sequential(7)
        self.assertEqual(first, second)

    def test_first_solution_is_lexicographic(self):
        _, offered = _sequential(8)
        self.assertEqual(offered[0][0].positions(), [0, 4, 7, 5, 2, 6, 1, 3])

    def test_zero_size_yields_single_empty_board(self):
        count, offered = _sequential(0)
        self.assertEqual(count, 1)
        self.assertEqual(offered[0][0].queens, ())


class ParallelSearchTests(unittest.TestCase):
    def test_counts_match_sequential(self):
        for side_size in range(0, 9):
            with self.subTest(side_size=side_size):
                count, offered = _parallel(side_size)
                self.assertEqual(count, KNOWN_SOLUTION_COUNTS[side_size])
                self.assertEqual(len(offered), count)

    def test_same_solutions_as_sequential(self):
        _, sequential = _sequential(7)
        for depth in (0, 1, 2, 3):
            with self.subTest(fan_out_depth=depth):
                _, parallel = _parallel(7, workers=3, fan_out_depth=depth)
                self.assertEqual(
                    sorted(board.positions() for board, _ in parallel),
                    sorted(board.positions() for board, _ in sequential),
                )

    def test_sequence_numbers_unique(self):
        _, offered = _parallel(8, workers=4, fan_out_depth=2)
        self.assertEqual(sorted(seq for _, seq in offered), list(range(1, 93)))

    def test_single_worker_does_not_deadlock(self):
        count, _ = _parallel(8, workers=1, fan_out_depth=2)
        self.assertEqual(count, 92)

    def test_fan_out_deeper_than_board(self):
        count, _ = _parallel(4, workers=2, fan_out_depth=10)
        self.assertEqual(count, 2)


class SweepDriverTests(unittest.TestCase):
    def test_sweep_reports_count_and_elapsed(self):
        reporter = ProgressReporter()
        result = sweep(6, reporter)
        self.assertEqual(result.side_size, 6)
        self.assertEqual(result.solutions, 4)
        self.assertGreaterEqual(result.elapsed, 0.0)
        latest = reporter.latest()
        self.assertEqual(latest.board.side_size, 6)
        self.assertEqual(latest.elapsed, result.elapsed)

    def test_parallel_sweep(self):
        reporter = ProgressReporter()
        with ThreadPoolExecutor(max_workers=2) as executor:
            result = sweep(8, reporter, executor, fan_out_depth=2)
        self.assertEqual(result.solutions, 92)

    def test_zero_solution_size_keeps_previous_board(self):
        reporter = ProgressReporter()
        sweep(1, reporter)
        before = reporter.latest()
        result = sweep(2, reporter)
        self.assertEqual(result.solutions, 0)
        self.assertEqual(reporter.latest(), before)
        self.assertEqual(reporter.latest().board.side_size, 1)

    def test_sweep_sizes_increase_from_start(self):
        reporter = ProgressReporter()
        results = list(itertools.islice(sweep_sizes(reporter, start=1), 7))
        self.assertEqual([r.side_size for r in results], list(range(1, 8)))
        self.assertEqual([r.solutions for r in results], [1, 0, 0, 2, 10, 4, 40])

    def test_run_stops_between_sizes(self):
        reporter = ProgressReporter()
        stop_event = threading.Event()
        stop_event.set()
        results = run(reporter, start=4, pause_seconds=0.0, stop_event=stop_event)
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].solutions, 2)

    def test_run_stopped_from_another_thread(self):
        reporter = ProgressReporter()
        stop_event = threading.Event()
        results = []

        def drive():
            results.extend(run(reporter, start=1, pause_seconds=5.0, stop_event=stop_event))

        driver = threading.Thread(target=drive)
        driver.start()
        stop_event.set()
        driver.join(timeout=10.0)
        self.assertFalse(driver.is_alive())
        self.assertGreaterEqual(len(results), 1)
        self.assertEqual(results[0].side_size, 1)


class ContendedReporterTests(unittest.TestCase):
    """Searches run to completion while the reporter lock is held elsewhere."""

    def _hold_lock(self, reporter):
        reporter._lock.acquire()
        self.addCleanup(reporter._lock.release)

    def test_sequential_search_not_blocked(self):
        reporter = ProgressReporter()
        counter = SolutionCounter()
        self._hold_lock(reporter)
        search(Board.new(8), 0, counter, reporter)
        self.assertEqual(counter.value, 92)
        self.assertIsNone(reporter._latest)

    def test_parallel_search_not_blocked(self):
        reporter = ProgressReporter()
        counter = SolutionCounter()
        self._hold_lock(reporter)
        with ThreadPoolExecutor(max_workers=3) as executor:
            parallel_search(Board.new(8), 0, counter, reporter, executor, fan_out_depth=2)
        self.assertEqual(counter.value, 92)
        self.assertIsNone(reporter._latest)

    def test_publication_resumes_after_release(self):
        reporter = ProgressReporter()
        reporter._lock.acquire()
        search(Board.new(6), 0, SolutionCounter(), reporter)
        reporter._lock.release()
        self.assertIsNone(reporter.latest())
        sweep(6, reporter)
        latest = reporter.latest()
        self.assertEqual(latest.board.side_size, 6)
        self.assertIsNotNone(latest.elapsed)


class CancellationTests(unittest.TestCase):
    def test_cancelled_search_visits_nothing(self):
        cancel_event = threading.Event()
        cancel_event.set()
        reporter = RecordingReporter()
        counter = SolutionCounter()
        search(Board.new(6), 0, counter, reporter, cancel_event)
        self.assertEqual(counter.value, 0)
        self.assertEqual(reporter.offered, [])

    def test_cancel_during_parallel_sweep_stops_workers(self):
        cancel_event = threading.Event()

        class CancellingReporter(ProgressReporter):
            def publish(self, board, sequence_number):
                cancel_event.set()
                return super().publish(board, sequence_number)

        reporter = CancellingReporter()
        with ThreadPoolExecutor(max_workers=2) as executor:
            result = sweep(12, reporter, executor, cancel_event=cancel_event)
        self.assertTrue(result.cancelled)
        self.assertLess(result.solutions, KNOWN_SOLUTION_COUNTS[12])
        self.assertIsNone(reporter.latest().elapsed)

    def test_cancelled_size_not_reported_by_run(self):
        cancel_event = threading.Event()
        cancel_event.set()
        results = run(ProgressReporter(), start=4, pause_seconds=0.0, cancel_event=cancel_event)
        self.assertEqual(results, [])


if __name__ == "__main__":
    unittest.main()
