"""Terminal rendering of the latest reported board.

The display runs on its own daemon thread, waits on the reporter for a newer
snapshot, clears the screen with ANSI escapes and prints the board. Bursts of
publications between two renders collapse into a single frame.
"""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

from .board import Board, Queen
from .reporter import LatestResult, ProgressReporter

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
QUEEN_CELL = "QQ"
EMPTY_CELL = "__"


def format_board(board: Board) -> str:
    """Return one text line per row, two characters per cell."""
    occupied = set(board.queens)
    lines = []
    for y in range(board.side_size):
        lines.append(
            "".join(QUEEN_CELL if Queen(x, y) in occupied else EMPTY_CELL for x in range(board.side_size))
        )
    return "\n".join(lines)


def format_duration(seconds: float) -> str:
    """Human-readable duration with a unit suited to its magnitude."""
    if seconds >= 1.0:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds * 1e6:.3f}µs"


def render_result(result: LatestResult) -> str:
    board = result.board
    parts = [
        CLEAR_SCREEN,
        f"complete board #{result.sequence_number} of size {board.side_size} found\n",
        format_board(board),
        "\n\n",
    ]
    if result.elapsed is not None:
        parts.append(
            f"finding all valid boards of size {board.side_size} took {format_duration(result.elapsed)}\n"
        )
    parts.append("Press Ctrl+C to exit\n")
    return "".join(parts)


class DisplayThread(threading.Thread):
    """Consumer thread rendering the newest snapshot of a ``ProgressReporter``.

    Parameters
    ----------
    reporter : ProgressReporter
        Slot to watch.
    stream : TextIO, optional
        Output stream, ``sys.stdout`` by default.
    poll_interval : float
        Upper bound on a single wait, so ``stop()`` is honored promptly even
        when nothing gets published.
    """

    def __init__(self, reporter: ProgressReporter, stream: Optional[TextIO] = None, poll_interval: float = 0.25):
        super().__init__(name="queensweep-display", daemon=True)
        self.reporter = reporter
        self.stream = stream if stream is not None else sys.stdout
        self.poll_interval = poll_interval
        self.frames_rendered = 0
        self.last_version = 0
        self._stop_requested = threading.Event()

    def run(self) -> None:
        while not self._stop_requested.is_set():
            result = self.reporter.wait_for_next(self.last_version, timeout=self.poll_interval)
            if result is None:
                if self.reporter.closed:
                    return
                continue
            self.last_version = result.version
            self.stream.write(render_result(result))
            self.stream.flush()
            self.frames_rendered += 1

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_requested.set()
        self.join(timeout)
