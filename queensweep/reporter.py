"""Single-slot "latest result" mailbox between the search and the display.

Writers (the search engine, possibly from several worker threads) publish
each complete board with a non-blocking lock attempt and simply skip the
publication when the lock is busy, so rendering can never slow the search
down. The reader waits on a condition variable until the slot version moves
past the one it last rendered and always receives the newest snapshot;
superseded boards are discarded, never queued.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .board import Board


@dataclass(frozen=True)
class LatestResult:
    """Snapshot of the slot.

    ``version`` increases by one on every change of the slot (new board or
    elapsed time attached) for the lifetime of the reporter; consumers use it
    to detect freshness. ``sequence_number`` is the solution counter value the
    board was published with.
    """

    board: Board
    sequence_number: int
    elapsed: Optional[float]
    version: int


class ProgressReporter:
    """Overwrite-on-publish mailbox guarded by a lock and a condition variable."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._changed = threading.Condition(self._lock)
        self._latest: Optional[LatestResult] = None
        self._version = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, board: Board, sequence_number: int) -> bool:
        """Store ``board`` as the latest result unless the lock is busy.

        Returns False when the publication was skipped because of contention.
        """
        if not self._lock.acquire(blocking=False):
            return False
        try:
            self._version += 1
            self._latest = LatestResult(board, sequence_number, None, self._version)
            self._changed.notify_all()
        finally:
            self._lock.release()
        return True

    def publish_elapsed(self, elapsed: float, side_size: Optional[int] = None) -> bool:
        """Attach the sweep duration to the latest board.

        Nothing is attached when no board was published yet or, if
        ``side_size`` is given, when the latest board belongs to another size
        (a sweep that found no solutions leaves the previous board in place).
        """
        with self._changed:
            latest = self._latest
            if latest is None:
                return False
            if side_size is not None and latest.board.side_size != side_size:
                return False
            self._version += 1
            self._latest = LatestResult(latest.board, latest.sequence_number, elapsed, self._version)
            self._changed.notify_all()
        return True

    def latest(self) -> Optional[LatestResult]:
        with self._lock:
            return self._latest

    def wait_for_next(self, last_version: int = 0, timeout: Optional[float] = None) -> Optional[LatestResult]:
        """Block until the slot differs from ``last_version`` and return it.

        Returns None if ``timeout`` expires first or the reporter is closed.
        """
        with self._changed:
            ready = self._changed.wait_for(
                lambda: self._closed or (self._latest is not None and self._version != last_version),
                timeout=timeout,
            )
            if not ready or self._closed:
                return None
            return self._latest

    def close(self) -> None:
        """Wake every waiting consumer; later waits return None immediately."""
        with self._changed:
            self._closed = True
            self._changed.notify_all()
