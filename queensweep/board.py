"""Immutable board states for the exhaustive N-Queens sweep.

Representation
--------------
A ``Board`` holds a sorted tuple of ``Queen`` coordinates plus the board side
length. Queens are placed column by column (``x`` is the column, ``y`` the
row), so the search never needs to check column conflicts explicitly; the
validity check still tracks columns for boards built by other means.

Diagonal ids
------------
- ``se_diagonal = x + y`` is constant along a falling-right diagonal.
- ``sw_diagonal = side_size + x - y - 1`` is constant along a rising-right
  diagonal.
Both map into ``[0, 2*side_size - 2]``, which is what the boolean trackers in
``queens_non_attacking`` are sized to.

Contract
--------
A ``Board`` instance always satisfies the placement invariant: every queen is
inside the board and no two queens attack each other. Constructing one that
does not raises ``ValueError``.
"""

from __future__ import annotations

from concurrent.futures import Executor, as_completed
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True, order=True)
class Queen:
    """A queen at column ``x`` and row ``y``."""

    x: int
    y: int

    @property
    def row(self) -> int:
        """Row index (``y``)."""
        return self.y

    @property
    def col(self) -> int:
        """Column index (``x``)."""
        return self.x

    def sw_diagonal(self, side_size: int) -> int:
        """Id of the rising-right diagonal through this cell.

        ``side_size + x - y - 1``: moving one column right and one row down
        keeps the id, and ids span ``[0, 2*side_size - 2]``.
        """
        return side_size + self.x - self.y - 1

    def se_diagonal(self, side_size: int) -> int:
        """Id of the falling-right diagonal through this cell.

        ``x + y``: moving one column right and one row up keeps the id, and
        ids span ``[0, 2*side_size - 2]``. ``side_size`` is accepted for
        symmetry with ``sw_diagonal``.
        """
        return self.x + self.y


def _check_in_range(queen: Queen, side_size: int) -> None:
    if not (0 <= queen.x < side_size and 0 <= queen.y < side_size):
        raise ValueError(
            f"Queen ({queen.x}, {queen.y}) is outside a board of side {side_size}"
        )


def queens_non_attacking(queens: Sequence[Queen], side_size: int) -> bool:
    """Return True if no two of ``queens`` share a row, column or diagonal.

    Uses four boolean trackers sized to ``side_size`` (rows, columns) and
    ``2*side_size - 1`` (each diagonal family), stopping at the first
    duplicate. Queens outside ``[0, side_size)`` raise ``ValueError``.
    """
    occupied_rows = [False] * side_size
    occupied_cols = [False] * side_size
    occupied_sw = [False] * max(0, 2 * side_size - 1)
    occupied_se = [False] * max(0, 2 * side_size - 1)

    for queen in queens:
        _check_in_range(queen, side_size)
        row = queen.row
        col = queen.col
        sw = queen.sw_diagonal(side_size)
        se = queen.se_diagonal(side_size)

        if occupied_rows[row]:
            return False
        occupied_rows[row] = True
        if occupied_cols[col]:
            return False
        occupied_cols[col] = True
        if occupied_sw[sw]:
            return False
        occupied_sw[sw] = True
        if occupied_se[se]:
            return False
        occupied_se[se] = True

    return True


@dataclass(frozen=True)
class Board:
    """A partial or complete placement where no two queens attack each other.

    Boards are never mutated: ``try_place`` and the ``children_in_column``
    helpers always return new instances that share nothing mutable with the
    parent.

    Raises
    ------
    ValueError
        If ``side_size`` is negative, a queen lies outside the board, or two
        queens attack each other.
    """

    queens: Tuple[Queen, ...]
    side_size: int

    def __post_init__(self) -> None:
        if self.side_size < 0:
            raise ValueError(f"side_size must be >= 0, got {self.side_size}")
        queens = tuple(sorted(self.queens))
        if not queens_non_attacking(queens, self.side_size):
            raise ValueError(f"Queens {list(queens)} attack each other")
        object.__setattr__(self, "queens", queens)

    @classmethod
    def _from_checked(cls, queens: Tuple[Queen, ...], side_size: int) -> "Board":
        # Caller has already sorted and validated ``queens``.
        board = object.__new__(cls)
        object.__setattr__(board, "queens", queens)
        object.__setattr__(board, "side_size", side_size)
        return board

    @classmethod
    def new(cls, side_size: int) -> "Board":
        """Return an empty board of the given side length."""
        return cls((), side_size)

    @classmethod
    def from_positions(cls, positions: Sequence[int]) -> "Board":
        """Build a board from ``positions[col] = row`` (``-1`` leaves a column empty).

        Raises ``ValueError`` when a row is out of range or two queens attack
        each other.
        """
        board = cls.new(len(positions))
        for col, row in enumerate(positions):
            if row == -1:
                continue
            child = board.try_place(Queen(col, row))
            if child is None:
                raise ValueError(f"Queen at column {col}, row {row} attacks an earlier queen")
            board = child
        return board

    def is_complete(self) -> bool:
        """True once every column holds a queen, i.e. the board is a solution."""
        return len(self.queens) == self.side_size

    def positions(self) -> List[int]:
        """Return the ``board[col] = row`` encoding, ``-1`` for empty columns."""
        rows = [-1] * self.side_size
        for queen in self.queens:
            rows[queen.col] = queen.row
        return rows

    def children_in_column(self, col: int) -> Iterator["Board"]:
        """Yield every valid board with one more queen in ``col``, row-ascending."""
        for row in range(self.side_size):
            child = self.try_place(Queen(col, row))
            if child is not None:
                yield child

    def children_in_column_concurrent(self, col: int, executor: Executor) -> Iterator["Board"]:
        """Same filter as ``children_in_column`` but evaluated on ``executor``.

        All ``side_size`` candidate rows are submitted up front; children are
        yielded in completion order, so no row ordering is guaranteed.
        """
        futures = [executor.submit(self.try_place, Queen(col, row)) for row in range(self.side_size)]
        for future in as_completed(futures):
            child = future.result()
            if child is not None:
                yield child

    def try_place(self, queen: Queen) -> Optional["Board"]:
        """Return a new board with ``queen`` added, or ``None`` if it would attack.

        Coordinates outside ``[0, side_size)`` are a caller bug and raise
        ``ValueError``. The queen list is checked before any board is built.
        """
        _check_in_range(queen, self.side_size)
        if queen in self.queens:
            return None

        queens = tuple(sorted(self.queens + (queen,)))
        if not queens_non_attacking(queens, self.side_size):
            return None
        return Board._from_checked(queens, self.side_size)

    def is_valid(self) -> bool:
        """Return True if no two queens share a row, column or diagonal."""
        return queens_non_attacking(self.queens, self.side_size)
