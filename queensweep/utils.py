"""Independent verification helpers for the queensweep project.

These deliberately avoid the ``Board`` trackers so they can cross-check the
search results. Boards are taken in the ``board[col] = row`` encoding
returned by ``Board.positions``.
"""

from __future__ import annotations

from typing import Dict, Sequence

# Number of N-Queens solutions (symmetric ones counted separately) per side size.
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    0: 1,
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
}


def attacking_pairs(board: Sequence[int]) -> int:
    """Count queen pairs sharing a row or a diagonal in O(N^2).

    Empty columns (``-1``) are ignored.
    """
    placed = [(col, row) for col, row in enumerate(board) if row != -1]
    count = 0
    for i in range(len(placed)):
        col_i, row_i = placed[i]
        for j in range(i + 1, len(placed)):
            col_j, row_j = placed[j]
            if row_i == row_j or abs(row_i - row_j) == abs(col_i - col_j):
                count += 1
    return count


def is_valid_solution(board: Sequence[int]) -> bool:
    """Return True if ``board`` is a complete, non-attacking placement.

    Every column must hold a queen on a row in ``[0, N)``. The empty board is
    the trivial solution for N = 0.
    """
    n = len(board)
    for row in board:
        if not isinstance(row, int) or row < 0 or row >= n:
            return False
    return attacking_pairs(board) == 0
