"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, Snapshot
from .pieces import Piece


# Points for clearing 0, 1, 2, 3 and 4+ rows at once, before the level multiplier.
SCORE_TABLE = (0, 100, 300, 500, 800)
LINES_PER_LEVEL = 10

BASE_DROP_MS = 1000.0
DROP_STEP_MS = 50.0
MIN_DROP_MS = 100.0


def score_for_lines(lines: int, level: int) -> int:
    """Return the points awarded for clearing ``lines`` rows at ``level``.

    Clears of more than four rows pay out like four.
    """

    if lines <= 0:
        return 0
    return SCORE_TABLE[min(lines, len(SCORE_TABLE) - 1)] * level


def level_for_lines(total_lines: int) -> int:
    """Return the level reached after ``total_lines`` cleared rows."""

    return total_lines // LINES_PER_LEVEL + 1


def drop_interval_ms(level: int) -> float:
    """Return the gravity interval in milliseconds for ``level``.

    The interval shrinks by a fixed step per level and never drops below
    ``MIN_DROP_MS``.
    """

    return max(MIN_DROP_MS, BASE_DROP_MS - (level - 1) * DROP_STEP_MS)


def render_grid(board: Board, active: Optional[Piece] = None) -> Snapshot:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Boxes of the active piece that fall outside the board are
    skipped.
    """

    grid = board.grid()
    if active is not None:
        for (x, y), color in active.blocks():
            if board.in_bounds(x, y):
                grid[y][x] = color
    return grid


def grid_to_text(grid: Snapshot) -> List[str]:
    """Return one string per row using the first letter of each colour."""

    return [
        "".join(cell.value[0].upper() if cell is not None else "." for cell in row)
        for row in grid
    ]
