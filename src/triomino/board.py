"""Board representation for the playfield."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .pieces import Color, Piece, Position


# Dimensions of the playfield.
WIDTH = 8
HEIGHT = 16

# A row is removed once a single colour fills this many of its cells.
CLEAR_THRESHOLD = 6

Grid = NDArray[np.uint8]
Snapshot = List[List[Optional[Color]]]

# Mapping from ``Color`` to the integer stored in the grid.  ``0`` is reserved
# for empty cells.
COLOR_VALUES: Dict[Color, int] = {c: i + 1 for i, c in enumerate(Color)}
VALUE_COLORS: Dict[int, Color] = {v: c for c, v in COLOR_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def completed_rows(grid: Grid) -> NDArray[np.bool_]:
    """Return a boolean mask of rows where one colour reaches the threshold.

    Empty cells never count towards any colour.
    """

    counts = np.stack(
        [np.count_nonzero(grid == value, axis=1) for value in COLOR_VALUES.values()]
    )
    return np.any(counts >= CLEAR_THRESHOLD, axis=0)


class Board:
    """Grid of locked cells, each holding a colour or nothing."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self._grid: Grid = create_empty_grid()

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[Optional[Color]]]) -> "Board":
        """Build a board from rows of ``Color`` or ``None``.

        Raises:
            ValueError: If ``rows`` does not match the board dimensions.
        """

        if len(rows) != HEIGHT:
            raise ValueError("Grid height mismatch")
        board = cls()
        for y, row in enumerate(rows):
            if len(row) != WIDTH:
                raise ValueError("Grid width mismatch")
            for x, color in enumerate(row):
                board.set_cell(x, y, color)
        return board

    @property
    def cells(self) -> Grid:
        """Raw ``uint8`` grid indexed as ``[row, column]``."""

        return self._grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[Color]:
        """Return the colour at ``(x, y)``.

        Coordinates outside the board read as empty.
        """

        if not self.in_bounds(x, y):
            return None
        return VALUE_COLORS.get(int(self._grid[y, x]))

    def set_cell(self, x: int, y: int, color: Optional[Color]) -> None:
        """Set the colour at ``(x, y)``; writes outside the board are ignored."""

        if self.in_bounds(x, y):
            self._grid[y, x] = 0 if color is None else COLOR_VALUES[Color(color)]

    def is_empty(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` is on the board and unoccupied."""

        return self.in_bounds(x, y) and bool(self._grid[y, x] == 0)

    def is_valid_position(self, piece: Piece, position: Position) -> bool:
        """Return ``True`` if ``piece`` fits on the board with its origin at ``position``.

        Every box has to land inside the board on an empty cell.  Neither the
        piece nor the board is modified.
        """

        px, py = position
        for box in piece.boxes:
            if not self.is_empty(px + box.position.x, py + box.position.y):
                return False
        return True

    def place_piece(self, piece: Piece) -> None:
        """Write the piece's box colours into the grid.

        The placement is not validated; occupied cells are overwritten.
        """

        for (x, y), color in piece.blocks():
            self.set_cell(x, y, color)

    def clear_completed_rows(self) -> int:
        """Remove every row won by a single colour and return how many went.

        Rows are evaluated against the grid as it was before any removal.  The
        surviving rows keep their order and drop down below fresh empty rows.
        """

        complete = completed_rows(self._grid)
        cleared = int(np.count_nonzero(complete))
        if cleared:
            remaining = self._grid[~complete]
            new_rows = np.zeros((cleared, self.width), dtype=self._grid.dtype)
            self._grid[:] = np.vstack((new_rows, remaining))
        return cleared

    def is_game_over(self) -> bool:
        """Return ``True`` if anything occupies the top row."""

        return bool(np.any(self._grid[0] != 0))

    def filled_height(self) -> int:
        """Number of rows from the topmost occupied row to the bottom."""

        occupied = np.flatnonzero(np.any(self._grid != 0, axis=1))
        if occupied.size == 0:
            return 0
        return self.height - int(occupied[0])

    def holes(self) -> int:
        """Count empty cells lying below the top block of their column."""

        filled = self._grid != 0
        # A cell is covered once any cell above it (or itself) in the column is filled.
        covered = np.logical_or.accumulate(filled, axis=0)
        return int(np.count_nonzero(covered & ~filled))

    def clear(self) -> None:
        """Empty every cell in place."""

        self._grid.fill(0)

    def copy(self) -> "Board":
        """Return an independent board with the same cells."""

        board = type(self)()
        board._grid[:] = self._grid
        return board

    def grid(self) -> Snapshot:
        """Return a copy of the grid as rows of ``Color`` or ``None``."""

        return [[VALUE_COLORS.get(int(v)) for v in row] for row in self._grid]


__all__ = [
    "Board",
    "CLEAR_THRESHOLD",
    "COLOR_VALUES",
    "HEIGHT",
    "WIDTH",
    "completed_rows",
    "create_empty_grid",
]
