"""Placement search for the autonomous player.

The AI looks at every rotation (0 to 3 quarter turns) of the current piece
and every column, hard-drops the piece straight down from row 0, and scores
the resulting board with a small hand-tuned heuristic:

    score = height * filled_height + holes * hole_count + lines * rows_cleared

The best placement is then executed one action at a time by the engine using
the :class:`AIPhase` ordering: rotation first, then horizontal alignment,
then the hard drop.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from .board import Board
from .pieces import Piece, Position, rotate_piece


ROTATION_STEPS = 4


@dataclass(frozen=True)
class PlacementWeights:
    """Weights of the board evaluation heuristic."""

    height: float = -5.0
    holes: float = -10.0
    lines: float = 100.0


DEFAULT_WEIGHTS = PlacementWeights()


@dataclass(frozen=True)
class Move:
    """Target column and absolute rotation angle for the current piece."""

    x: int
    rotation: int


@dataclass(frozen=True)
class Placement:
    """A resting position reachable by a straight drop, with its score."""

    steps: int
    column: int
    row: int
    score: float


class AIPhase(str, Enum):
    """Next action needed to bring the current piece onto its target."""

    ALIGN_ROTATION = "align_rotation"
    ALIGN_COLUMN = "align_column"
    DROP = "drop"


def landing_row(board: Board, piece: Piece, column: int) -> Optional[int]:
    """Return the row where ``piece`` comes to rest when dropped at ``column``.

    The piece starts at row 0 and falls while the next row down is free.
    ``None`` is returned when the resting position itself is not valid.
    """

    row = 0
    while board.is_valid_position(piece, Position(column, row + 1)):
        row += 1
    if not board.is_valid_position(piece, Position(column, row)):
        return None
    return row


def evaluate_position(
    board: Board, piece: Piece, weights: PlacementWeights = DEFAULT_WEIGHTS
) -> float:
    """Score ``board`` after locking ``piece`` at its current position.

    The placement is simulated on a scratch copy so ``board`` is not touched.
    """

    scratch = board.copy()
    scratch.place_piece(piece)
    cleared = scratch.clear_completed_rows()
    return (
        weights.height * scratch.filled_height()
        + weights.holes * scratch.holes()
        + weights.lines * cleared
    )


def enumerate_placements(
    board: Board, piece: Piece, weights: PlacementWeights = DEFAULT_WEIGHTS
) -> List[Placement]:
    """Return every valid straight-drop placement of ``piece`` with its score.

    The list is ordered by rotation step first and column second.
    """

    placements: List[Placement] = []
    candidate = piece
    for steps in range(ROTATION_STEPS):
        if steps:
            candidate = rotate_piece(candidate)
        for column in range(board.width):
            row = landing_row(board, candidate, column)
            if row is None:
                continue
            resting = replace(candidate, position=Position(column, row))
            placements.append(
                Placement(
                    steps=steps,
                    column=column,
                    row=row,
                    score=evaluate_position(board, resting, weights),
                )
            )
    return placements


def find_best_move(
    board: Board, piece: Piece, weights: PlacementWeights = DEFAULT_WEIGHTS
) -> Optional[Move]:
    """Return the highest scoring target for ``piece`` or ``None`` if nothing fits.

    Ties keep the first placement found, i.e. the fewest rotations and then
    the leftmost column.  The search has no randomness.
    """

    best: Optional[Placement] = None
    for placement in enumerate_placements(board, piece, weights):
        if best is None or placement.score > best.score:
            best = placement
    if best is None:
        return None
    return Move(x=best.column, rotation=(piece.rotation + 90 * best.steps) % 360)


def ai_phase(piece: Piece, move: Move) -> AIPhase:
    """Return which action brings ``piece`` one step closer to ``move``."""

    if piece.rotation != move.rotation:
        return AIPhase.ALIGN_ROTATION
    if piece.position.x != move.x:
        return AIPhase.ALIGN_COLUMN
    return AIPhase.DROP


__all__ = [
    "AIPhase",
    "DEFAULT_WEIGHTS",
    "Move",
    "Placement",
    "PlacementWeights",
    "ai_phase",
    "enumerate_placements",
    "evaluate_position",
    "find_best_move",
    "landing_row",
]
