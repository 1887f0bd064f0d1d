"""Game state enums and the statistics container."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .utils import level_for_lines, score_for_lines


class GameState(str, Enum):
    """Lifecycle of a game session."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameMode(str, Enum):
    """Who controls the falling piece."""

    HUMAN = "human"
    AI = "ai"


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"


# Unit offsets ``(dx, dy)`` for each direction.
DIRECTION_OFFSETS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


@dataclass
class GameStats:
    """Score, level and cumulative cleared rows of a session."""

    score: int = 0
    level: int = 1
    lines_cleared: int = 0

    def record_clear(self, lines: int) -> int:
        """Apply the scoring step for ``lines`` rows cleared by one lock.

        Points are awarded at the level in force before the clear, then the
        level is recomputed from the new total.  Returns the points awarded.
        """

        points = score_for_lines(lines, self.level)
        self.score += points
        self.lines_cleared += lines
        self.level = level_for_lines(self.lines_cleared)
        return points

    def reset(self) -> None:
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
