"""Game engine: state machine, gravity, player actions, scoring and AI control.

The engine is driven by an external loop that calls :meth:`GameEngine.update`
with the elapsed time in milliseconds and forwards player input to the action
methods.  Renderers read :meth:`GameEngine.grid`, :attr:`GameEngine.current_piece`,
:attr:`GameEngine.next_piece`, :attr:`GameEngine.state` and
:attr:`GameEngine.stats`.  The grid and the stats are returned as copies so
renderers cannot alter engine state through them.
"""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Optional, Union

from .ai import DEFAULT_WEIGHTS, AIPhase, Move, PlacementWeights, ai_phase, find_best_move
from .board import Board, Snapshot
from .game_state import DIRECTION_OFFSETS, Direction, GameMode, GameState, GameStats
from .pieces import Piece, PieceGenerator, Position
from .utils import drop_interval_ms


LOGGER = logging.getLogger(__name__)

# Milliseconds between two AI actions, independent of gravity.
AI_INTERVAL_MS = 200.0


class GameEngine:
    """Owns the board, the current and next piece and the game statistics."""

    def __init__(
        self,
        *,
        generator: Optional[PieceGenerator] = None,
        board: Optional[Board] = None,
        weights: PlacementWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self.generator = generator or PieceGenerator()
        self._board = board or Board()
        self.weights = weights
        self._state = GameState.IDLE
        self._mode = GameMode.HUMAN
        self._stats = GameStats()
        self._current: Optional[Piece] = None
        self._next: Piece = self.generator.create_random()
        self.drop_timer = 0.0
        self.drop_interval = drop_interval_ms(1)
        self.ai_timer = 0.0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_piece(self) -> Optional[Piece]:
        return self._current

    @property
    def next_piece(self) -> Piece:
        return self._next

    @property
    def stats(self) -> GameStats:
        """Return a snapshot of the score, level and cleared rows."""

        return replace(self._stats)

    def grid(self) -> Snapshot:
        """Return a copy of the locked cells."""

        return self._board.grid()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _reset_timers(self) -> None:
        self.drop_timer = 0.0
        self.ai_timer = 0.0
        self.drop_interval = drop_interval_ms(1)

    def start_game(self, mode: Union[GameMode, str]) -> None:
        """Start a fresh game in ``mode``.

        Unlike player input, the mode comes from the embedding code, so an
        unknown value is a programmer error rather than a move to ignore.

        Raises:
            ValueError: If ``mode`` is not a known :class:`GameMode`.  The
                engine state is left unchanged.
        """

        self._mode = GameMode(mode)
        self._board.clear()
        self._stats.reset()
        self._reset_timers()
        self._state = GameState.PLAYING
        LOGGER.info("Game started in %s mode", self._mode.value)
        self._spawn()

    def pause_game(self) -> None:
        """Toggle between playing and paused; ignored otherwise."""

        if self._state is GameState.PLAYING:
            self._state = GameState.PAUSED
            LOGGER.info("Paused")
        elif self._state is GameState.PAUSED:
            self._state = GameState.PLAYING
            LOGGER.info("Resumed")

    def reset_game(self) -> None:
        """Return to the idle state with an empty board and a new next piece."""

        self._state = GameState.IDLE
        self._current = None
        self._board.clear()
        self._stats.reset()
        self._next = self.generator.create_random()
        self._reset_timers()
        LOGGER.info("Game reset")

    def _game_over(self) -> None:
        self._state = GameState.GAME_OVER
        self._current = None
        LOGGER.info(
            "Game over. Score: %d, level: %d, lines: %d",
            self._stats.score,
            self._stats.level,
            self._stats.lines_cleared,
        )

    def _spawn(self) -> None:
        """Promote the next piece to current; end the game if it cannot enter."""

        piece = self._next
        self._next = self.generator.create_random()
        self._current = piece
        if self._mode is GameMode.AI:
            self.ai_timer = 0.0
        if not self._board.is_valid_position(piece, piece.position):
            LOGGER.debug("Spawn of %s blocked at %s", piece.id, piece.position)
            self._game_over()

    def _lock(self) -> None:
        """Commit the current piece, clear rows, score and spawn the next one."""

        piece = self._current
        if piece is None:
            return
        self._board.place_piece(piece)
        cleared = self._board.clear_completed_rows()
        LOGGER.debug("Locked %s at %s", piece.id, piece.position)
        if cleared:
            points = self._stats.record_clear(cleared)
            self.drop_interval = drop_interval_ms(self._stats.level)
            LOGGER.debug(
                "Cleared %d row(s) for %d points. Score: %d",
                cleared,
                points,
                self._stats.score,
            )
        if self._board.is_game_over():
            self._game_over()
        else:
            self._spawn()

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------
    def update(self, delta_ms: float) -> None:
        """Advance gravity and, in AI mode, the AI by ``delta_ms`` milliseconds."""

        if self._state is not GameState.PLAYING:
            return

        self.drop_timer += delta_ms
        if self.drop_timer >= self.drop_interval:
            self.drop_timer = 0.0
            if not self.move_block(Direction.DOWN):
                self._lock()

        if (
            self._mode is GameMode.AI
            and self._current is not None
            and self._state is GameState.PLAYING
        ):
            self.ai_timer += delta_ms
            if self.ai_timer >= AI_INTERVAL_MS:
                self.ai_timer = 0.0
                self.step_ai()

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def _can_act(self) -> bool:
        return self._current is not None and self._state is GameState.PLAYING

    def move_block(self, direction: Union[Direction, str]) -> bool:
        """Move the current piece one cell; return ``False`` if it cannot move."""

        if not self._can_act():
            return False
        try:
            dx, dy = DIRECTION_OFFSETS[Direction(direction)]
        except ValueError:
            return False
        x, y = self._current.position
        if self._board.is_valid_position(self._current, Position(x + dx, y + dy)):
            self._current.move(dx, dy)
            return True
        return False

    def rotate_block(self) -> bool:
        """Rotate the current piece clockwise in place, without wall kicks."""

        if not self._can_act():
            return False
        rotated = self.generator.rotate(self._current)
        if self._board.is_valid_position(rotated, self._current.position):
            self._current = rotated
            return True
        return False

    def drop_block(self) -> bool:
        """Hard drop the current piece and lock it."""

        if not self._can_act():
            return False
        while self.move_block(Direction.DOWN):
            pass
        self._lock()
        return True

    # ------------------------------------------------------------------
    # AI
    # ------------------------------------------------------------------
    def find_best_move(self) -> Optional[Move]:
        """Return the AI's target for the current piece, if any placement fits."""

        if self._current is None:
            return None
        return find_best_move(self._board, self._current, self.weights)

    def step_ai(self) -> Optional[AIPhase]:
        """Perform exactly one AI action and return the phase it served.

        The plan is recomputed from scratch on every call.  ``None`` means no
        action was taken because no placement fits.
        """

        if not self._can_act():
            return None
        move = self.find_best_move()
        if move is None:
            return None

        phase = ai_phase(self._current, move)
        if phase is AIPhase.ALIGN_ROTATION:
            self.rotate_block()
        elif phase is AIPhase.ALIGN_COLUMN:
            step = Direction.RIGHT if self._current.position.x < move.x else Direction.LEFT
            self.move_block(step)
        else:
            self.drop_block()
        return phase


__all__ = ["AI_INTERVAL_MS", "GameEngine"]
