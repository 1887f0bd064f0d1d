import logging

from triomino.__main__ import run
from triomino.engine import GameEngine
from triomino.game_state import GameMode, GameState
from triomino.pieces import PieceGenerator
from triomino.utils import grid_to_text, render_grid


def test_render_grid_overlays_active_piece():
    engine = GameEngine(generator=PieceGenerator(seed=6))
    engine.start_game(GameMode.HUMAN)
    grid = render_grid(engine.board, engine.current_piece)
    for (x, y), color in engine.current_piece.blocks():
        assert grid[y][x] is color
    # The overlay never locks the piece.
    assert all(cell is None for row in engine.grid() for cell in row)


def test_grid_to_text_uses_colour_initials():
    engine = GameEngine(generator=PieceGenerator(seed=6))
    engine.start_game(GameMode.HUMAN)
    lines = grid_to_text(render_grid(engine.board, engine.current_piece))
    assert len(lines) == engine.board.height
    assert set("".join(lines)) <= {".", "R", "B"}
    assert lines[-1] == "." * engine.board.width


def test_run_logs_game_start(caplog):
    engine = GameEngine(generator=PieceGenerator(seed=6))
    with caplog.at_level(logging.INFO, logger="triomino.engine"):
        ticks = run(engine, ticks=10, step_ms=50.0, mode=GameMode.AI)
    assert ticks == 10
    assert engine.state is GameState.PLAYING
    assert "Game started in ai mode" in caplog.messages


def test_game_over_is_logged(caplog):
    engine = GameEngine(generator=PieceGenerator(seed=6))
    engine.start_game(GameMode.HUMAN)
    with caplog.at_level(logging.INFO, logger="triomino.engine"):
        engine._game_over()
    assert any(message.startswith("Game over.") for message in caplog.messages)
