"""Simple ASCII demo for the triomino engine.

Run with: `python -m triomino`

The demo drives a game headlessly by feeding fixed time steps to
:meth:`GameEngine.update` and prints the final frame (board plus the active
piece) together with the statistics.  Pass ``--help`` for the options.
"""

from __future__ import annotations

import argparse
import logging

from . import GameEngine, GameMode, GameState, PieceGenerator, render_grid
from .utils import grid_to_text


LOGGER = logging.getLogger(__name__)


def run(engine: GameEngine, *, ticks: int, step_ms: float, mode: GameMode) -> int:
    """Play up to ``ticks`` updates and return how many were run."""

    engine.start_game(mode)
    for tick in range(1, ticks + 1):
        engine.update(step_ms)
        if engine.state is GameState.GAME_OVER:
            LOGGER.info("Game ended after %d ticks", tick)
            return tick
    return ticks


def _print_frame(engine: GameEngine) -> None:
    for line in grid_to_text(render_grid(engine.board, engine.current_piece)):
        print(line)
    stats = engine.stats
    print(f"state={engine.state.value} score={stats.score} level={stats.level} lines={stats.lines_cleared}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ticks", type=int, default=2000, help="Number of update calls to run.")
    parser.add_argument("--step-ms", type=float, default=50.0, help="Milliseconds per update call.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator.")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.AI.value,
        help="Who controls the pieces (a human game just falls under gravity).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    engine = GameEngine(generator=PieceGenerator(seed=args.seed))
    run(engine, ticks=args.ticks, step_ms=args.step_ms, mode=GameMode(args.mode))
    _print_frame(engine)


if __name__ == "__main__":
    main()
