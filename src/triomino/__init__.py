"""Falling triomino puzzle with a majority-colour row clear and a placement AI."""

from .board import Board
from .pieces import Box, Color, Piece, PieceGenerator, PieceShape, Position, rotate_piece
from .game_state import Direction, GameMode, GameState, GameStats
from .ai import AIPhase, Move, PlacementWeights, find_best_move
from .engine import GameEngine
from .utils import render_grid

__all__ = [
    "AIPhase",
    "Board",
    "Box",
    "Color",
    "Direction",
    "GameEngine",
    "GameMode",
    "GameState",
    "GameStats",
    "Move",
    "Piece",
    "PieceGenerator",
    "PieceShape",
    "PlacementWeights",
    "Position",
    "find_best_move",
    "render_grid",
    "rotate_piece",
]
