"""Triomino definitions, random piece generation and rotation.

Every piece is made of three coloured boxes.  Box positions are stored
relative to the piece's origin and are always normalised so that the minimum
``x`` and ``y`` are zero.  The absolute cell of a box on the board is
``piece.position + box.position``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from itertools import count
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple
import random


class Color(str, Enum):
    """Colours a box can carry."""

    RED = "red"
    BLUE = "blue"


class PieceShape(str, Enum):
    """The two triomino shapes."""

    STRAIGHT = "straight"
    BENT = "bent"


class Position(NamedTuple):
    """Board coordinate; ``x`` is the column and ``y`` the row (0 at the top)."""

    x: int
    y: int


Template = Tuple[Position, ...]


@dataclass(frozen=True)
class Box:
    """A single coloured cell of a piece."""

    position: Position
    color: Color


@dataclass
class Piece:
    """Active or upcoming piece."""

    id: str
    shape: PieceShape
    boxes: Tuple[Box, ...]
    position: Position = Position(0, 0)
    rotation: int = 0  # degrees, multiple of 90

    def move(self, dx: int, dy: int) -> None:
        """Translate the piece by ``dx`` columns and ``dy`` rows."""

        x, y = self.position
        self.position = Position(x + dx, y + dy)

    def blocks(self) -> List[Tuple[Position, Color]]:
        """Return the absolute board cells occupied by this piece."""

        x, y = self.position
        return [
            (Position(x + box.position.x, y + box.position.y), box.color)
            for box in self.boxes
        ]


# Column the pieces spawn at on the 8-wide board, row 0.
SPAWN_X = 3


def _template(*cells: Tuple[int, int]) -> Template:
    return tuple(Position(x, y) for x, y in cells)


# The straight triomino has two distinct orientations and the bent (L) triomino
# four.  Templates list the cells of each orientation in reading order.
SHAPE_TEMPLATES: Dict[PieceShape, Tuple[Template, ...]] = {
    PieceShape.STRAIGHT: (
        _template((0, 0), (1, 0), (2, 0)),
        _template((0, 0), (0, 1), (0, 2)),
    ),
    PieceShape.BENT: (
        _template((0, 0), (1, 0), (1, 1)),
        _template((1, 0), (0, 1), (1, 1)),
        _template((0, 0), (0, 1), (1, 1)),
        _template((0, 0), (1, 0), (0, 1)),
    ),
}


def _check_template(shape: PieceShape, template: Template) -> None:
    """Raise ``ValueError`` unless ``template`` is a normalised connected triomino."""

    cells = set(template)
    if len(template) != 3 or len(cells) != 3:
        raise ValueError(f"{shape.value} template must have 3 distinct cells")
    if min(p.x for p in cells) != 0 or min(p.y for p in cells) != 0:
        raise ValueError(f"{shape.value} template is not normalised: {template}")

    # Flood fill from the first cell across edge-adjacent neighbours.
    seen = {template[0]}
    frontier = [template[0]]
    while frontier:
        x, y = frontier.pop()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            neighbour = Position(nx, ny)
            if neighbour in cells and neighbour not in seen:
                seen.add(neighbour)
                frontier.append(neighbour)
    if seen != cells:
        raise ValueError(f"{shape.value} template is not connected: {template}")


for _shape, _templates in SHAPE_TEMPLATES.items():
    for _tpl in _templates:
        _check_template(_shape, _tpl)


def _rotate_boxes(boxes: Tuple[Box, ...]) -> Tuple[Box, ...]:
    """Return ``boxes`` rotated 90 degrees clockwise.

    The rotation is performed around the origin using ``(x, y) -> (y, -x)``.
    The result is normalised so the minimum ``x`` and ``y`` are zero again.
    Each box keeps its colour.
    """

    rotated = [(box.position.y, -box.position.x, box.color) for box in boxes]
    min_x = min(x for x, _, _ in rotated)
    min_y = min(y for _, y, _ in rotated)
    return tuple(
        Box(Position(x - min_x, y - min_y), color) for x, y, color in rotated
    )


def rotate_piece(piece: Piece, times: int = 1) -> Piece:
    """Return a copy of ``piece`` rotated clockwise ``times`` quarter turns.

    The input piece is left untouched and the absolute position is kept.
    """

    boxes = piece.boxes
    for _ in range(times % 4):
        boxes = _rotate_boxes(boxes)
    return replace(
        piece, boxes=boxes, rotation=(piece.rotation + 90 * times) % 360
    )


class PieceGenerator:
    """Create pieces from :data:`SHAPE_TEMPLATES`.

    Each generator owns its random number generator and its id counter so
    sequences can be reproduced by passing ``seed`` or an ``rng`` instance.
    """

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._ids: Iterator[int] = count(1)

    def _next_id(self) -> str:
        return f"piece_{next(self._ids)}"

    def create_random(self) -> Piece:
        """Return a new randomly shaped and coloured piece at the spawn point."""

        shape = self._rng.choice(list(PieceShape))
        template = self._rng.choice(SHAPE_TEMPLATES[shape])
        colors = list(Color)
        boxes = tuple(Box(cell, self._rng.choice(colors)) for cell in template)
        return Piece(
            id=self._next_id(),
            shape=shape,
            boxes=boxes,
            position=Position(SPAWN_X, 0),
            rotation=0,
        )

    def enumerate_all_variants(self) -> List[Piece]:
        """Return one single-coloured piece per shape, colour and template.

        The order is shape, then colour, then template.  Ids are derived from
        the shape, colour and index so the result is fully deterministic.
        """

        variants: List[Piece] = []
        for shape, templates in SHAPE_TEMPLATES.items():
            for color in Color:
                for template in templates:
                    variants.append(
                        Piece(
                            id=f"{shape.value}_{color.value}_{len(variants)}",
                            shape=shape,
                            boxes=tuple(Box(cell, color) for cell in template),
                        )
                    )
        return variants

    def rotate(self, piece: Piece) -> Piece:
        """Return ``piece`` rotated by 90 degrees clockwise."""

        return rotate_piece(piece)


__all__ = [
    "Box",
    "Color",
    "Piece",
    "PieceGenerator",
    "PieceShape",
    "Position",
    "SHAPE_TEMPLATES",
    "SPAWN_X",
    "rotate_piece",
]
