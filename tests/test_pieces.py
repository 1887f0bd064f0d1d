from __future__ import annotations

import random

import pytest

from triomino.board import WIDTH
from triomino.pieces import (
    SHAPE_TEMPLATES,
    SPAWN_X,
    Box,
    Color,
    Piece,
    PieceGenerator,
    PieceShape,
    Position,
    _check_template,
    rotate_piece,
)


def _cells(piece: Piece) -> set[Position]:
    return {box.position for box in piece.boxes}


def test_random_pieces_have_three_coloured_boxes_at_spawn() -> None:
    generator = PieceGenerator(seed=7)
    for _ in range(200):
        piece = generator.create_random()
        assert len(piece.boxes) == 3
        assert piece.shape in SHAPE_TEMPLATES
        assert all(box.color in (Color.RED, Color.BLUE) for box in piece.boxes)
        assert piece.position == Position(SPAWN_X, 0)
        assert piece.rotation == 0


def test_spawn_column_fits_board() -> None:
    assert SPAWN_X == 3
    assert WIDTH == 8


def test_random_pieces_get_unique_ids() -> None:
    generator = PieceGenerator(seed=1)
    ids = {generator.create_random().id for _ in range(50)}
    assert len(ids) == 50


def test_same_seed_gives_same_sequence() -> None:
    first = PieceGenerator(seed=99)
    second = PieceGenerator(rng=random.Random(99))
    for _ in range(20):
        a = first.create_random()
        b = second.create_random()
        assert a == b


def test_random_pieces_cover_every_shape_and_colour() -> None:
    generator = PieceGenerator(seed=3)
    pieces = [generator.create_random() for _ in range(300)]
    assert {p.shape for p in pieces} == set(PieceShape)
    assert {box.color for p in pieces for box in p.boxes} == set(Color)


def test_catalog_templates_are_normalised_and_connected() -> None:
    assert len(SHAPE_TEMPLATES[PieceShape.STRAIGHT]) == 2
    assert len(SHAPE_TEMPLATES[PieceShape.BENT]) == 4
    for templates in SHAPE_TEMPLATES.values():
        distinct = {frozenset(t) for t in templates}
        assert len(distinct) == len(templates)
        for template in templates:
            assert min(p.x for p in template) == 0
            assert min(p.y for p in template) == 0


def test_disconnected_template_is_rejected() -> None:
    with pytest.raises(ValueError):
        _check_template(PieceShape.BENT, (Position(0, 0), Position(2, 0), Position(1, 1)))
    with pytest.raises(ValueError):
        _check_template(PieceShape.BENT, (Position(1, 1), Position(2, 1), Position(1, 2)))


def test_enumerate_all_variants_is_deterministic() -> None:
    variants = PieceGenerator(seed=0).enumerate_all_variants()
    again = PieceGenerator(seed=12345).enumerate_all_variants()

    assert len(variants) == 12  # (2 straight + 4 bent) templates x 2 colours
    assert variants == again
    assert variants[0].id == "straight_red_0"
    assert variants[2].id == "straight_blue_2"
    assert variants[4].id == "bent_red_4"
    assert variants[-1].id == "bent_blue_11"
    for variant in variants:
        assert len({box.color for box in variant.boxes}) == 1
        assert variant.position == Position(0, 0)


def test_rotate_is_clockwise_and_keeps_colour_pairing() -> None:
    piece = Piece(
        id="p",
        shape=PieceShape.BENT,
        boxes=(
            Box(Position(0, 0), Color.RED),
            Box(Position(1, 0), Color.BLUE),
            Box(Position(1, 1), Color.RED),
        ),
        position=Position(2, 5),
    )

    rotated = PieceGenerator().rotate(piece)

    assert {(b.position, b.color) for b in rotated.boxes} == {
        (Position(0, 1), Color.RED),
        (Position(0, 0), Color.BLUE),
        (Position(1, 0), Color.RED),
    }
    assert rotated.rotation == 90
    assert rotated.position == Position(2, 5)
    assert rotated.id == piece.id


def test_rotate_does_not_mutate_input() -> None:
    piece = PieceGenerator(seed=4).create_random()
    boxes_before = piece.boxes
    rotate_piece(piece)
    assert piece.boxes == boxes_before
    assert piece.rotation == 0


def test_straight_rotation_toggles_orientation() -> None:
    horizontal = Piece(
        id="s",
        shape=PieceShape.STRAIGHT,
        boxes=tuple(Box(p, Color.BLUE) for p in SHAPE_TEMPLATES[PieceShape.STRAIGHT][0]),
    )
    vertical = rotate_piece(horizontal)
    assert _cells(vertical) == set(SHAPE_TEMPLATES[PieceShape.STRAIGHT][1])


def test_four_rotations_restore_the_piece() -> None:
    generator = PieceGenerator(seed=11)
    for variant in generator.enumerate_all_variants():
        piece = variant
        for _ in range(4):
            piece = generator.rotate(piece)
        assert _cells(piece) == _cells(variant)
        assert piece.position == variant.position
        assert piece.rotation == variant.rotation % 360


def test_rotation_preserves_colour_multiset() -> None:
    generator = PieceGenerator(seed=21)
    for _ in range(50):
        piece = generator.create_random()
        rotated = generator.rotate(piece)
        assert sorted(b.color for b in rotated.boxes) == sorted(b.color for b in piece.boxes)
        assert min(b.position.x for b in rotated.boxes) == 0
        assert min(b.position.y for b in rotated.boxes) == 0


def test_blocks_are_offset_by_piece_position() -> None:
    piece = Piece(
        id="b",
        shape=PieceShape.STRAIGHT,
        boxes=tuple(Box(p, Color.RED) for p in SHAPE_TEMPLATES[PieceShape.STRAIGHT][1]),
        position=Position(4, 2),
    )
    assert [pos for pos, _ in piece.blocks()] == [Position(4, 2), Position(4, 3), Position(4, 4)]
    piece.move(-1, 1)
    assert piece.position == Position(3, 3)
