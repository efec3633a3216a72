import itertools

import pytest

from blockfall.piece import Margins, Piece, compute_margins
from blockfall.grid import Grid
from blockfall.shape import PieceKind, canonical_cells, parse_pattern, rotate_cell
from blockfall.unit import Unit


def make_piece(kind, rotation=0):
    uids = itertools.count()
    return Piece(kind, lambda k: Unit(next(uids), k), rotation=rotation)


EXPECTED = {
    PieceKind.I: [
        [".#..", ".#..", ".#..", ".#.."],
        ["....", "####", "....", "...."],
        ["..#.", "..#.", "..#.", "..#."],
        ["....", "....", "####", "...."],
    ],
    PieceKind.L: [
        [".#..", ".#..", ".##.", "...."],
        ["....", ".###", ".#..", "...."],
        ["....", ".##.", "..#.", "..#."],
        ["....", "..#.", "###.", "...."],
    ],
    PieceKind.S: [
        ["....", ".##.", "##..", "...."],
        [".#..", ".##.", "..#.", "...."],
        ["....", "..##", ".##.", "...."],
        ["....", ".#..", ".##.", "..#."],
    ],
    PieceKind.INVERSE_L: [
        ["..#.", "..#.", ".##.", "...."],
        ["....", ".#..", ".###", "...."],
        ["....", ".##.", ".#..", ".#.."],
        ["....", "###.", "..#.", "...."],
    ],
    PieceKind.INVERSE_S: [
        ["....", "##..", ".##.", "...."],
        ["..#.", ".##.", ".#..", "...."],
        ["....", ".##.", "..##", "...."],
        ["....", "..#.", ".##.", ".#.."],
    ],
    PieceKind.T: [
        ["....", "###.", ".#..", "...."],
        ["..#.", ".##.", "..#.", "...."],
        ["....", "..#.", ".###", "...."],
        ["....", ".#..", ".##.", ".#.."],
    ],
    PieceKind.SQUARE: [["....", ".##.", ".##.", "...."]] * 4,
}


def test_spawn_orientation_loads_from_pattern():
    piece = make_piece(PieceKind.I)
    assert piece.ascii_art() == "\n".join([".#..", ".#..", ".#..", ".#.."])


def test_l_canonical_cells():
    assert set(canonical_cells(PieceKind.L)) == {(1, 0), (1, 1), (1, 2), (2, 2)}


@pytest.mark.parametrize("kind", list(PieceKind))
@pytest.mark.parametrize("rotation", range(4))
def test_rotations_render_expected_patterns(kind, rotation):
    piece = make_piece(kind)
    assert piece.rotated(rotation).ascii_art() == "\n".join(EXPECTED[kind][rotation])


def test_rotated_does_not_change_piece():
    piece = make_piece(PieceKind.L)
    before = piece.ascii_art()
    piece.rotated(1)
    assert piece.rotation == 0
    assert piece.ascii_art() == before


@pytest.mark.parametrize("kind", list(PieceKind))
def test_four_clockwise_steps_return_to_start(kind):
    piece = make_piece(kind)
    start = piece.ascii_art()
    for _ in range(4):
        piece.set_rotation(piece.rotation + 1)
    assert piece.rotation == 0
    assert piece.ascii_art() == start
    for _ in range(4):
        piece.set_rotation(piece.rotation - 1)
    assert piece.ascii_art() == start


@pytest.mark.parametrize("kind", list(PieceKind))
def test_every_kind_has_four_cells(kind):
    assert len(canonical_cells(kind)) == 4
    assert make_piece(kind).grid.unit_count() == 4


def test_rotation_transforms():
    assert rotate_cell(1, 0, 0) == (1, 0)
    assert rotate_cell(1, 0, 1) == (3, 1)
    assert rotate_cell(1, 0, 2) == (2, 3)
    assert rotate_cell(1, 0, 3) == (0, 2)
    assert rotate_cell(1, 0, -1) == rotate_cell(1, 0, 3)


def test_rotation_keeps_unit_identity():
    piece = make_piece(PieceKind.T)
    units = {id(unit) for unit in piece.units()}
    piece.set_rotation(3)
    assert {id(unit) for unit in piece.units()} == units
    assert {id(u) for _, _, u in piece.canonical.cells()} == units


def test_units_from_iterable_follow_pattern_order():
    units = [Unit(uid, PieceKind.L) for uid in range(4)]
    piece = Piece(PieceKind.L, units)
    assert [u.uid for _, _, u in piece.canonical.cells()] == [0, 1, 2, 3]
    assert piece.canonical.get(2, 2) is units[3]


def test_initial_rotation_is_normalised():
    piece = make_piece(PieceKind.L, rotation=5)
    assert piece.rotation == 1
    assert piece.ascii_art() == "\n".join(EXPECTED[PieceKind.L][1])


def test_margins_follow_rotation():
    piece = make_piece(PieceKind.L)
    assert piece.margins == Margins(top=0, bottom=1, left=1, right=1)
    assert piece.bottom_margin == 1
    piece.set_rotation(1)
    assert piece.margins == Margins(top=1, bottom=1, left=1, right=0)
    i_piece = make_piece(PieceKind.I, rotation=3)
    assert i_piece.margins == Margins(top=2, bottom=1, left=0, right=0)


def test_margins_of_empty_grid():
    assert compute_margins(Grid(4, 4)) == Margins(4, 4, 4, 4)


def test_malformed_patterns_rejected():
    with pytest.raises(ValueError):
        parse_pattern(["....", "...."])
    with pytest.raises(ValueError):
        parse_pattern(["....", "...", "....", "...."])
