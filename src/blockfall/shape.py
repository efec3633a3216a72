"""Piece kinds and their block patterns.

Every piece lives in the same 4x4 bounding box.  Only the spawn orientation
(rotation ``0``) of each kind is stored; the other orientations are derived by
the four fixed, kind-independent transforms in :data:`ROTATIONS`.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Sequence, Tuple

Cell = Tuple[int, int]  # (x, y) == (column, row)

SHAPE_SIZE = 4
NUM_ROTATIONS = 4


class PieceKind(str, Enum):
    """Enumeration of the available piece shapes."""

    SQUARE = "square"
    I = "i"
    L = "l"
    INVERSE_L = "inverse_l"
    S = "s"
    INVERSE_S = "inverse_s"
    T = "t"


# Spawn orientation of each kind; ``X`` marks an occupied cell.
_PATTERNS: Dict[PieceKind, Sequence[str]] = {
    PieceKind.SQUARE: (
        "....",
        ".XX.",
        ".XX.",
        "....",
    ),
    PieceKind.I: (
        ".X..",
        ".X..",
        ".X..",
        ".X..",
    ),
    PieceKind.L: (
        ".X..",
        ".X..",
        ".XX.",
        "....",
    ),
    PieceKind.INVERSE_L: (
        "..X.",
        "..X.",
        ".XX.",
        "....",
    ),
    PieceKind.S: (
        "....",
        ".XX.",
        "XX..",
        "....",
    ),
    PieceKind.INVERSE_S: (
        "....",
        "XX..",
        ".XX.",
        "....",
    ),
    PieceKind.T: (
        "....",
        "XXX.",
        ".X..",
        "....",
    ),
}


def parse_pattern(pattern: Sequence[str], size: int = SHAPE_SIZE) -> List[Cell]:
    """Return the occupied cells of an ASCII ``pattern`` in row-major order.

    Raises:
        ValueError: If the pattern is not ``size`` rows of ``size`` characters.
    """

    if len(pattern) != size:
        raise ValueError(f"Invalid row count for shape: {len(pattern)}")
    cells: List[Cell] = []
    for y, line in enumerate(pattern):
        if len(line) != size:
            raise ValueError(f"Invalid row length for shape: {line!r}")
        cells.extend((x, y) for x, char in enumerate(line) if char == "X")
    return cells


_LAST = SHAPE_SIZE - 1

# Clockwise transforms indexed by rotation: 0, 90, 180 and 270 degrees.
ROTATIONS: Tuple[Callable[[int, int], Cell], ...] = (
    lambda x, y: (x, y),
    lambda x, y: (_LAST - y, x),
    lambda x, y: (_LAST - x, _LAST - y),
    lambda x, y: (y, _LAST - x),
)


def normalize_rotation(rotation: int) -> int:
    """Wrap any integer rotation (negative included) into ``[0, 4)``."""

    return rotation % NUM_ROTATIONS


def rotate_cell(x: int, y: int, rotation: int) -> Cell:
    """Map canonical cell ``(x, y)`` to its position at ``rotation``."""

    return ROTATIONS[normalize_rotation(rotation)](x, y)


SHAPES: Dict[PieceKind, Tuple[Cell, ...]] = {
    kind: tuple(parse_pattern(pattern)) for kind, pattern in _PATTERNS.items()
}


def canonical_cells(kind: PieceKind) -> Tuple[Cell, ...]:
    """Return the occupied cells of ``kind`` at rotation ``0``."""

    return SHAPES[kind]


def rotated_cells(kind: PieceKind, rotation: int) -> FrozenSet[Cell]:
    """Return the occupied cells of ``kind`` at ``rotation``."""

    return frozenset(rotate_cell(x, y, rotation) for x, y in SHAPES[kind])
