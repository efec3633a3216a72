"""The falling piece and its rotation state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

import numpy as np

from .grid import Grid
from .shape import SHAPE_SIZE, PieceKind, canonical_cells, normalize_rotation, rotate_cell
from .unit import Unit

UnitSource = Union[Callable[[PieceKind], Unit], Iterable[Unit]]


@dataclass(frozen=True)
class Margins:
    """Number of fully empty border rows/columns of a grid."""

    top: int
    bottom: int
    left: int
    right: int


def compute_margins(grid: Grid) -> Margins:
    """Count the empty rows and columns along each border of ``grid``.

    An empty grid reports every margin as the full grid extent.
    """

    mask = grid.occupancy()
    rows = np.flatnonzero(mask.any(axis=1))
    columns = np.flatnonzero(mask.any(axis=0))
    if rows.size == 0:
        return Margins(grid.num_rows, grid.num_rows, grid.num_columns, grid.num_columns)
    return Margins(
        top=int(rows[0]),
        bottom=grid.num_rows - 1 - int(rows[-1]),
        left=int(columns[0]),
        right=grid.num_columns - 1 - int(columns[-1]),
    )


class Piece:
    """A movable 4x4 grid bound to a :class:`PieceKind`.

    The canonical grid holds the spawn orientation; the active grid is derived
    from it for the current rotation.  Both reference the same units.

    Parameters
    ----------
    kind:
        Shape of the piece.
    units:
        Either a callable invoked once per occupied cell with ``kind`` or an
        iterable yielding at least that many units.  Units are assigned in
        row-major order of the canonical pattern.
    rotation:
        Initial rotation index; wrapped into ``[0, 4)``.
    """

    def __init__(self, kind: PieceKind, units: UnitSource, rotation: int = 0) -> None:
        self.kind = kind
        self._canonical = Grid(SHAPE_SIZE, SHAPE_SIZE)
        if callable(units):
            make = units
        else:
            source = iter(units)
            make = lambda _kind: next(source)
        for x, y in canonical_cells(kind):
            self._canonical.set(x, y, make(kind))
        self.rotation: int
        self.grid: Grid
        self.margins: Margins
        self.set_rotation(rotation)

    @property
    def canonical(self) -> Grid:
        return self._canonical

    @property
    def bottom_margin(self) -> int:
        return self.margins.bottom

    def rotated(self, rotation: int) -> Grid:
        """Return a fresh grid for ``rotation`` without changing the piece."""

        grid = Grid(SHAPE_SIZE, SHAPE_SIZE)
        for x, y, unit in self._canonical.cells():
            grid.set(*rotate_cell(x, y, rotation), unit)
        return grid

    def set_rotation(self, rotation: int, grid: Optional[Grid] = None) -> None:
        """Commit ``rotation`` as the active orientation.

        ``grid`` may be passed when the caller already computed it with
        :meth:`rotated`.
        """

        rotation = normalize_rotation(rotation)
        self.grid = grid if grid is not None else self.rotated(rotation)
        self.rotation = rotation
        self.margins = compute_margins(self.grid)

    def units(self) -> List[Unit]:
        return [unit for _, _, unit in self.grid.cells()]

    def ascii_art(self) -> str:
        return self.grid.ascii_art()

    def __repr__(self) -> str:
        return f"Piece(kind={self.kind.name}, rotation={self.rotation})"
