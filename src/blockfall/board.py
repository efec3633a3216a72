"""Board representation for the playfield.

The board is a :class:`~blockfall.grid.Grid` of settled units.  Rows are
indexed top to bottom, so gravity increases the row index and anything above
row ``0`` is outside the visible field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import numpy as np

from .grid import Grid, Location
from .unit import Unit


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

RemoveCallback = Callable[[Unit], None]
MoveCallback = Callable[[Unit, Location], None]


@dataclass
class _PendingMove:
    unit: Unit
    column: int
    row: int
    shifts: int = 0


class Board(Grid):
    """Grid of settled units with collision and line-clear logic."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        super().__init__(width, height)

    @property
    def width(self) -> int:
        return self.num_columns

    @property
    def height(self) -> int:
        return self.num_rows

    def conflicts(self, other: Grid, location: Location) -> bool:
        """Return ``True`` if ``other`` placed at ``location`` collides.

        A cell collides when it is below the floor, off either side, or on an
        occupied board cell.  Cells above row ``0`` never collide with blocks,
        so pieces may stick out over the top of the field.
        """

        origin_column, origin_row = location

        def hits(column: int, row: int, _unit: Unit) -> bool:
            board_column = origin_column + column
            board_row = origin_row + row
            if board_row >= self.num_rows:
                return True
            if board_column < 0 or board_column >= self.num_columns:
                return True
            if board_row < 0:
                return False
            return self.get(board_column, board_row) is not None

        return other.traverse(hits)

    def drop_distance(self, other: Grid, location: Location) -> int:
        """Return how many rows ``other`` at ``location`` can fall.

        For each grid column that maps onto the board, the allowed drop is
        ``board_empty - (location.row + other.num_rows) + grid_empty`` where
        ``grid_empty`` is the empty run at the bottom of the grid column and
        ``board_empty`` the row of the first settled block beneath it.  The
        tightest column wins.  Columns empty in ``other`` impose no limit.
        """

        mask = other.occupancy()
        distance = self.num_rows + 1
        for column in range(other.num_columns):
            board_column = location.column + column
            if not 0 <= board_column < self.num_columns:
                continue
            filled = np.flatnonzero(mask[:, column])
            if filled.size == 0:
                continue
            lowest = int(filled[-1])
            grid_empty = other.num_rows - 1 - lowest
            board_empty = self._first_filled_row(board_column, location.row + lowest + 1)
            distance = min(distance, board_empty - (location.row + other.num_rows) + grid_empty)
        return distance

    def _first_filled_row(self, column: int, start: int) -> int:
        for row in range(max(0, start), self.num_rows):
            if self.get(column, row) is not None:
                return row
        return self.num_rows

    def place(self, other: Grid, location: Location) -> None:
        """Transfer the units of ``other`` into the board at ``location``.

        Cells above the top row are dropped.

        Raises:
            IndexError: If a cell lands below or beside the board.
            RuntimeError: If a target cell is already occupied.
        """

        for column, row, unit in other.cells():
            board_column = location.column + column
            board_row = location.row + row
            if board_row < 0:
                continue
            if self.get(board_column, board_row) is not None:
                raise RuntimeError(f"Cell ({board_column}, {board_row}) already occupied")
            self.set(board_column, board_row, unit)

    def full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top first."""

        return [int(row) for row in np.flatnonzero(self.occupancy().all(axis=1))]

    def collapse_full_rows(
        self,
        on_remove: Optional[RemoveCallback] = None,
        on_move: Optional[MoveCallback] = None,
    ) -> int:
        """Remove full rows and compact everything above them downwards.

        The board is scanned once from the top.  Units in rows that survive
        are tracked by ``uid`` together with the number of collapses that
        happened below them, so several simultaneous full rows shift the
        units above by the combined amount.  Callbacks fire after the pass:
        ``on_remove`` for each cleared unit and ``on_move`` with the new
        location of each unit that shifted.

        Returns the number of rows removed.
        """

        full = self.occupancy().all(axis=1)
        columns = self.num_columns
        removed: List[Unit] = []
        pending: Dict[int, _PendingMove] = {}
        collapsed = 0

        for row in range(self.num_rows):
            start = row * columns
            if full[row]:
                removed.extend(self._cells[start:start + columns])
                self._cells[columns:start + columns] = self._cells[:start]
                self._cells[:columns] = [None] * columns
                collapsed += 1
                for entry in pending.values():
                    entry.shifts += 1
                continue
            for column, unit in enumerate(self._cells[start:start + columns]):
                if unit is None:
                    continue
                if unit.uid in pending:
                    raise RuntimeError(f"Unit {unit.uid} tracked twice during collapse")
                pending[unit.uid] = _PendingMove(unit, column, row)

        if on_remove is not None:
            for unit in removed:
                on_remove(unit)
        if on_move is not None:
            for entry in pending.values():
                if entry.shifts:
                    on_move(entry.unit, Location(entry.column, entry.row + entry.shifts))
        return collapsed
