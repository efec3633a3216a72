"""Fixed-size occupancy grids shared by the board and the pieces."""

from __future__ import annotations

from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .unit import Unit


class Location(NamedTuple):
    """A ``(column, row)`` coordinate; rows grow downwards."""

    column: int
    row: int

    def offset(self, columns: int = 0, rows: int = 0) -> "Location":
        return Location(self.column + columns, self.row + rows)


Visitor = Callable[[int, int, Unit], object]


class Grid:
    """Rectangular map of optional :class:`Unit` references.

    Cells are stored in a flat list indexed by ``row * num_columns + column``.
    Both the board and every piece rotation are grids.
    """

    def __init__(self, num_columns: int, num_rows: int) -> None:
        if num_columns <= 0 or num_rows <= 0:
            raise ValueError(f"Grid size must be positive, got {num_columns}x{num_rows}")
        self.num_columns = int(num_columns)
        self.num_rows = int(num_rows)
        self._cells: List[Optional[Unit]] = [None] * (self.num_columns * self.num_rows)

    @classmethod
    def from_grid(cls, other: "Grid") -> "Grid":
        """Return a copy of ``other``.

        The occupancy map is copied; the cells keep referencing the same
        :class:`Unit` objects.
        """

        grid = cls.__new__(cls)
        Grid.__init__(grid, other.num_columns, other.num_rows)
        grid._cells = list(other._cells)
        return grid

    def copy(self) -> "Grid":
        return Grid.from_grid(self)

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.num_columns and 0 <= row < self.num_rows

    def _index(self, column: int, row: int) -> int:
        if not self.in_bounds(column, row):
            raise IndexError(
                f"Cell ({column}, {row}) out of bounds for {self.num_columns}x{self.num_rows} grid"
            )
        return row * self.num_columns + column

    def get(self, column: int, row: int) -> Optional[Unit]:
        """Return the unit at ``(column, row)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        return self._cells[self._index(column, row)]

    def set(self, column: int, row: int, value: Optional[Unit]) -> None:
        """Store ``value`` at ``(column, row)``.

        Raises:
            IndexError: If the coordinates are outside the grid.
        """

        self._cells[self._index(column, row)] = value

    def __getitem__(self, key: Tuple[int, int]) -> Optional[Unit]:
        column, row = key
        return self.get(column, row)

    def __setitem__(self, key: Tuple[int, int], value: Optional[Unit]) -> None:
        column, row = key
        self.set(column, row, value)

    def cells(self) -> Iterator[Tuple[int, int, Unit]]:
        """Yield ``(column, row, unit)`` for occupied cells in row-major order."""

        columns = self.num_columns
        for index, unit in enumerate(self._cells):
            if unit is not None:
                yield index % columns, index // columns, unit

    def traverse(self, visitor: Visitor) -> bool:
        """Visit occupied cells until ``visitor`` returns a truthy value.

        Returns ``True`` if the traversal was stopped early.
        """

        for column, row, unit in self.cells():
            if visitor(column, row, unit):
                return True
        return False

    def for_each(self, visitor: Visitor) -> None:
        """Visit every occupied cell, ignoring the visitor's return value."""

        for column, row, unit in self.cells():
            visitor(column, row, unit)

    def unit_count(self) -> int:
        return sum(1 for unit in self._cells if unit is not None)

    def occupancy(self) -> NDArray[np.bool_]:
        """Return a ``(num_rows, num_columns)`` boolean occupancy mask."""

        flat = np.fromiter(
            (unit is not None for unit in self._cells),
            dtype=np.bool_,
            count=len(self._cells),
        )
        return flat.reshape(self.num_rows, self.num_columns)

    def ascii_art(self) -> str:
        """Return the occupancy as rows of ``#`` and ``.`` for diagnostics."""

        return "\n".join(
            "".join("#" if cell else "." for cell in row) for row in self.occupancy()
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.num_columns}x{self.num_rows})"
