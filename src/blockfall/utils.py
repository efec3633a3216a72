"""Utility helpers for the engine."""

from __future__ import annotations

from typing import Optional

from .board import Board
from .config import GameConfig
from .grid import Location
from .piece import Piece


def tick_interval_ms(pieces_spawned: int, config: Optional[GameConfig] = None) -> float:
    """Return the gravity interval in milliseconds after ``pieces_spawned``.

    The delay shrinks linearly with every spawned piece and stays at
    ``config.min_tick_interval_ms`` once ``config.ramp_spawns`` pieces have
    been spawned.
    """

    config = config or GameConfig()
    progress = min(max(pieces_spawned, 0), config.ramp_spawns) / config.ramp_spawns
    span = config.base_tick_interval_ms - config.min_tick_interval_ms
    return config.base_tick_interval_ms - span * progress


def render_frame(
    board: Board,
    piece: Optional[Piece] = None,
    anchor: Optional[Location] = None,
    *,
    piece_char: str = "@",
) -> str:
    """Return the board as ASCII art with the active piece overlaid.

    Settled blocks are ``#``, empty cells ``.`` and the cells of ``piece``
    placed at ``anchor`` use ``piece_char``.  Piece cells above the board are
    not shown.  The board itself is not modified.
    """

    rows = [list(line) for line in board.ascii_art().split("\n")]
    if piece is not None and anchor is not None:
        for column, row, _unit in piece.grid.cells():
            board_column = anchor.column + column
            board_row = anchor.row + row
            if board.in_bounds(board_column, board_row):
                rows[board_row][board_column] = piece_char
    return "\n".join("".join(row) for row in rows)
