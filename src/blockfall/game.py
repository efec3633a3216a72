"""High level game logic.

:class:`Game` owns the board and the falling piece and turns commands (moves,
rotations, drops and gravity ticks) into board changes, score updates and
listener notifications.  It contains no clock: the host calls :meth:`Game.tick`
and asks :meth:`Game.next_tick_interval` when to call it again.
"""

from __future__ import annotations

import itertools
import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Union

from .board import Board
from .config import GameConfig
from .events import GameListener, NullListener
from .grid import Location
from .piece import Piece
from .shape import NUM_ROTATIONS, PieceKind
from .unit import Unit
from .utils import render_frame, tick_interval_ms


LOGGER = logging.getLogger(__name__)


class Direction(IntEnum):
    LEFT = -1
    RIGHT = 1


class Rotation(IntEnum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1


@dataclass(frozen=True)
class NoActivePiece:
    """No piece is falling: before the first start or after game over."""


@dataclass
class ActivePiece:
    """The falling piece and the board location of its grid's top-left cell."""

    piece: Piece
    anchor: Location


PieceState = Union[NoActivePiece, ActivePiece]


class Game:
    """Falling-block game state machine."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        listener: Optional[GameListener] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.listener = listener or NullListener()
        self.rng = rng or random.Random(self.config.seed)
        self.board = Board(self.config.width, self.config.height)
        self.state: PieceState = NoActivePiece()
        self.score = 0
        self.pieces_spawned = 0
        self.running = False
        self._uids = itertools.count()
        self._busy = False

    # Internal helpers -------------------------------------------------
    @contextmanager
    def _command(self) -> Iterator[None]:
        if self._busy:
            raise RuntimeError("Game commands must not be issued from listener callbacks")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _new_unit(self, kind: PieceKind) -> Unit:
        return Unit(next(self._uids), kind)

    def _spawn(self) -> None:
        size = self.config.piece_size
        kind = self.rng.choice(list(PieceKind))
        piece = Piece(kind, self._new_unit, rotation=self.rng.randrange(NUM_ROTATIONS))
        # Lowest visible cell starts just above the top row.
        anchor = Location((self.config.width - size) // 2, -(size - piece.bottom_margin))
        self.state = ActivePiece(piece, anchor)
        self.pieces_spawned += 1
        for column, row, unit in piece.grid.cells():
            unit.handle = self.listener.add_geometry(kind, anchor.offset(column, row))
        LOGGER.debug(
            "Spawned piece %d: %s rotation %d at %s\n%s",
            self.pieces_spawned,
            kind.name,
            piece.rotation,
            tuple(anchor),
            piece.ascii_art(),
        )

    def _notify_piece_moved(self, active: ActivePiece, animate: bool) -> None:
        for column, row, unit in active.piece.grid.cells():
            self.listener.move_geometry(unit.handle, active.anchor.offset(column, row), animate)

    def _translate(self, active: ActivePiece, columns: int, rows: int) -> bool:
        target = active.anchor.offset(columns, rows)
        if self.board.conflicts(active.piece.grid, target):
            return False
        active.anchor = target
        self._notify_piece_moved(active, animate=True)
        return True

    def _step_down(self, active: ActivePiece) -> bool:
        if self._translate(active, 0, 1):
            return True
        self._lock(active)
        return False

    def _lock(self, active: ActivePiece) -> None:
        piece, anchor = active.piece, active.anchor
        if anchor.row + piece.margins.top < 0:
            self._end_game()
            return

        self.board.place(piece.grid, anchor)
        self.state = NoActivePiece()
        cleared = self.board.collapse_full_rows(self._remove_unit, self._move_unit)
        points = self.config.scoring.points_for(cleared)
        self.score += points
        LOGGER.debug(
            "Locked %s at %s: cleared %d row(s), +%d points", piece.kind.name, tuple(anchor), cleared, points
        )
        self.listener.score_updated(self.score)
        self._spawn()

    def _remove_unit(self, unit: Unit) -> None:
        self.listener.remove_geometry(unit.handle)

    def _move_unit(self, unit: Unit, location: Location) -> None:
        self.listener.move_geometry(unit.handle, location, True)

    def _end_game(self) -> None:
        self.running = False
        self.state = NoActivePiece()
        LOGGER.info("Game over: score %d after %d pieces", self.score, self.pieces_spawned)
        self.listener.game_over()

    def _active(self) -> Optional[ActivePiece]:
        if self.running and isinstance(self.state, ActivePiece):
            return self.state
        return None

    # Public API -------------------------------------------------------
    @property
    def active(self) -> Optional[ActivePiece]:
        """Return the falling piece, or ``None`` when none is in play."""

        return self._active()

    def start(self) -> None:
        """Start a new game on an empty board and spawn the first piece."""

        with self._command():
            self.board = Board(self.config.width, self.config.height)
            self.state = NoActivePiece()
            self.score = 0
            self.pieces_spawned = 0
            self.running = False
            LOGGER.info("Game started on a %dx%d board", self.board.width, self.board.height)
            self.listener.score_updated(self.score)
            self._spawn()
            self.running = True

    def move_piece(self, direction: Direction) -> bool:
        """Shift the piece one column; returns ``False`` if it was blocked."""

        with self._command():
            active = self._active()
            if active is None:
                return False
            return self._translate(active, int(direction), 0)

    def rotate_piece(self, direction: Rotation) -> bool:
        """Rotate the piece one step in place; returns ``False`` if blocked."""

        with self._command():
            active = self._active()
            if active is None:
                return False
            piece = active.piece
            rotation = piece.rotation + int(direction)
            grid = piece.rotated(rotation)
            if self.board.conflicts(grid, active.anchor):
                return False
            piece.set_rotation(rotation, grid)
            self._notify_piece_moved(active, animate=False)
            return True

    def soft_drop(self) -> bool:
        """Move the piece down one row, locking it if it cannot move.

        Returns ``True`` if the piece moved.
        """

        with self._command():
            active = self._active()
            if active is None:
                return False
            return self._step_down(active)

    def drop_piece(self) -> None:
        """Hard drop: move the piece as far down as it goes and lock it."""

        with self._command():
            active = self._active()
            if active is None:
                return
            distance = self.board.drop_distance(active.piece.grid, active.anchor)
            if distance > 0:
                active.anchor = active.anchor.offset(0, distance)
                self._notify_piece_moved(active, animate=True)
            self._lock(active)

    def tick(self) -> bool:
        """Advance gravity by one row or lock the piece.

        Does nothing once the game is over.  Returns ``True`` if the piece
        moved down.
        """

        with self._command():
            active = self._active()
            if active is None:
                return False
            return self._step_down(active)

    def next_tick_interval(self) -> Optional[float]:
        """Return the delay in milliseconds until the next tick.

        ``None`` means the game is not running and no tick should be
        scheduled.
        """

        if not self.running:
            return None
        return tick_interval_ms(self.pieces_spawned, self.config)

    def frame(self) -> str:
        """Return an ASCII rendering of the board and the falling piece."""

        active = self._active()
        if active is None:
            return render_frame(self.board)
        return render_frame(self.board, active.piece, active.anchor)
