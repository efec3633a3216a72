"""Notifications the game sends to whatever presents it."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .grid import Location
from .shape import PieceKind


class GameListener(Protocol):
    """Callbacks invoked synchronously by :class:`~blockfall.game.Game`.

    Implementations must not call back into the game.
    """

    def add_geometry(self, kind: PieceKind, location: Location) -> Any:
        """Create a visual for a new unit and return an opaque handle."""

    def move_geometry(self, handle: Any, location: Location, animate: bool) -> None:
        """Move the visual behind ``handle`` to ``location``."""

    def remove_geometry(self, handle: Any) -> None:
        """Drop the visual of a cleared unit."""

    def score_updated(self, score: int) -> None:
        ...

    def game_over(self) -> None:
        ...


class NullListener:
    """Listener that ignores every notification."""

    def add_geometry(self, kind: PieceKind, location: Location) -> Optional[Any]:
        return None

    def move_geometry(self, handle: Any, location: Location, animate: bool) -> None:
        pass

    def remove_geometry(self, handle: Any) -> None:
        pass

    def score_updated(self, score: int) -> None:
        pass

    def game_over(self) -> None:
        pass
