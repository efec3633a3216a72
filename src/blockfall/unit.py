"""Single block cells of a piece."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .shape import PieceKind


class Unit:
    """One indivisible block of a piece.

    A unit knows nothing about its position; that is stored by whichever
    :class:`~blockfall.grid.Grid` currently holds it.  ``uid`` is assigned by
    the game at spawn and stays unique for the lifetime of that game.
    ``handle`` is whatever the listener returned from ``add_geometry`` and is
    never inspected by the engine.
    """

    __slots__ = ("uid", "kind", "handle")

    def __init__(self, uid: int, kind: "PieceKind", handle: Optional[Any] = None) -> None:
        self.uid = uid
        self.kind = kind
        self.handle = handle

    def __repr__(self) -> str:
        return f"Unit(uid={self.uid}, kind={self.kind.name})"
