"""Rule engine for a falling-block puzzle game."""

from .board import Board
from .config import GameConfig, ScoringRules
from .events import GameListener, NullListener
from .game import ActivePiece, Direction, Game, NoActivePiece, Rotation
from .grid import Grid, Location
from .piece import Margins, Piece, compute_margins
from .scheduler import TickScheduler
from .shape import PieceKind, rotate_cell
from .unit import Unit
from .utils import render_frame, tick_interval_ms

__all__ = [
    "Board",
    "Grid",
    "Location",
    "Unit",
    "PieceKind",
    "Piece",
    "Margins",
    "Game",
    "GameConfig",
    "ScoringRules",
    "GameListener",
    "NullListener",
    "ActivePiece",
    "NoActivePiece",
    "Direction",
    "Rotation",
    "TickScheduler",
    "compute_margins",
    "render_frame",
    "rotate_cell",
    "tick_interval_ms",
]
