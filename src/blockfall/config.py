"""Construction-time configuration for a game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import HEIGHT, WIDTH
from .shape import SHAPE_SIZE


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded on every lock.

    ``line_bonuses[n]`` is the bonus for clearing ``n`` rows at once and
    ``lock_increment`` is added for every lock, including ones that clear
    nothing.
    """

    line_bonuses: Tuple[int, ...] = (0, 100, 300, 500, 800)
    lock_increment: int = 10

    def __post_init__(self) -> None:
        if not self.line_bonuses:
            raise ValueError("line_bonuses must not be empty")
        if any(bonus < 0 for bonus in self.line_bonuses) or self.lock_increment < 0:
            raise ValueError("Scores must be non-negative")

    def points_for(self, lines: int) -> int:
        """Return the points for a lock that cleared ``lines`` rows."""

        if lines < 0:
            raise ValueError(f"Negative line count: {lines}")
        # More rows than a piece can span only happen on unusual board sizes.
        index = min(lines, len(self.line_bonuses) - 1)
        return self.line_bonuses[index] + self.lock_increment


@dataclass(frozen=True)
class GameConfig:
    """Board size, fall timing and scoring for a :class:`~blockfall.game.Game`.

    The tick interval falls linearly from ``base_tick_interval_ms`` to
    ``min_tick_interval_ms`` over the first ``ramp_spawns`` pieces.
    """

    width: int = WIDTH
    height: int = HEIGHT
    piece_size: int = SHAPE_SIZE
    base_tick_interval_ms: float = 1000.0
    min_tick_interval_ms: float = 150.0
    ramp_spawns: int = 200
    seed: Optional[int] = None
    scoring: ScoringRules = field(default_factory=ScoringRules)

    def __post_init__(self) -> None:
        if self.piece_size != SHAPE_SIZE:
            raise ValueError(f"piece_size must be {SHAPE_SIZE}")
        if self.width < self.piece_size or self.height < self.piece_size:
            raise ValueError(
                f"Board must be at least {self.piece_size}x{self.piece_size}, "
                f"got {self.width}x{self.height}"
            )
        if self.min_tick_interval_ms <= 0:
            raise ValueError("min_tick_interval_ms must be positive")
        if self.base_tick_interval_ms < self.min_tick_interval_ms:
            raise ValueError("base_tick_interval_ms must not be below min_tick_interval_ms")
        if self.ramp_spawns <= 0:
            raise ValueError("ramp_spawns must be positive")
