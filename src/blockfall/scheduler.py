"""Host-side gravity timer.

:class:`TickScheduler` is a one-shot timer that is re-armed after every tick
with the interval the game asks for, so the fall speed follows the difficulty
ramp.  It never runs on its own: the host's loop calls :meth:`poll`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .game import Game


LOGGER = logging.getLogger(__name__)


class TickScheduler:
    """Drive :meth:`Game.tick` from a clock measured in seconds."""

    def __init__(self, game: Game, *, clock: Optional[Callable[[], float]] = None) -> None:
        self.game = game
        self._clock = clock or time.perf_counter
        self.deadline: Optional[float] = None
        self.ticks = 0

    @property
    def armed(self) -> bool:
        return self.deadline is not None

    def _rearm(self, now: float) -> None:
        interval = self.game.next_tick_interval()
        if interval is None:
            if self.deadline is not None:
                LOGGER.debug("Game stopped; timer disarmed after %d ticks", self.ticks)
            self.deadline = None
            return
        self.deadline = now + interval / 1000.0

    def start(self) -> None:
        """Start a new game and arm the first tick."""

        self.ticks = 0
        self.game.start()
        self._rearm(self._clock())

    def cancel(self) -> None:
        """Invalidate the pending tick."""

        self.deadline = None

    def poll(self) -> int:
        """Fire every tick that is due and return how many fired.

        Each tick re-arms the timer relative to the previous deadline so a
        slow host loop catches up instead of drifting.
        """

        fired = 0
        now = self._clock()
        while self.deadline is not None and now >= self.deadline:
            due = self.deadline
            self.game.tick()
            fired += 1
            self.ticks += 1
            self._rearm(due)
        return fired
