import itertools

import pytest

from blockfall.shape import PieceKind
from blockfall.unit import Unit


class RecordingListener:
    """Listener that records every notification as a tuple."""

    def __init__(self) -> None:
        self.events = []
        self._handles = itertools.count(1)

    def add_geometry(self, kind, location):
        handle = next(self._handles)
        self.events.append(("add", handle, kind, location))
        return handle

    def move_geometry(self, handle, location, animate):
        self.events.append(("move", handle, location, animate))

    def remove_geometry(self, handle):
        self.events.append(("remove", handle))

    def score_updated(self, score):
        self.events.append(("score", score))

    def game_over(self):
        self.events.append(("game_over",))

    def of(self, name):
        return [event for event in self.events if event[0] == name]

    def clear(self) -> None:
        self.events.clear()


class ScriptedRandom:
    """Stand-in for ``random.Random`` returning scripted kinds and rotations."""

    def __init__(self, kinds, rotations=(0,)) -> None:
        self._kinds = itertools.cycle(kinds)
        self._rotations = itertools.cycle(rotations)

    def choice(self, _seq):
        return next(self._kinds)

    def randrange(self, _stop):
        return next(self._rotations)


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_unit():
    # Board fixtures use uids far away from the ones a game hands out.
    uids = itertools.count(1000)

    def make(kind=PieceKind.SQUARE, handle=None):
        uid = next(uids)
        return Unit(uid, kind, handle if handle is not None else f"pre-{uid}")

    return make
