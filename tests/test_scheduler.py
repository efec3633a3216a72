import pytest

from blockfall.config import GameConfig
from blockfall.game import Game
from blockfall.grid import Location
from blockfall.scheduler import TickScheduler
from blockfall.shape import PieceKind
from blockfall.utils import tick_interval_ms


def make_scheduler(clock, listener, rng, **config):
    game = Game(GameConfig(**config), listener=listener, rng=rng)
    return TickScheduler(game, clock=clock)


def test_start_arms_first_tick(clock, listener, scripted):
    scheduler = make_scheduler(clock, listener, scripted([PieceKind.SQUARE]))
    assert not scheduler.armed
    scheduler.start()
    assert scheduler.armed
    assert scheduler.deadline == pytest.approx(tick_interval_ms(1) / 1000.0)
    assert scheduler.game.running


def test_poll_fires_only_when_due(clock, listener, scripted):
    scheduler = make_scheduler(clock, listener, scripted([PieceKind.SQUARE]))
    scheduler.start()
    clock.advance(0.5)
    assert scheduler.poll() == 0
    assert scheduler.game.active.anchor == Location(3, -3)
    clock.advance(0.5)
    assert scheduler.poll() == 1
    assert scheduler.game.active.anchor == Location(3, -2)


def test_poll_catches_up_on_missed_ticks(clock, listener, scripted):
    scheduler = make_scheduler(clock, listener, scripted([PieceKind.SQUARE]))
    scheduler.start()
    clock.advance(5.0)
    assert scheduler.poll() == 5
    assert scheduler.ticks == 5
    assert scheduler.game.active.anchor == Location(3, 2)
    assert scheduler.deadline > clock.current


def test_interval_shrinks_after_each_spawn(clock, listener, scripted):
    scheduler = make_scheduler(
        clock,
        listener,
        scripted([PieceKind.SQUARE]),
        width=4,
        height=4,
        base_tick_interval_ms=100.0,
        min_tick_interval_ms=10.0,
        ramp_spawns=2,
    )
    scheduler.start()
    assert scheduler.deadline == pytest.approx(0.055)
    # Four ticks drop the square onto the floor, the fifth locks it.
    clock.advance(0.28)
    assert scheduler.poll() == 5
    assert scheduler.game.pieces_spawned == 2
    assert scheduler.deadline == pytest.approx(0.285)


def test_game_over_disarms_timer(clock, listener, scripted, make_unit):
    scheduler = make_scheduler(clock, listener, scripted([PieceKind.SQUARE]), width=4, height=8)
    scheduler.start()
    scheduler.game.board.set(1, 0, make_unit())
    clock.advance(10.0)
    assert scheduler.poll() == 1
    assert not scheduler.armed
    assert listener.of("game_over") == [("game_over",)]
    clock.advance(10.0)
    assert scheduler.poll() == 0


def test_cancel_stops_ticks(clock, listener, scripted):
    scheduler = make_scheduler(clock, listener, scripted([PieceKind.SQUARE]))
    scheduler.start()
    scheduler.cancel()
    clock.advance(10.0)
    assert scheduler.poll() == 0
    assert scheduler.game.active.anchor == Location(3, -3)
