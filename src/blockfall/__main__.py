"""Replay a command sequence against the engine and print the board.

Run with: `python -m blockfall --seed 3 --commands "LLCDRRDTT"`

Commands: ``L``/``R`` move, ``C``/``W`` rotate clockwise/counter-clockwise,
``S`` soft drop, ``D`` hard drop and ``T`` gravity tick.  Useful as a quick
smoke test and for reproducing rule bugs from a seed.
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

from .config import GameConfig
from .game import Direction, Game, Rotation


LOGGER = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[[Game], object]] = {
    "L": lambda game: game.move_piece(Direction.LEFT),
    "R": lambda game: game.move_piece(Direction.RIGHT),
    "C": lambda game: game.rotate_piece(Rotation.CLOCKWISE),
    "W": lambda game: game.rotate_piece(Rotation.COUNTER_CLOCKWISE),
    "S": lambda game: game.soft_drop(),
    "D": lambda game: game.drop_piece(),
    "T": lambda game: game.tick(),
}


def _commands(value: str) -> str:
    value = "".join(value.split()).upper()
    unknown = sorted(set(value) - set(COMMANDS))
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown command(s): {', '.join(unknown)}")
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for piece selection.")
    parser.add_argument("--width", type=int, default=GameConfig.width, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=GameConfig.height, help="Board height in cells.")
    parser.add_argument("--commands", type=_commands, default="", help="Command sequence to replay.")
    parser.add_argument(
        "--frames",
        action="store_true",
        help="Print the board after every command instead of only at the end.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def run(game: Game, commands: str, *, frames: bool = False) -> None:
    game.start()
    for index, command in enumerate(commands, start=1):
        if not game.running:
            LOGGER.info("Game over after %d of %d commands", index - 1, len(commands))
            break
        COMMANDS[command](game)
        if frames:
            print(f"-- {index}: {command} (score {game.score})")
            print(game.frame())
    print(game.frame())
    print(f"Score: {game.score}  Pieces: {game.pieces_spawned}  Running: {game.running}")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")
    try:
        config = GameConfig(width=args.width, height=args.height, seed=args.seed)
    except ValueError as exc:
        raise SystemExit(f"blockfall: {exc}")
    run(Game(config), args.commands, frames=args.frames)


if __name__ == "__main__":
    main()
