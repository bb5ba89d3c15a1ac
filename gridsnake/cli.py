"""
cli.py — Command-line entry point.

Options seed the setup screen; the player can still change them there.
"""

import argparse
import logging
import random

from .controller import GameController
from .model import GameModel
from .settings import GameSettings, InvalidOption, BOARD_SIZE_VALUES, TICK_VALUES


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gridsnake", description="Single-player grid snake.")
    parser.add_argument("--board-size", type=int, default=20,
                        help=f"Cells per side, one of {BOARD_SIZE_VALUES}")
    parser.add_argument("--speed", type=int, default=150,
                        help=f"Tick interval in ms, one of {TICK_VALUES}")
    parser.add_argument("--color", default="Green",
                        help="Snake colour name or hex value from the palette")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed food placement for a reproducible run")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    try:
        args.settings = GameSettings(args.board_size, args.speed, args.color)
    except InvalidOption as exc:
        parser.error(str(exc))
    return args


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    model = GameModel(rng=random.Random(args.seed), settings=args.settings)
    GameController(model).run()
