"""
Console front end for the minefield.

Reads the mine count and ``<column> <row> <action>`` moves from the
terminal, applies them to a game and redraws the field after each move.

Usage:
    minesweeper [--size N] [--mines N] [--seed N] [--log-level LEVEL]
"""
import argparse
import logging
from typing import Callable, List, Optional

import numpy as np

from .field import FieldConfig, Minefield
from .game import Game, GameState, Move, UserAction
from .render import render_field


logger = logging.getLogger(__name__)

Reader = Callable[[str], str]
Writer = Callable[[str], None]

GRID_SIZE = 9

MINE_COUNT_PROMPT = "How many mines do you want on the field? "
MOVE_PROMPT = "Set/unset mines marks or claim a cell as free: "
WIN_MESSAGE = "Congratulations! You found all mines!"
LOSS_MESSAGE = "You stepped on a mine and failed!"


# ============================================================================
# Input Parsing
# ============================================================================

def parse_mine_count(text: str) -> int:
    """Parse the requested mine count."""
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"Not a number: {text.strip()!r}") from None


def parse_move(text: str, size: int) -> Move:
    """
    Parse a ``<column> <row> <action>`` line.

    Coordinates are 1-indexed on input and converted to 0-indexed
    (row, col). Unknown actions parse to ``UserAction.NULL``.

    Args:
        text: Raw input line.
        size: Field size used for bounds checking.

    Returns:
        The parsed move.

    Raises:
        ValueError: Malformed line or coordinates outside 1..size.
    """
    parts = text.split()
    if len(parts) != 3:
        raise ValueError("Expected '<column> <row> <action>'")

    try:
        column, row = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError("Coordinates must be whole numbers") from None

    if not (1 <= column <= size and 1 <= row <= size):
        raise ValueError(f"Coordinates must be between 1 and {size}")

    return Move(row - 1, column - 1, UserAction.from_value(parts[2]))


# ============================================================================
# Game Loop
# ============================================================================

def ask_mine_count(size: int, read: Reader = input, write: Writer = print) -> int:
    """Prompt until a mine count valid for the field size is entered."""
    while True:
        text = read(MINE_COUNT_PROMPT)
        try:
            count = parse_mine_count(text)
            FieldConfig(size, count)
        except ValueError as error:
            write(str(error))
            continue
        return count


def play(game: Game, read: Reader = input, write: Writer = print) -> GameState:
    """
    Run the move loop until the game is won or lost.

    Args:
        game: Game to play.
        read: Prompt-and-read function (default: ``input``).
        write: Output function (default: ``print``).

    Returns:
        Final game state.
    """
    write(render_field(game.field))
    while game.is_playing:
        text = read(MOVE_PROMPT)
        try:
            move = parse_move(text, game.field.size)
        except ValueError as error:
            write(str(error))
            continue

        if move.action == UserAction.NULL:
            write("Action must be 'mine' or 'free'")
            continue

        game.play(move)
        write(render_field(game.field))

    write(WIN_MESSAGE if game.is_won else LOSS_MESSAGE)
    return game.state


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play on a square field in the terminal"
    )
    parser.add_argument(
        "--size", type=int, default=GRID_SIZE, help="Rows and columns of the field"
    )
    parser.add_argument(
        "--mines", type=int, default=None, help="Number of mines (prompted if omitted)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and play one game."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.size < 1:
        parser.error("--size must be positive")

    try:
        mines = args.mines
        if mines is None:
            mines = ask_mine_count(args.size, input, print)
        try:
            config = FieldConfig(args.size, mines)
        except ValueError as error:
            parser.error(str(error))

        rng = np.random.default_rng(args.seed)
        field = Minefield(config).configure(rng=rng)
        play(Game(field, rng=rng), input, print)
    except (EOFError, KeyboardInterrupt):
        logger.debug("Input closed, leaving game")
        return 1

    return 0
