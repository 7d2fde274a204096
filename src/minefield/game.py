"""
Game session module.

Applies player moves to a minefield, enforces the safe first reveal
and decides when the game is won or lost.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from .field import Minefield


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class UserAction(Enum):
    """Actions a player can request for a cell."""

    MINE = "mine"
    FREE = "free"
    NULL = ""

    @classmethod
    def from_value(cls, value: str) -> "UserAction":
        """Map input text to an action; unknown text becomes NULL."""
        for action in cls:
            if action.value == value:
                return action
        return cls.NULL


@dataclass(frozen=True)
class Move:
    """A player's move in 0-indexed field coordinates."""

    row: int
    col: int
    action: UserAction


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    One game on a configured minefield.

    The first FREE move that lands on a mine relocates that mine before
    the cell is revealed.
    """

    def __init__(
        self,
        field: Minefield,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize the game.

        Args:
            field: Configured minefield to play on.
            rng: Generator used for first-move relocation.
        """
        self.field = field
        self._rng = rng
        self._state = GameState.PLAYING
        self._first_free = True

    def play(self, move: Move) -> GameState:
        """
        Apply one move and return the resulting game state.

        Moves after the game has ended and NULL moves change nothing.

        Raises:
            OutOfBoundsError: Move coordinates lie outside the field.
        """
        if self._state != GameState.PLAYING:
            return self._state

        if move.action == UserAction.MINE:
            self.field.mark_mine(move.row, move.col)
        elif move.action == UserAction.FREE:
            if not self._free(move.row, move.col):
                self._state = GameState.LOST
                return self._state
        else:
            return self._state

        if self.field.is_all_cells_explored() or self.field.is_all_valid_mines_marked():
            self._state = GameState.WON
            logger.info("Game won")
        return self._state

    def _free(self, row: int, col: int) -> bool:
        if self._first_free and self.field.is_mine_cell(row, col):
            logger.debug("First reveal hit a mine at (%d, %d)", row, col)
            self.field.reconfigure_mine_on(row, col, rng=self._rng)
        successful = self.field.free_cell(row, col, user_initiated=True)
        self._first_free = False
        return successful

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state == GameState.LOST
