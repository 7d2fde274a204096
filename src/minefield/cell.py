"""
Cell module for the minefield.

Represents individual grid positions with their display state
(default/flagged/revealed/mine) and content (mine/adjacent count).
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible display states of a cell, each with its marker."""

    DEFAULT = "."
    FLAGGED = "*"
    MINE = "X"
    SAFE = "/"
    NUMBER = "0"

    @property
    def marker(self) -> str:
        """Display character for this state."""
        return self.value


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    Attributes:
        row: Row index (0-based).
        col: Column index (0-based).
        state: Current display state.
        revealed: Whether the cell has been opened. Never reset once set.
        is_mine: Mirror of the field's mine registry for this position.
        adjacent_mines: Count of mines in neighboring cells (0-8).
    """

    row: int = 0
    col: int = 0
    state: CellState = CellState.DEFAULT
    revealed: bool = False
    is_mine: bool = False
    adjacent_mines: int = 0

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed
            or already shown as a mine.
        """
        if self.revealed or self.state == CellState.MINE:
            return False
        if self.state == CellState.FLAGGED:
            self.state = CellState.DEFAULT
        else:
            self.state = CellState.FLAGGED
        return True

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def glyph(self) -> str:
        """Single character shown for this cell."""
        if self.state == CellState.NUMBER:
            return str(self.adjacent_mines)
        return self.state.marker

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine shown after a loss
        """
        if self.state == CellState.MINE:
            return 9
        if self.state == CellState.FLAGGED:
            return -2
        if not self.revealed:
            return -1
        return self.adjacent_mines
