"""
Minefield module.

Implements the square grid with its mine registry, mine placement,
cascading reveal, flag marking and the terminal-condition queries.
"""
import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# Mine counts above this share of the grid are laid out by row scan
DENSE_FILL = Fraction(60, 81)


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside the field."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"Invalid coordinate ({row}, {col}) for a {size}x{size} field"
        )
        self.row = row
        self.col = col
        self.size = size


@dataclass
class FieldConfig:
    """
    Configuration for a minefield.

    Attributes:
        size: Number of rows and columns.
        num_mines: Requested number of mines.
    """

    size: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Field size must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.size * self.size - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


@dataclass
class Mine:
    """Registry record for one mine and whether the player flagged it."""

    row: int
    col: int
    flagged: bool = False

    @property
    def position(self) -> Position:
        return self.row, self.col


# ============================================================================
# Minefield Class
# ============================================================================

@dataclass
class Minefield:
    """
    Square minesweeper grid plus its mine registry.

    The registry is the authoritative record of mine positions and their
    flagged status. Cells mirror it through ``is_mine``; both are only
    changed by ``_add_mine`` and ``_remove_mine``.
    """

    config: FieldConfig = field(default_factory=FieldConfig)
    seed: Optional[int] = None
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines: Dict[Position, Mine] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        """Create the generator and an empty grid."""
        self._rng = np.random.default_rng(self.seed)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells and clear the registry."""
        self._grid = [
            [Cell(row, col) for col in range(self.size)]
            for row in range(self.size)
        ]
        self._mines = {}

    def configure(
        self,
        mines: Optional[Iterable[Position]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Minefield":
        """
        Lay out mines and compute adjacency counts.

        Args:
            mines: Explicit (row, col) mine positions. When given, random
                placement is skipped and the mine count becomes the
                number of positions.
            rng: Generator for random placement (default: the field's own).

        Returns:
            The field itself, for chaining.

        Raises:
            OutOfBoundsError: An explicit position lies outside the grid.
            ValueError: An explicit position is listed twice.
        """
        self._init_grid()
        if mines is not None:
            for row, col in mines:
                self._check_bounds(row, col)
                if (row, col) in self._mines:
                    raise ValueError(f"Duplicate mine at ({row}, {col})")
                self._add_mine(row, col)
        else:
            self._place_mines(rng or self._rng)

        self._calculate_adjacent_mines()
        logger.debug(
            "Configured %dx%d field with %d mines",
            self.size, self.size, self.num_mines,
        )
        return self

    def _place_mines(self, rng: np.random.Generator) -> None:
        """Place the requested number of mines."""
        count = self.config.num_mines
        if count > DENSE_FILL * self.size * self.size:
            self._place_mines_in_order(count)
        else:
            self._place_mines_at_random(count, rng)

    def _place_mines_in_order(self, count: int) -> None:
        """Fill the first ``count`` cells, scanning rows then columns."""
        for row in range(self.size):
            for col in range(self.size):
                if len(self._mines) == count:
                    return
                self._add_mine(row, col)

    def _place_mines_at_random(
        self, count: int, rng: np.random.Generator
    ) -> None:
        """Sample positions uniformly over the grid, retrying collisions."""
        while len(self._mines) < count:
            row, col = self._random_position(rng)
            if (row, col) not in self._mines:
                self._add_mine(row, col)

    def _random_position(self, rng: np.random.Generator) -> Position:
        row, col = rng.integers(0, self.size, size=2)
        return int(row), int(col)

    def _add_mine(self, row: int, col: int) -> None:
        cell = self._grid[row][col]
        cell.is_mine = True
        self._mines[(row, col)] = Mine(row, col, flagged=cell.is_flagged)

    def _remove_mine(self, row: int, col: int) -> None:
        del self._mines[(row, col)]
        cell = self._grid[row][col]
        cell.is_mine = False
        cell.state = CellState.DEFAULT

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self._iter_cells():
            cell.adjacent_mines = self._count_adjacent_mines(cell.row, cell.col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor in self._get_neighbors(row, col):
            if neighbor in self._mines:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within field bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise OutOfBoundsError(row, col, self.size)

    def _iter_cells(self) -> Iterator[Cell]:
        for grid_row in self._grid:
            yield from grid_row

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def mark_mine(self, row: int, col: int) -> bool:
        """
        Toggle the flag on an unrevealed cell.

        The registry entry of a mine at this position follows the flag.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the flag was toggled, False if the cell is revealed.

        Raises:
            OutOfBoundsError: Position lies outside the grid.
        """
        self._check_bounds(row, col)
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False

        mine = self._mines.get((row, col))
        if mine is not None:
            mine.flagged = cell.is_flagged
        return True

    def free_cell(
        self, row: int, col: int, user_initiated: bool = True
    ) -> bool:
        """
        Reveal a cell and cascade through its non-mine region.

        Every revealed cell, numbered or blank, passes the reveal on to
        its neighbors; mines stop the cascade and are never revealed by it.

        Args:
            row: Row index.
            col: Column index.
            user_initiated: False for automatic reveals, which never lose.

        Returns:
            False if the player stepped on a mine, True otherwise.

        Raises:
            OutOfBoundsError: Position lies outside the grid.
        """
        self._check_bounds(row, col)
        if (row, col) in self._mines:
            if user_initiated:
                logger.info("Stepped on mine at (%d, %d)", row, col)
                self._reveal_all_mines()
                return False
            return True

        pending = [(row, col)]
        while pending:
            current_row, current_col = pending.pop()
            cell = self._grid[current_row][current_col]
            if cell.revealed or cell.is_mine:
                continue

            cell.revealed = True
            if cell.adjacent_mines > 0:
                cell.state = CellState.NUMBER
            else:
                cell.state = CellState.SAFE

            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                if not self._grid[neighbor_row][neighbor_col].revealed:
                    pending.append((neighbor_row, neighbor_col))
        return True

    def _reveal_all_mines(self) -> None:
        """Show every mine after a loss."""
        for row, col in self._mines:
            self._grid[row][col].state = CellState.MINE

    def reconfigure_mine_on(
        self,
        row: int,
        col: int,
        new_position: Optional[Position] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> Position:
        """
        Move the mine at (row, col) elsewhere and recompute counts.

        Used so that the player's first reveal can never lose.

        Args:
            row: Row index of the existing mine.
            col: Column index of the existing mine.
            new_position: Explicit replacement position. Drawn at random
                among free cells when omitted.
            rng: Generator for the random draw (default: the field's own).

        Returns:
            The (row, col) of the relocated mine.

        Raises:
            OutOfBoundsError: A position lies outside the grid.
            ValueError: No mine at (row, col), the replacement is not a
                free cell, or no free cell exists.
        """
        self._check_bounds(row, col)
        if (row, col) not in self._mines:
            raise ValueError(f"No mine at ({row}, {col}) to relocate")

        if new_position is not None:
            new_row, new_col = new_position
            self._check_bounds(new_row, new_col)
            if (new_row, new_col) in self._mines:
                raise ValueError(
                    f"Cannot relocate mine onto ({new_row}, {new_col})"
                )
        else:
            new_row, new_col = self._random_free_position(rng or self._rng)

        self._remove_mine(row, col)
        self._add_mine(new_row, new_col)
        self._calculate_adjacent_mines()
        logger.info(
            "Relocated mine from (%d, %d) to (%d, %d)",
            row, col, new_row, new_col,
        )
        return new_row, new_col

    def _random_free_position(self, rng: np.random.Generator) -> Position:
        """Draw a position holding no mine, retrying on collision."""
        if len(self._mines) >= self.size * self.size:
            raise ValueError("No free cell left for a mine")
        while True:
            position = self._random_position(rng)
            if position not in self._mines:
                return position

    # ========================================================================
    # Terminal Conditions (High-level)
    # ========================================================================

    def is_all_valid_mines_marked(self) -> bool:
        """
        Check that every mine is flagged and nothing else is.

        Both the registry flags and the number of flagged cells on the
        grid must agree with the registry size.
        """
        if not all(mine.flagged for mine in self._mines.values()):
            return False
        flagged_cells = sum(1 for cell in self._iter_cells() if cell.is_flagged)
        return flagged_cells == len(self._mines)

    def is_all_cells_explored(self) -> bool:
        """Check if every non-mine cell has been revealed."""
        return all(
            cell.revealed for cell in self._iter_cells() if not cell.is_mine
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def num_mines(self) -> int:
        """Current number of mines (equals the registry size)."""
        return len(self._mines)

    @property
    def mines(self) -> List[Mine]:
        """Registry records, in placement order."""
        return list(self._mines.values())

    def is_mine_cell(self, row: int, col: int) -> bool:
        """Check if a mine sits at position (False outside the grid)."""
        return (row, col) in self._mines

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_unrevealed_positions(self) -> List[Position]:
        """Positions a player can still act on."""
        return [
            (cell.row, cell.col)
            for cell in self._iter_cells()
            if not cell.revealed and cell.state != CellState.MINE
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get field state as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine shown after a loss
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for cell in self._iter_cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs
