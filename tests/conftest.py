"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, FieldConfig, Game, Minefield


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible placement."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_field(rng: np.random.Generator) -> Minefield:
    """Create a randomly configured 9x9 field with 10 mines."""
    return Minefield().configure(rng=rng)


@pytest.fixture
def single_mine_field() -> Minefield:
    """Create a 9x9 field with one mine in the center."""
    return Minefield(FieldConfig(9, 1)).configure(mines=[(4, 4)])


@pytest.fixture
def corner_field() -> Minefield:
    """
    Create a 5x5 field with mines in two corners.

    Layout (M = mine):
        M . . . .
        . . . . .
        . . . . .
        . . . . .
        . . . . M
    """
    return Minefield(FieldConfig(5, 2)).configure(mines=[(0, 0), (4, 4)])


@pytest.fixture
def walled_field() -> Minefield:
    """
    Create a 5x5 field split by a column of mines.

    Layout (M = mine):
        . . M . .
        . . M . .
        . . M . .
        . . M . .
        . . M . .
    """
    mines = [(row, 2) for row in range(5)]
    return Minefield(FieldConfig(5, 5)).configure(mines=mines)


@pytest.fixture
def empty_field() -> Minefield:
    """Create a field with no mines for cascade testing."""
    return Minefield(FieldConfig(5, 0)).configure(mines=[])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def corner_game(corner_field: Minefield) -> Game:
    """Create a game on the corner field."""
    return Game(corner_field, rng=np.random.default_rng(7))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def numbered_cell() -> Cell:
    """Create an unrevealed cell with adjacent mines."""
    return Cell(adjacent_mines=3)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> FieldConfig:
    """Create a valid field configuration."""
    return FieldConfig(9, 10)
