"""
Minefield package.

Provides the minesweeper grid model, game session, text rendering,
console front end and a Gymnasium environment.
"""
from .cell import Cell, CellState
from .field import FieldConfig, Mine, Minefield, OutOfBoundsError
from .game import Game, GameState, Move, UserAction
from .render import render_field
from .environment import MinefieldEnv

__all__ = [
    "Cell",
    "CellState",
    "FieldConfig",
    "Mine",
    "Minefield",
    "OutOfBoundsError",
    "Game",
    "GameState",
    "Move",
    "UserAction",
    "render_field",
    "MinefieldEnv",
]
