"""
Gymnasium environment wrapper for the minefield.

Exposes a game as a standard reset/step interface for scripted or
learning players.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import FieldConfig, Minefield
from .game import Game, Move, UserAction
from .render import render_field


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = mine shown after a loss

    Actions:
        Discrete action space of size 2 * size * size.
        Action i < size * size frees cell (i // size, i % size); the
        second half toggles the flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action on a revealed cell
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Field configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.render_mode = render_mode
        self.field = Minefield(self.config)
        self.game = Game(self.field)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.size, self.config.size),
            dtype=np.int8,
        )
        self._cell_count = self.config.size * self.config.size
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.field = Minefield(self.config).configure(rng=self.np_random)
        self.game = Game(self.field, rng=self.np_random)
        self._steps = 0

        return self.field.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        move = self._action_to_move(int(action))
        self._steps += 1

        reward = self._calculate_reward(move)
        terminated = not self.game.is_playing

        return self.field.get_observation(), reward, terminated, False, self._get_info()

    def _action_to_move(self, action: int) -> Move:
        """Convert flat action index to a move."""
        kind = UserAction.FREE if action < self._cell_count else UserAction.MINE
        row, col = divmod(action % self._cell_count, self.config.size)
        return Move(row, col, kind)

    def _calculate_reward(self, move: Move) -> float:
        """Apply the move and score its outcome."""
        cell = self.field.get_cell(move.row, move.col)
        if cell.revealed or not self.game.is_playing:
            return -0.1

        self.game.play(move)

        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        return 1.0 if move.action == UserAction.FREE else 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "mines": self.field.num_mines,
            "game_state": self.game.state.name,
            "valid_actions": len(self.field.get_unrevealed_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current field."""
        if self.render_mode == "ansi":
            return render_field(self.field)
        if self.render_mode == "human":
            print(render_field(self.field))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.field.get_unrevealed_positions():
            index = row * self.config.size + col
            mask[index] = True
            mask[self._cell_count + index] = True
        return mask
