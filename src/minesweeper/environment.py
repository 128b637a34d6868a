"""
Gymnasium environment wrapper for Minesweeper.

Drives a game session through the standard RL interface. The environment
is a driver like any other: it only calls session actions and reads
snapshots.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import CellState
from .session import GameSession, Phase
from .snapshot import OBS_CLOSED, OBS_FLAGGED, OBS_MINE, SessionSnapshot


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = closed cell
        - -2 = flagged cell
        - 0-8 = open cell with adjacent mine count
        - 9 = open mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height opens cell (i % width, i // width);
        the second half toggles a flag on cell i - width * height.

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for opening a mine
        - 0 for toggling a flag
        - -0.1 for an action that was ignored
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.session = GameSession(self.config)
        self._num_cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_MINE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        # One open action and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._num_cells)

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
            options: May contain "config", a BoardConfig or preset name
                with the same dimensions as the environment.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)

        config = self.config
        if options and options.get("config") is not None:
            config = self._resolve_config(options["config"])

        session_seed = int(self.np_random.integers(0, 2**32))
        self.session = GameSession(config, seed=session_seed)
        self._steps = 0

        snapshot = self.session.snapshot()
        return snapshot.to_observation(), self._get_info(snapshot)

    def _resolve_config(self, value: Union[BoardConfig, str]) -> BoardConfig:
        config = BoardConfig.from_name(value) if isinstance(value, str) else value
        if (config.width, config.height) != (self.config.width, self.config.height):
            raise ValueError(
                "Board dimensions cannot change between episodes; "
                "create a new environment instead"
            )
        return config

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open, or cell index plus
                width * height to toggle a flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        is_flag, x, y = self._decode_action(int(action))

        if is_flag:
            reward = self._flag_reward(x, y)
        else:
            reward = self._open_reward(x, y)

        snapshot = self.session.snapshot()
        terminated = snapshot.phase != Phase.PLAYING
        return (
            snapshot.to_observation(),
            reward,
            terminated,
            False,
            self._get_info(snapshot),
        )

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Split a flat action into (is_flag, x, y)."""
        is_flag = action >= self._num_cells
        index = action - self._num_cells if is_flag else action
        return is_flag, index % self.config.width, index // self.config.width

    def _open_reward(self, x: int, y: int) -> float:
        if not self.session.open(x, y):
            return -0.1
        if self.session.is_won:
            return 10.0
        if self.session.is_lost:
            return -10.0
        return 1.0

    def _flag_reward(self, x: int, y: int) -> float:
        # Flags are frozen once the game is over
        if not self.session.is_playing:
            return -0.1
        if not self.session.toggle_flag(x, y):
            return -0.1
        return 0.0

    def _get_info(self, snapshot: SessionSnapshot) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        opened = sum(
            1 for row in snapshot.cells for view in row
            if view.state == CellState.OPEN
        )
        return {
            "steps": self._steps,
            "opened": opened,
            "total_safe": self._num_cells - self.session.mine_count,
            "game_state": snapshot.phase.name,
            "mines_remaining": snapshot.mines_remaining,
            "elapsed_seconds": snapshot.elapsed_seconds,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.session.snapshot())
        if self.render_mode == "human":
            print(render_board(self.session.snapshot()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.session.is_playing:
            return mask
        obs = self.session.snapshot().to_observation().flatten()
        mask[:self._num_cells] = obs == OBS_CLOSED
        mask[self._num_cells:] = (obs == OBS_CLOSED) | (obs == OBS_FLAGGED)
        return mask


# ============================================================================
# Text Rendering
# ============================================================================

def cell_symbol(value: int) -> str:
    """Map an observation code to the character used on screen."""
    if value == OBS_CLOSED:
        return "."
    if value == OBS_FLAGGED:
        return "F"
    if value == OBS_MINE:
        return "*"
    if value == 0:
        return " "
    return str(value)


def render_board(snapshot: SessionSnapshot) -> str:
    """Render a snapshot as rows of space-separated cell symbols."""
    obs = snapshot.to_observation()
    return "\n".join(
        " ".join(cell_symbol(int(value)) for value in row) for row in obs
    )
