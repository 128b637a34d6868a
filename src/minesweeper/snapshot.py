"""
Read-only views of a game session for drivers to render.

Snapshots are plain frozen copies; nothing in them refers back to the
live board, and the mine identity of unopened cells is withheld while
the game is still being played.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from .cell import CellState

if TYPE_CHECKING:
    from .session import Phase


# Observation codes shared with the environment.
OBS_CLOSED = -1
OBS_FLAGGED = -2
OBS_MINE = 9


@dataclass(frozen=True)
class CellView:
    """
    What a driver may know about one cell.

    Attributes:
        state: Closed, open or flagged.
        is_mine: Mine flag when the cell is open or the game is lost,
            otherwise None.
        neighbor_mines: Adjacent mine count for an open safe cell,
            otherwise None.
    """

    state: CellState
    is_mine: Optional[bool] = None
    neighbor_mines: Optional[int] = None

    def to_observation(self) -> int:
        """
        Encode the view as a single integer.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Open cell with adjacent mine count
            9: Open mine
        """
        if self.state == CellState.CLOSED:
            return OBS_CLOSED
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_mines


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable picture of a session after an action."""

    width: int
    height: int
    phase: "Phase"
    mines_remaining: int
    elapsed_seconds: Optional[float]
    cells: Tuple[Tuple[CellView, ...], ...]

    def cell(self, x: int, y: int) -> CellView:
        """Get the view of the cell at column x, row y."""
        return self.cells[y][x]

    def to_observation(self) -> np.ndarray:
        """Encode the grid as an int8 array of shape (height, width)."""
        obs = np.empty((self.height, self.width), dtype=np.int8)
        for y, row in enumerate(self.cells):
            for x, view in enumerate(row):
                obs[y, x] = view.to_observation()
        return obs
