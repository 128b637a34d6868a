"""
Cell module for Minesweeper game.

Represents individual grid positions with their state
(closed/open/flagged) and content (mine/neighbor count).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    OPEN = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell contains a mine.
        neighbor_mines: Count of mines in neighboring cells (0-8).
            Only meaningful when the cell has no mine.
        state: Current visual state (closed, open, or flagged).
    """

    has_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.CLOSED

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if the cell was closed and is now open, False if it
            was already open or is flagged.
        """
        if self.state != CellState.CLOSED:
            return False
        self.state = CellState.OPEN
        return True

    def force_open(self) -> None:
        """Open the cell regardless of its current state."""
        self.state = CellState.OPEN

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is open.
        """
        if self.state == CellState.OPEN:
            return False
        if self.state == CellState.CLOSED:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.CLOSED
        return True

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.state == CellState.CLOSED

    @property
    def is_open(self) -> bool:
        """Check if cell is open."""
        return self.state == CellState.OPEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED
