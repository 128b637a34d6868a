"""
Board module for Minesweeper game.

Implements the cell grid with deferred mine placement, neighbor counting
and the cascade ("flood") open.
"""
import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

# Side length of the mine-free square around the first opened cell.
SAFE_ZONE_SIZE = 3
SAFE_ZONE_CELLS = SAFE_ZONE_SIZE * SAFE_ZONE_SIZE


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        # The first click must always be able to clear a full 3x3 zone.
        max_mines = self.width * self.height - SAFE_ZONE_CELLS
        if self.mine_count > max_mines:
            raise ValueError(
                f"Too many mines for a {self.width}x{self.height} board "
                f"(max {max(max_mines, 0)})"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @classmethod
    def from_name(cls, name: str) -> "BoardConfig":
        """Look up a preset difficulty by name (case-insensitive)."""
        try:
            return DIFFICULTIES[name.lower()]
        except KeyError:
            choices = ", ".join(DIFFICULTIES)
            raise ValueError(
                f"Unknown difficulty {name!r} (choose from {choices})"
            ) from None


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper grid.

    Cells are addressed by ``(x, y)`` where ``x`` is the column and ``y``
    the row. The board knows nothing about phases, flags counters or
    time; those live on the session that owns it.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(width)] for _ in range(height)
        ]
        self.mines_placed = False

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at an in-bounds position."""
        return self._grid[y][x]

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for the up-to-8 in-bounds neighbors.
        """
        result = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    result.append((new_x, new_y))
        return result

    def positions(self) -> Iterator[Position]:
        """Iterate over every position in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for nx, ny in self.neighbors(x, y) if self._grid[ny][nx].has_mine
        )

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def place_mines_avoiding(
        self, x: int, y: int, mine_count: int, rng: random.Random
    ) -> None:
        """
        Place mines uniformly at random outside the 3x3 zone around (x, y).

        Args:
            x: Column of the first opened cell.
            y: Row of the first opened cell.
            mine_count: Number of mines to place.
            rng: Random generator owned by the caller.
        """
        candidates = [
            (cx, cy) for cx, cy in self.positions()
            if max(abs(cx - x), abs(cy - y)) > 1
        ]
        self.place_mines(rng.sample(candidates, mine_count))

    def place_mines(self, positions: Iterable[Position]) -> None:
        """
        Place mines at explicit positions and compute neighbor counts.

        Raises:
            ValueError: If a position is out of bounds or repeated.
            RuntimeError: If mines were already placed.
        """
        if self.mines_placed:
            raise RuntimeError("Mines have already been placed")
        positions = list(positions)
        if len(set(positions)) != len(positions):
            raise ValueError("Mine positions must be distinct")
        for x, y in positions:
            if not self.in_bounds(x, y):
                raise ValueError(f"Mine position ({x}, {y}) is out of bounds")

        for x, y in positions:
            self._grid[y][x].has_mine = True
        self._calculate_adjacent_mines()
        self.mines_placed = True
        logger.debug("Placed %d mines on %dx%d board",
                     len(positions), self.width, self.height)
        self._check_invariants(len(positions))

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for x, y in self.positions():
            cell = self._grid[y][x]
            if not cell.has_mine:
                cell.neighbor_mines = self.count_adjacent_mines(x, y)

    def _check_invariants(self, mine_count: int) -> None:
        assert self.mine_total() == mine_count, "mine count drift"
        for x, y in self.positions():
            cell = self._grid[y][x]
            if not cell.has_mine:
                assert cell.neighbor_mines == self.count_adjacent_mines(x, y), (
                    f"neighbor count mismatch at ({x}, {y})"
                )

    # ========================================================================
    # Opening
    # ========================================================================

    def flood_open(self, x: int, y: int) -> int:
        """
        Open a closed cell and cascade through zero-count cells.

        Uses an explicit stack; a position only acts when its cell is still
        closed, so every cell is opened at most once and flagged cells stop
        the cascade.

        Returns:
            Number of cells opened.
        """
        opened = 0
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            cell = self._grid[cy][cx]
            if not cell.open():
                continue
            opened += 1
            if not cell.has_mine and cell.neighbor_mines == 0:
                stack.extend(self.neighbors(cx, cy))
        return opened

    def reveal_mines(self) -> None:
        """Force every mine cell open, flagged or not."""
        for x, y in self.positions():
            cell = self._grid[y][x]
            if cell.has_mine:
                cell.force_open()

    # ========================================================================
    # Derived State
    # ========================================================================

    def all_safe_cells_open(self) -> bool:
        """Check if every non-mine cell is open."""
        return all(
            cell.state == CellState.OPEN
            for row in self._grid
            for cell in row
            if not cell.has_mine
        )

    def mine_total(self) -> int:
        """Count cells holding a mine."""
        return sum(1 for row in self._grid for cell in row if cell.has_mine)
