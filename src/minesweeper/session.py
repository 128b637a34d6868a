"""
Game session module for Minesweeper.

A session owns one board plus everything a single game needs around it:
the phase, the flag counter, the first-move flag and the timer. Drivers
talk to the engine exclusively through ``open``, ``toggle_flag``,
``reset`` and ``snapshot``.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, Iterable, Optional

from .board import Board, BoardConfig, Position
from .cell import CellState
from .snapshot import CellView, SessionSnapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


# ============================================================================
# Constants
# ============================================================================

class Phase(Enum):
    """Possible phases of a game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Session Class
# ============================================================================

class GameSession:
    """
    Single-player Minesweeper game.

    Mines are placed on the first accepted open so that the opened cell
    and its eight neighbors are always safe. Invalid actions (out of
    bounds, wrong cell state) are ignored and reported by a False return
    value rather than an exception.

    Args:
        config: Validated board configuration.
        rng: Random generator used for mine placement. Takes precedence
            over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.config = config or BoardConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.clock = clock

        self.board = Board(self.config.width, self.config.height)
        self.phase = Phase.PLAYING
        self.mine_count = self.config.mine_count
        self.mines_remaining = self.config.mine_count
        self.first_move_pending = True
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None

    # ========================================================================
    # Actions
    # ========================================================================

    def open(self, x: int, y: int) -> bool:
        """
        Open the cell at column x, row y.

        On the first accepted open, places mines outside the 3x3 zone
        around the cell and starts the timer. Opening a mine loses the
        game and reveals every mine; opening a zero-count cell cascades.

        Returns:
            True if the action changed the game, False if it was ignored.
        """
        if self.phase != Phase.PLAYING:
            return False
        if not self.board.in_bounds(x, y):
            return False
        if not self.board.cell(x, y).is_closed:
            return False

        if self.first_move_pending:
            self.board.place_mines_avoiding(x, y, self.mine_count, self.rng)
            self._start()

        self.board.flood_open(x, y)

        if self.board.cell(x, y).has_mine:
            self.board.reveal_mines()
            self._finish(Phase.LOST)
            return True

        if self.board.all_safe_cells_open():
            self._finish(Phase.WON)
        return True

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Flag a closed cell or unflag a flagged one.

        The counter is a plain flag counter: it goes down on every flag
        and may become negative. Phase is not checked here.

        Returns:
            True if the flag was toggled, False if it was ignored.
        """
        if not self.board.in_bounds(x, y):
            return False
        cell = self.board.cell(x, y)
        if not cell.toggle_flag():
            return False
        if cell.is_flagged:
            self.mines_remaining -= 1
        else:
            self.mines_remaining += 1
        return True

    def reset(self, config: Optional[BoardConfig] = None) -> "GameSession":
        """
        Start over with a brand-new session.

        Args:
            config: New difficulty; keeps the current one when omitted.

        Returns:
            A fresh session sharing this one's generator and clock. This
            session is left as it was.
        """
        config = config or self.config
        logger.debug("Reset to %dx%d with %d mines",
                     config.width, config.height, config.mine_count)
        return GameSession(config, rng=self.rng, clock=self.clock)

    def plant_mines(self, positions: Iterable[Position]) -> None:
        """
        Place mines at fixed positions instead of at random.

        Meant for tests and scripted scenarios. After planting, the next
        open is handled as a regular move, not as the first click.

        Raises:
            RuntimeError: If mines have already been placed.
            ValueError: If a position is out of bounds or repeated.
        """
        if not self.first_move_pending:
            raise RuntimeError("Mines can only be planted before the first move")
        positions = list(positions)
        self.board.place_mines(positions)
        self.mine_count = len(positions)
        self.mines_remaining = len(positions)
        self._start()

    # ========================================================================
    # Internal State Changes
    # ========================================================================

    def _start(self) -> None:
        self.first_move_pending = False
        self._started_at = self.clock()

    def _finish(self, phase: Phase) -> None:
        self.phase = phase
        self._ended_at = self.clock()
        logger.debug("Game over: %s after %.1fs", phase.name,
                     self.elapsed_seconds)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self.phase == Phase.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self.phase == Phase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self.phase == Phase.LOST

    @property
    def elapsed_seconds(self) -> Optional[float]:
        """Seconds since the first open, frozen once the game ends."""
        if self._started_at is None:
            return None
        end = self._ended_at if self._ended_at is not None else self.clock()
        return end - self._started_at

    def snapshot(self) -> SessionSnapshot:
        """Build an immutable view of the session for rendering."""
        lost = self.phase == Phase.LOST
        rows = []
        for y in range(self.board.height):
            row = []
            for x in range(self.board.width):
                cell = self.board.cell(x, y)
                is_open = cell.state == CellState.OPEN
                row.append(CellView(
                    state=cell.state,
                    is_mine=cell.has_mine if is_open or lost else None,
                    neighbor_mines=(
                        cell.neighbor_mines
                        if is_open and not cell.has_mine else None
                    ),
                ))
            rows.append(tuple(row))
        return SessionSnapshot(
            width=self.board.width,
            height=self.board.height,
            phase=self.phase,
            mines_remaining=self.mines_remaining,
            elapsed_seconds=self.elapsed_seconds,
            cells=tuple(rows),
        )


def new_game(
    width: int, height: int, mine_count: int, seed: Optional[int] = None
) -> GameSession:
    """Create a session from raw dimensions, validating them first."""
    return GameSession(BoardConfig(width, height, mine_count), seed=seed)
