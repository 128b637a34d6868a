"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src (package) and project root (main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from minesweeper import BoardConfig, Cell, GameSession


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def default_session(clock: FakeClock) -> GameSession:
    """Create a default 9x9 game with 10 mines and a fixed seed."""
    return GameSession(rng=random.Random(1234), clock=clock)


@pytest.fixture
def empty_session(clock: FakeClock) -> GameSession:
    """Create a 5x5 game with no mines for cascade testing."""
    return GameSession(BoardConfig(5, 5, 0), rng=random.Random(0), clock=clock)


@pytest.fixture
def corner_mine_session(clock: FakeClock) -> GameSession:
    """Create a 4x4 game with a single mine planted at (0, 0)."""
    session = GameSession(BoardConfig(4, 4, 0), clock=clock)
    session.plant_mines([(0, 0)])
    return session


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def beginner_config() -> BoardConfig:
    """Beginner difficulty configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def expert_config() -> BoardConfig:
    """Expert difficulty configuration."""
    return BoardConfig(30, 16, 99)
