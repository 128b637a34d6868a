"""
Unit tests for the Gymnasium environment.

Tests spaces, seeding, rewards, action masks and rendering.
"""
import numpy as np
import pytest

from minesweeper import BoardConfig, MinesweeperEnv, Phase, render_board


@pytest.fixture
def env() -> MinesweeperEnv:
    """Create a beginner environment in ansi render mode."""
    environment = MinesweeperEnv(render_mode="ansi")
    environment.reset(seed=0)
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_has_open_and_flag_halves(self, env) -> None:
        """One open and one flag action per cell."""
        assert env.action_space.n == 2 * 81

    def test_reset_observation(self, env) -> None:
        """Reset returns an all-closed int8 observation."""
        obs, info = env.reset(seed=1)
        assert obs.shape == (9, 9)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["game_state"] == "PLAYING"
        assert info["elapsed_seconds"] is None


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test rewards and termination."""

    def test_first_open_is_safe(self, env) -> None:
        """The first open never loses."""
        for seed in range(20):
            env.reset(seed=seed)
            _, reward, terminated, truncated, info = env.step(40)
            assert reward in (1.0, 10.0)
            assert truncated is False
            assert info["opened"] >= 9

    def test_seeded_resets_repeat(self) -> None:
        """Same seed, same actions, same observations."""
        results = []
        for _ in range(2):
            environment = MinesweeperEnv()
            environment.reset(seed=11)
            obs, *_ = environment.step(0)
            results.append(obs)
        assert np.array_equal(results[0], results[1])

    def test_flag_action(self, env) -> None:
        """Second half of the action space toggles flags."""
        obs, reward, terminated, _, info = env.step(81 + 10)
        assert reward == 0.0
        assert obs[1, 1] == -2
        assert info["mines_remaining"] == 9
        assert terminated is False

    def test_ignored_action_is_penalized(self, env) -> None:
        """Opening an open cell costs a small penalty."""
        env.step(40)
        _, reward, *_ = env.step(40)
        assert reward == pytest.approx(-0.1)

    def test_opening_mine_terminates(self, env) -> None:
        """Opening a mine ends the episode with a penalty."""
        env.session.plant_mines([(0, 0)])
        obs, reward, terminated, _, info = env.step(0)
        assert reward == -10.0
        assert terminated is True
        assert obs[0, 0] == 9
        assert info["game_state"] == Phase.LOST.name

    def test_flags_frozen_after_game_over(self, env) -> None:
        """The environment gates flags on the game phase."""
        env.session.plant_mines([(0, 0)])
        env.step(0)
        obs, reward, *_ = env.step(81 + 80)
        assert reward == pytest.approx(-0.1)
        assert obs[8, 8] == -1

    def test_win_reward(self) -> None:
        """Clearing the board pays the win reward."""
        environment = MinesweeperEnv(BoardConfig(3, 3, 0))
        environment.reset(seed=0)
        _, reward, terminated, _, info = environment.step(4)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "WON"


# ============================================================================
# Reset Option Tests
# ============================================================================

class TestResetOptions:
    """Test switching difficulty between episodes."""

    def test_reset_with_same_size_config(self, env) -> None:
        """Mine count may change between episodes."""
        _, info = env.reset(seed=2, options={"config": BoardConfig(9, 9, 20)})
        assert info["mines_remaining"] == 20
        assert info["total_safe"] == 61

    def test_reset_with_preset_name(self, env) -> None:
        """Preset names are accepted when the size matches."""
        _, info = env.reset(options={"config": "beginner"})
        assert info["mines_remaining"] == 10

    def test_reset_with_other_size_fails(self, env) -> None:
        """Dimensions are fixed for the environment's lifetime."""
        with pytest.raises(ValueError, match="cannot change"):
            env.reset(options={"config": "expert"})


# ============================================================================
# Mask and Render Tests
# ============================================================================

class TestMaskAndRender:
    """Test action masks and text rendering."""

    def test_fresh_mask_allows_everything(self, env) -> None:
        """Every open and flag action is valid on a fresh board."""
        assert env.get_action_mask().all()

    def test_mask_after_open(self, env) -> None:
        """Open cells can neither be opened nor flagged."""
        env.step(40)
        mask = env.get_action_mask()
        assert not mask[40]
        assert not mask[81 + 40]

    def test_flagged_cell_can_only_be_unflagged(self, env) -> None:
        """A flagged cell can be unflagged but not opened."""
        env.step(81 + 5)
        mask = env.get_action_mask()
        assert not mask[5]
        assert mask[81 + 5]

    def test_mask_empty_after_game_over(self, env) -> None:
        """No action is valid once the game is over."""
        env.session.plant_mines([(0, 0)])
        env.step(0)
        assert not env.get_action_mask().any()

    def test_render_ansi(self, env) -> None:
        """Ansi rendering shows one line per row."""
        env.step(81)
        lines = env.render().split("\n")
        assert len(lines) == 9
        assert lines[0].startswith("F .")

    def test_render_board_symbols(self) -> None:
        """Open mines and counts use distinct symbols."""
        environment = MinesweeperEnv(BoardConfig(3, 3, 0))
        environment.reset(seed=0)
        environment.session.plant_mines([(2, 2)])
        environment.step(4)
        environment.step(8)
        assert render_board(environment.session.snapshot()) == (
            ". . .\n"
            ". 1 .\n"
            ". . *"
        )
