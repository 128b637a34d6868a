#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty NAME | --width W --height H --mines M]
    python main.py simulate [--games N] [--difficulty NAME] [--render]
"""
import argparse
import logging
import sys
from typing import Optional, TextIO, Tuple

import numpy as np

from minesweeper import (
    BoardConfig,
    DIFFICULTIES,
    GameSession,
    MinesweeperEnv,
    Phase,
    SessionSnapshot,
    render_board,
)

CONTROLS = "Commands: o X Y (open), f X Y (flag), r [DIFFICULTY] (restart), q (quit)"


# ============================================================================
# Terminal Driver
# ============================================================================

def status_line(snapshot: SessionSnapshot) -> str:
    """Describe the phase the way the header shows it."""
    if snapshot.phase == Phase.WON:
        return "YOU WIN! Press r to restart"
    if snapshot.phase == Phase.LOST:
        return "GAME OVER! Press r to restart"
    return CONTROLS


def render_screen(snapshot: SessionSnapshot) -> str:
    """Render header, column/row labels and board."""
    elapsed = int(snapshot.elapsed_seconds or 0)
    header = f"Mines: {snapshot.mines_remaining}  Time: {elapsed}"

    board_rows = render_board(snapshot).split("\n")
    label_width = len(str(snapshot.height - 1))
    columns = " ".join(str(x % 10) for x in range(snapshot.width))
    lines = [header, status_line(snapshot), ""]
    lines.append(" " * (label_width + 1) + columns)
    for y, row in enumerate(board_rows):
        lines.append(f"{y:>{label_width}} {row}")
    return "\n".join(lines)


def apply_command(
    session: GameSession, line: str
) -> Tuple[Optional[GameSession], Optional[str]]:
    """
    Apply one line of player input.

    Args:
        session: Current game.
        line: Raw input line.

    Returns:
        Tuple of (session to continue with, message to show). The session
        is None when the player quits.
    """
    parts = line.split()
    if not parts:
        return session, None

    command = parts[0].lower()
    if command in ("q", "quit"):
        return None, None

    if command in ("r", "restart"):
        if len(parts) == 1:
            return session.reset(), None
        try:
            return session.reset(BoardConfig.from_name(parts[1])), None
        except ValueError as error:
            return session, str(error)

    if command in ("o", "open", "f", "flag"):
        if len(parts) != 3:
            return session, CONTROLS
        try:
            x, y = int(parts[1]), int(parts[2])
        except ValueError:
            return session, CONTROLS
        # Input is ignored once the game is over
        if not session.is_playing:
            return session, None
        if command in ("o", "open"):
            session.open(x, y)
        else:
            session.toggle_flag(x, y)
        return session, None

    return session, CONTROLS


def play(
    args: argparse.Namespace,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> None:
    """Play an interactive game on the terminal."""
    session: Optional[GameSession] = GameSession(
        config_from_args(args), seed=args.seed
    )

    while session is not None:
        print(render_screen(session.snapshot()), file=stdout)
        print("> ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break
        session, message = apply_command(session, line)
        if message:
            print(message, file=stdout)


# ============================================================================
# Simulation
# ============================================================================

def simulate(args: argparse.Namespace) -> None:
    """Play random games through the environment and print statistics."""
    config = config_from_args(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    print(
        f"Simulating {args.games} games on {config.width}x{config.height} "
        f"with {config.mine_count} mines..."
    )

    wins = 0
    total_steps = 0
    total_opened = 0

    for game in range(args.games):
        seed = args.seed + game if args.seed is not None else None
        obs, info = env.reset(seed=seed)
        done = False

        while not done:
            mask = env.get_action_mask()
            # Random policy over open actions only
            valid = np.where(mask[:config.total_cells])[0]
            action = int(rng.choice(valid))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if args.render:
            print(f"\n=== Game {game + 1}/{args.games}: {info['game_state']} ===")
            print(env.render())

        if info["game_state"] == Phase.WON.name:
            wins += 1
        total_steps += info["steps"]
        total_opened += info["opened"]

    print(f"Results over {args.games} games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg opened: {total_opened / args.games:.1f} cells")


# ============================================================================
# Argument Handling
# ============================================================================

def config_from_args(args: argparse.Namespace) -> BoardConfig:
    """Build a board configuration from a preset or explicit sizes."""
    custom = (args.width, args.height, args.mines)
    if any(value is not None for value in custom):
        if any(value is None for value in custom):
            raise ValueError("--width, --height and --mines must be given together")
        return BoardConfig(args.width, args.height, args.mines)
    return BoardConfig.from_name(args.difficulty)


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the difficulty options shared by every command."""
    parser.add_argument(
        "--difficulty",
        choices=list(DIFFICULTIES),
        default="beginner",
        help="Preset board size",
    )
    parser.add_argument("--width", type=int, help="Custom board width")
    parser.add_argument("--height", type=int, help="Custom board height")
    parser.add_argument("--mines", type=int, help="Custom mine count")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(description="Minesweeper - play or simulate games")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play on the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report statistics"
    )
    add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--render", action="store_true", help="Print each final board"
    )

    return parser


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "simulate":
            simulate(args)
        else:
            parser.print_help()
    except ValueError as error:
        parser.error(str(error))


if __name__ == "__main__":
    main()
