"""Command-line interface for the tower puzzle."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from hanoi_engine.characters import pick_characters
from hanoi_engine.clock import ThreadScheduler
from hanoi_engine.controller import GameController
from hanoi_engine.discs import DIFFICULTY_LEVELS, get_difficulty
from hanoi_engine.stats import format_time, live_efficiency

if TYPE_CHECKING:
    from hanoi_engine.state import GameState
    from hanoi_engine.stats import GameStats


def format_state(state: GameState, time_elapsed: int = 0) -> str:
    """Format game state for display."""
    lines = []
    difficulty = state.difficulty

    lines.append("=" * 60)
    lines.append(
        f"{difficulty.emoji} {difficulty.name} | Moves: {state.move_count} "
        f"(optimal {difficulty.min_moves}) | Time: {format_time(time_elapsed)} | "
        f"Efficiency: {live_efficiency(state.move_count, difficulty.min_moves)}%"
    )
    lines.append("=" * 60)

    for tower in state.towers:
        marker = "→ " if tower.id == state.selected_tower else "  "
        flags = " (start)" if tower.is_source else " (goal)" if tower.is_target else ""
        discs = ", ".join(str(d) for d in tower.discs) or "(empty)"
        lines.append(f"{marker}Tower {tower.id + 1}{flags}: {discs}")

    if state.selected_disc is not None:
        lines.append(f"\nHolding: {state.selected_disc}")

    if state.show_hint:
        hint = str(state.hint_move) if state.hint_move else "no hint available"
        lines.append(f"\nHint: {hint}")

    return "\n".join(lines)


def format_stats(stats: GameStats) -> str:
    """Format completion stats for display."""
    lines = [
        "=" * 60,
        stats.victory_message,
        "=" * 60,
        f"  Moves: {stats.move_count} (optimal {stats.optimal_moves})",
        f"  Time: {format_time(stats.time_elapsed)}",
        f"  Efficiency: {stats.efficiency}%",
    ]
    if stats.hints_used > 0:
        lines.append(f"  Hints used: {stats.hints_used}")
    return "\n".join(lines)


def play_interactive(difficulty_id: str, hint_strategy: str = "greedy", seed: int | None = None) -> None:
    """Play an interactive game in the terminal."""
    difficulty = get_difficulty(difficulty_id)
    roster = pick_characters(difficulty.character_count, seed=seed)
    finished: list[GameStats] = []

    controller = GameController(
        roster,
        difficulty,
        on_complete=finished.append,
        scheduler=ThreadScheduler(),
        advisor=hint_strategy,
    )

    print("\nWelcome to the tower puzzle!")
    print("Move every disc to the goal tower; a disc can only go on a bigger one.")
    print("Type a tower number (1-3) to pick up or drop a disc,")
    print("'u' to undo, 'h' for a hint, 'r' to restart, 'q' to quit.\n")

    with controller:
        while not controller.state.is_complete:
            print(format_state(controller.state, controller.time_elapsed))
            choice = input("\n> ").strip().lower()

            if choice == "q":
                print("Goodbye!")
                return
            elif choice == "u":
                controller.undo()
            elif choice == "h":
                controller.toggle_hint()
            elif choice == "r":
                controller.reset()
            elif choice in {"1", "2", "3"}:
                if not controller.click_tower(int(choice) - 1):
                    print("That move is not allowed.")
            else:
                print("Please enter 1, 2, 3, u, h, r or q")
            print()

        print(format_state(controller.state, controller.time_elapsed))
        print(format_stats(finished[0]))


def watch_game(difficulty_id: str, strategy_name: str = "optimal", delay: float = 0.5) -> None:
    """Watch a strategy solve the puzzle."""
    import time

    from hanoi_engine.rules import generate_legal_moves
    from strategies.factory import StrategyFactory

    difficulty = get_difficulty(difficulty_id)
    strategy = StrategyFactory().create(strategy_name)
    roster = pick_characters(difficulty.character_count)
    finished: list[GameStats] = []

    print(f"\nWatching: {strategy.name} on {difficulty.name}")
    print("Press Ctrl+C to stop.\n")

    with GameController(roster, difficulty, on_complete=finished.append) as controller:
        try:
            while not controller.state.is_complete:
                print(format_state(controller.state))
                move = strategy.select_move(controller.state, generate_legal_moves(controller.state))
                print(f"\n{strategy.name} plays: {move}")
                controller.dispatch(move)

                time.sleep(delay)
                print("\n" + "-" * 60 + "\n")
        except KeyboardInterrupt:
            print("\nStopped.")

        print(format_state(controller.state))
        if finished:
            print(format_stats(finished[0]))


def run_batch_summary(difficulty_id: str, strategy_name: str = "random", num_games: int = 100) -> None:
    """Run many autoplayed games and print summary numbers."""
    from simulation.runner import run_batch
    from strategies.factory import StrategyFactory

    difficulty = get_difficulty(difficulty_id)
    strategy = StrategyFactory().create(strategy_name, {"seed": 42})

    print(f"\nRunning {num_games} games: {strategy.name} on {difficulty.name}")
    results = run_batch(strategy, difficulty, num_games)

    solved = [r for r in results if r.solved]
    print(f"  Solved: {len(solved)} ({100 * len(solved) / num_games:.1f}%)")
    if solved:
        avg_moves = sum(r.move_count for r in solved) / len(solved)
        avg_efficiency = sum(r.efficiency for r in solved) / len(solved)
        print(f"  Average moves: {avg_moves:.1f} (optimal {difficulty.min_moves})")
        print(f"  Average efficiency: {avg_efficiency:.1f}%")


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Tower puzzle with character discs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    levels = list(DIFFICULTY_LEVELS)

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--difficulty", choices=levels, default="facile")
    play_parser.add_argument("--hint", choices=["greedy", "optimal"], default="greedy")
    play_parser.add_argument("--seed", type=int, help="Random seed for the roster")

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch a strategy play")
    watch_parser.add_argument("--difficulty", choices=levels, default="facile")
    watch_parser.add_argument("--strategy", default="optimal", help="Strategy name")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Run many autoplayed games")
    batch_parser.add_argument("--difficulty", choices=levels, default="facile")
    batch_parser.add_argument("--strategy", default="random", help="Strategy name")
    batch_parser.add_argument("--games", type=int, default=100, help="Number of games")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play_interactive(args.difficulty, hint_strategy=args.hint, seed=args.seed)
    elif args.command == "watch":
        watch_game(args.difficulty, strategy_name=args.strategy, delay=args.delay)
    elif args.command == "batch":
        run_batch_summary(args.difficulty, strategy_name=args.strategy, num_games=args.games)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
