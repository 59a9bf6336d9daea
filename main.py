from __future__ import annotations

import argparse
import json
import logging
import random
import time
from pathlib import Path

from game.board import Board
from game.ruleset import DEFAULT_RULES
from player.auto_player import AutoPlayer
from ui.cli import gameloop


# drop-in helper for progress and log line
def progress_print(msg: str) -> None:
    # overwrite same line, no newline
    print(f"\r\033[K{msg}", end="", flush=True)


def log_print(msg: str) -> None:
    # first terminate the progress line, then print normally
    print("\r\033[K", end="", flush=True)
    print(msg, flush=True)


def run_benchmark(games: int, seed: int | None = None, verbose: bool = False) -> dict:
    """
    Auto-play several games and collect statistics.

    Args:
        games: number of games to play
        seed: seed for the board and the player, None for a random run
        verbose: render every finished game
    Returns:
        dict with the lists won, attempts and total_time_s
    """
    rng = random.Random(seed)
    board = Board(rules=DEFAULT_RULES, rng=rng)
    player = AutoPlayer(rng=random.Random(rng.random()))

    won, attempts, times = [], [], []
    for counter in range(1, games + 1):
        board.reset()
        start_time = time.perf_counter()
        is_won, steps = player.play_game(board)
        elapsed = time.perf_counter() - start_time

        won.append(is_won)
        attempts.append(steps)
        times.append(elapsed)

        if verbose:
            log_print(f"\n--- Game {counter} ---")
            board.render()
            log_print(f"The solution was: {board.reveal_code()}")
        progress_print(f"[{counter}/{games}] {'won' if is_won else 'lost'} in {steps} attempts")

    log_print("")
    return {"won": won, "attempts": attempts, "total_time_s": times}


def print_summary(games: dict) -> None:
    attempts = games["attempts"]
    times = games["total_time_s"]
    n = len(attempts)
    if n == 0:
        print("No games played.")
        return

    print(f"Won {sum(games['won'])} of {n} games.")
    print(f"Average attempts over {n} games: {sum(attempts) / n:.2f} attempts.")
    print(f"Max attempts over {n} games: {max(attempts)} attempts.")
    print(f"Min attempts over {n} games: {min(attempts)} attempts.")
    print(f"Average time over {n} games: {sum(times) / n * 1000:.3f} ms.")


def main():
    ap = argparse.ArgumentParser(description="Shap10r shape deduction game")
    ap.add_argument("--auto", type=int, default=None, metavar="N",
                    help="Auto-play N games instead of the interactive CLI.")
    ap.add_argument("--seed", type=int, default=None, help="Seed for benchmark runs")
    ap.add_argument("--out", default="benchmark.json", help="Benchmark JSON output path")
    ap.add_argument("--verbose", action="store_true", help="Render every auto-played game")
    ap.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.auto is None:
        gameloop()
        return

    games = run_benchmark(args.auto, seed=args.seed, verbose=args.verbose)
    print_summary(games)

    out = Path(args.out)
    with out.open("w", encoding="utf-8") as f:
        json.dump({"rules": DEFAULT_RULES["name"], "games": games}, f, indent=2)
    print(f"Results written to {out}")


if __name__ == "__main__":
    main()
