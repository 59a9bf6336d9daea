import argparse
import json
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def _annotate_bars(ax, xs, ys, *, fmt="{:d}", dy=4, fontsize=8):
        """
        Annotate bars (x, y) on ax with their height.

        Args:
            ax: matplotlib Axes
            xs: list of x coordinates
            ys: list of bar heights
            fmt: format string for heights
            dy: y offset in points
            fontsize: font size for annotations
        """

        for x, y in zip(xs, ys):
            if not y:
                continue
            ax.annotate(
                fmt.format(int(y)),
                (x, y),
                textcoords="offset points",
                xytext=(0, dy),
                ha="center",
                va="center",
                fontsize=fontsize,
            )


def compute_run_stats(games: dict, max_attempts: int = 10):
    """
    Returns:
      n_games (int)
      n_won (int)
      win_rate (float, np.nan if no games)
      avg_attempts (float, np.nan if no won games), won games only
      min_attempts (float, np.nan if no won games), won games only
      max_attempts (float, np.nan if no won games), won games only
      avg_time (float, np.nan if no games)
      histogram (np.ndarray) won games per attempt count, index 0 = 1 attempt
    """
    won = np.array(games.get("won", []), dtype=bool)
    attempts = np.array(games.get("attempts", []), dtype=np.int32)
    total_time = np.array(games.get("total_time_s", []), dtype=np.float32)

    # Guard against length mismatches
    n = min(len(won), len(attempts))
    won = won[:n]
    attempts = attempts[:n]

    won_attempts = attempts[won]
    n_won = int(won_attempts.size)

    win_rate = float(n_won / n) if n > 0 else np.nan
    avg_attempts = float(np.mean(won_attempts)) if n_won > 0 else np.nan
    min_attempts = float(np.min(won_attempts)) if n_won > 0 else np.nan
    max_attempts_won = float(np.max(won_attempts)) if n_won > 0 else np.nan
    avg_time = float(np.mean(total_time)) if total_time.size > 0 else np.nan

    histogram = np.bincount(
        np.clip(won_attempts - 1, 0, max_attempts - 1), minlength=max_attempts
    )

    return (
        n,
        n_won,
        win_rate,
        avg_attempts,
        min_attempts,
        max_attempts_won,
        avg_time,
        histogram,
    )


def plot_attempts(games: dict, out_path: Path, *, max_attempts: int = 10, title=None):
    """
    Draw a histogram of the attempts needed per won game and save it as PNG.
    """
    n, n_won, win_rate, avg_attempts, *_, histogram = compute_run_stats(
        games, max_attempts=max_attempts
    )
    xs = np.arange(1, max_attempts + 1)

    fig, ax = plt.subplots(figsize=(8, 4.5))
    ax.bar(xs, histogram, color="#008000", alpha=0.8, label="won games")
    _annotate_bars(ax, xs, histogram)

    if not np.isnan(avg_attempts):
        ax.axvline(avg_attempts, color="#FFA500", linestyle="--",
                   label=f"avg {avg_attempts:.2f}")

    ax.set_xticks(xs)
    ax.set_xlabel("Attempts")
    ax.set_ylabel("Games")
    ax.set_title(title or f"Attempts per won game ({n_won}/{n}, win rate {win_rate:.0%})")
    ax.legend()
    ax.grid(axis="y", alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--file", default="benchmark.json", help="Path to benchmark JSON")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs")
    ap.add_argument("--max-attempts", type=int, default=10, help="Rows per game")
    args = ap.parse_args()

    path = Path(args.file)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    games = data.get("games", {})
    if not games.get("attempts"):
        raise ValueError(f"No games found in {path}.")

    n, n_won, win_rate, avg_attempts, min_attempts, max_attempts, avg_time, _ = (
        compute_run_stats(games, max_attempts=args.max_attempts)
    )
    print(f"{n_won}/{n} games won ({win_rate:.1%}).")
    print(f"Attempts (won games): avg {avg_attempts:.2f}, min {min_attempts:.0f}, max {max_attempts:.0f}")
    print(f"Average time per game: {avg_time * 1000:.3f} ms")

    out = plot_attempts(games, outdir / f"attempts_{data.get('rules', 'run')}.png",
                        max_attempts=args.max_attempts)
    print(f"[saved] {out}")


if __name__ == "__main__":
    main()
