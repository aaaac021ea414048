#!/usr/bin/env python3
"""Run several strategies over the same targets and compare them.

Each strategy plays in its own worker process against every target, so
their entropy caches and random streams never interact.
"""

from __future__ import annotations

import argparse
import csv
import logging
import os
import statistics
import sys
import time as _time_mod
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from pathlib import Path

from experiment import (
    GameResult,
    add_solver_arguments,
    config_from_args,
    pick_targets,
    play_game,
)
from lexicon import load_words
from solver import Solver
from strategies import available_strategies
from strategy import SolverConfig

RESULTS_DIR = Path(__file__).resolve().parent / "results"


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class TournamentResults:
    games: dict[str, list[GameResult]] = field(default_factory=lambda: defaultdict(list))

    def add(self, strategy: str, results: list[GameResult]) -> None:
        self.games[strategy].extend(results)

    def ranking(self) -> list[tuple[str, list[GameResult]]]:
        """Strategies sorted by mean turns (ascending = best first)."""
        return sorted(
            ((name, res) for name, res in self.games.items() if res),
            key=lambda kv: (statistics.mean(r.turns for r in kv[1]), kv[0]),
        )

    def to_csv(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["strategy", "target", "turns", "solved", "seconds"])
            for name, results in sorted(self.games.items()):
                for g in results:
                    writer.writerow([name, g.target, g.turns, int(g.solved), f"{g.elapsed:.6f}"])

    def print_summary(self) -> None:
        print(f"\n{'Strategy':<15} {'Games':>6} {'Solved':>7} {'Rate':>6} "
              f"{'Mean':>6} {'Median':>7} {'Max':>5} {'ms/game':>8}")
        print("-" * 66)
        for name, results in self.ranking():
            n = len(results)
            solved = sum(1 for r in results if r.solved)
            turns = [r.turns for r in results]
            ms = 1000 * statistics.mean(r.elapsed for r in results)
            print(f"{name:<15} {n:>6} {solved:>6}  {100 * solved / n:>5.1f}% "
                  f"{statistics.mean(turns):>6.2f} {statistics.median(turns):>7.1f} "
                  f"{max(turns):>5} {ms:>8.1f}")
        print()

    def plot_histograms(self, path: str | Path | None = None) -> None:
        try:
            import matplotlib
            matplotlib.use("Agg")
            import matplotlib.pyplot as plt
        except ImportError:
            print("matplotlib not installed - skipping plot", file=sys.stderr)
            return

        ranked = self.ranking()
        if not ranked:
            return

        # one bar group per guess count, plus a final group for failed games
        max_turns = max(r.turns for _, res in ranked for r in res)
        labels = [str(t) for t in range(1, max_turns + 1)] + ["X"]
        width = 0.8 / len(ranked)

        fig, ax = plt.subplots(figsize=(max(6, len(labels) * 1.2), 4))
        for i, (name, res) in enumerate(ranked):
            counts = [0] * len(labels)
            for r in res:
                counts[r.turns - 1 if r.solved else -1] += 1
            xs = [x + i * width for x in range(len(labels))]
            ax.bar(xs, counts, width=width, label=name, edgecolor="black")

        ax.set_xticks([x + width * (len(ranked) - 1) / 2 for x in range(len(labels))])
        ax.set_xticklabels(labels)
        ax.set_xlabel("Guesses (X = not solved)")
        ax.set_ylabel("Games")
        ax.legend()
        ax.set_title("Guess-count distribution by strategy")
        fig.tight_layout()
        dest = Path(path) if path else RESULTS_DIR / "tournament_histograms.png"
        dest.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(dest, dpi=150)
        plt.close(fig)
        print(f"Histogram saved to {dest}")


# ------------------------------------------------------------------
# Worker function (runs in a child process)
# ------------------------------------------------------------------

def _run_strategy_worker(
    config: SolverConfig,
    words: list[str],
    targets: list[str],
) -> list[GameResult]:
    """Play every target with one strategy. Executed in a subprocess."""
    solver = Solver(words, config)
    return [play_game(solver, t) for t in targets]


# ------------------------------------------------------------------
# Tournament runner
# ------------------------------------------------------------------

def run_tournament(
    words: list[str],
    base_config: SolverConfig,
    strategies: list[str] | None = None,
    targets: list[str] | None = None,
    max_workers: int | None = None,
) -> TournamentResults:
    if strategies is None:
        strategies = available_strategies()
    if targets is None:
        targets = list(words)
    if max_workers is None:
        max_workers = min(len(strategies), os.cpu_count() or 4, 4)

    print(f"Running {len(strategies)} strategies on {len(targets)} words "
          f"(workers: {max_workers}) ...", flush=True)

    results = TournamentResults()
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                _run_strategy_worker,
                replace(base_config, strategy=name),
                words,
                targets,
            ): name
            for name in strategies
        }
        for fut in as_completed(futures):
            name = futures[fut]
            game_results = fut.result()
            results.add(name, game_results)
            solved = sum(1 for g in game_results if g.solved)
            mean = statistics.mean(g.turns for g in game_results) if game_results else 0.0
            print(f"  {name:<15} done - {solved}/{len(game_results)} solved, mean {mean:.2f}")

    return results


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare Wordle solving strategies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python tournament.py                                  # all strategies, bundled list
  python tournament.py --strategies entropy random      # pick strategies
  python tournament.py --num-games 100                  # subsample 100 targets
  python tournament.py --words data/words.txt --csv out.csv
""",
    )
    parser.add_argument("--strategies", nargs="+", default=None,
                        help=f"Strategies to run (default: {' '.join(available_strategies())})")
    parser.add_argument("--num-games", type=int, default=None, help="Limit number of targets")
    parser.add_argument("--processes", type=int, default=None,
                        help="Max parallel strategy processes (default: auto)")
    parser.add_argument("--csv", type=str, default=None, help="Save results CSV path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    add_solver_arguments(parser)
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        base_config = config_from_args(args, strategy="entropy")
        words = load_words(args.words)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    strategies = args.strategies or available_strategies()
    unknown = sorted(set(strategies) - set(available_strategies()))
    if unknown:
        print(f"error: unknown strategies {unknown}; available: {available_strategies()}",
              file=sys.stderr)
        sys.exit(2)

    print(f"Vocabulary: {len(words)} words")
    targets = pick_targets(words, args.num_games, args.seed)

    t0 = _time_mod.time()
    results = run_tournament(
        words=words,
        base_config=base_config,
        strategies=strategies,
        targets=targets,
        max_workers=args.processes,
    )
    elapsed = _time_mod.time() - t0

    results.print_summary()
    print(f"Elapsed: {elapsed:.1f}s")

    csv_path = args.csv or str(RESULTS_DIR / "tournament.csv")
    results.to_csv(csv_path)
    print(f"CSV saved to {csv_path}")

    if args.plot:
        results.plot_histograms(args.plot)


if __name__ == "__main__":
    main()
