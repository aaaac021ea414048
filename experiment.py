#!/usr/bin/env python3
"""Benchmark a strategy: solve many hidden targets and report turn counts."""

from __future__ import annotations

import argparse
import json
import logging
import random
import statistics
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path

from errors import SolverError
from feedback import compute_feedback, normalize_word
from lexicon import load_words
from solver import Solver
from strategies import available_strategies
from strategy import SolverConfig

RESULTS_DIR = Path(__file__).resolve().parent / "results"


@dataclass
class GameResult:
    target: str
    solved: bool
    turns: int
    elapsed: float
    guesses: list[str] = field(default_factory=list)


def play_game(solver: Solver, target: str, verbose: bool = False) -> GameResult:
    """Play one session against *target* using only ``suggest``/``advance``."""
    session = solver.new_session()
    t0 = time.perf_counter()
    while not session.is_over():
        suggestion = solver.suggest(session)
        if suggestion is None:
            # Only possible when the target is not in the dictionary.
            break
        code = compute_feedback(suggestion.word, target)
        result = solver.advance(session, suggestion.word, str(code))
        if verbose:
            print(
                f"  Guess {result.turn}: {suggestion.word}  {code.emoji()}  "
                f"H={suggestion.score:.2f}  remaining={result.remaining}"
            )
    elapsed = time.perf_counter() - t0
    return GameResult(
        target=target,
        solved=session.is_solved(),
        turns=session.turn_count,
        elapsed=elapsed,
        guesses=[g for g, _ in session.history],
    )


def run_experiment(
    solver: Solver,
    targets: list[str],
    verbose: bool = False,
) -> list[GameResult]:
    results: list[GameResult] = []
    for i, target in enumerate(targets, 1):
        if verbose:
            print(f"\n--- Game {i}/{len(targets)} | Target: {target} ---")
        res = play_game(solver, target, verbose=verbose)
        results.append(res)
        if verbose:
            status = "SOLVED" if res.solved else "FAILED"
            print(f"  -> {status} in {res.turns} guesses ({res.elapsed * 1000:.1f} ms)")
    return results


def summarize(results: list[GameResult]) -> dict:
    n = len(results)
    if n == 0:
        return {"games": 0, "solved": 0, "solve_rate": 0.0, "mean_turns": 0.0,
                "median_turns": 0.0, "max_turns": 0, "mean_seconds": 0.0}
    turns = [r.turns for r in results]
    solved = sum(1 for r in results if r.solved)
    return {
        "games": n,
        "solved": solved,
        "solve_rate": round(solved / n, 4),
        "mean_turns": round(statistics.mean(turns), 3),
        "median_turns": statistics.median(turns),
        "max_turns": max(turns),
        "mean_seconds": round(statistics.mean(r.elapsed for r in results), 5),
    }


def print_experiment_summary(results: list[GameResult], strategy_name: str) -> None:
    s = summarize(results)
    if not s["games"]:
        print(f"\n=== {strategy_name} - no games ===")
        return
    print(f"\n=== {strategy_name} - {s['games']} games ===")
    print(f"  Solved: {s['solved']}/{s['games']} ({100 * s['solve_rate']:.1f}%)")
    print(f"  Guesses - mean: {s['mean_turns']:.2f}, median: {s['median_turns']:.1f}, "
          f"max: {s['max_turns']}")
    print(f"  Time per game - mean: {s['mean_seconds'] * 1000:.1f} ms")


def plot_distribution(results: list[GameResult], strategy_name: str, path: Path | None = None) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed - skipping plot", file=sys.stderr)
        return

    turns = [r.turns for r in results]
    mx = max(turns) if turns else 6
    bins = list(range(1, mx + 2))

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(turns, bins=bins, edgecolor="black", align="left")
    ax.set_title(f"{strategy_name} - guess distribution")
    ax.set_xlabel("Guesses")
    ax.set_ylabel("Count")
    fig.tight_layout()

    dest = path or RESULTS_DIR / f"experiment_{strategy_name.lower()}.png"
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    print(f"Plot saved to {dest}")


# ------------------------------------------------------------------
# CLI helpers (shared with tournament.py)
# ------------------------------------------------------------------

def add_solver_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--words", type=str, default=None, help="Path to word list (.txt or .csv)")
    parser.add_argument("--turn-budget", type=int, default=6, help="Max guesses per game")
    parser.add_argument("--cache-size", type=int, default=100_000, help="Entropy cache entries")
    parser.add_argument("--parallel-threshold", type=int, default=2000,
                        help="Guess count above which ranking uses worker threads")
    parser.add_argument("--small-set-threshold", type=int, default=3,
                        help="Only guess candidates when at most this many remain")
    parser.add_argument("--workers", type=int, default=None, help="Ranking threads (default: all cores)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")


def config_from_args(args: argparse.Namespace, strategy: str | None = None) -> SolverConfig:
    return SolverConfig(
        strategy=strategy or getattr(args, "strategy", "entropy"),
        cache_size=args.cache_size,
        turn_budget=args.turn_budget,
        parallel_threshold=args.parallel_threshold,
        small_set_threshold=args.small_set_threshold,
        workers=args.workers,
        seed=args.seed,
    )


def pick_targets(words: list[str], num_games: int | None, seed: int) -> list[str]:
    if num_games is None or num_games >= len(words):
        return list(words)
    return random.Random(seed).sample(words, num_games)


def main() -> None:
    parser = argparse.ArgumentParser(description="Single-strategy Wordle benchmark")
    parser.add_argument("--strategy", type=str, default="entropy",
                        help=f"Strategy name (one of: {', '.join(available_strategies())})")
    parser.add_argument("--target", type=str, default=None, help="Solve a single target word")
    parser.add_argument("--num-games", type=int, default=None,
                        help="Number of targets (default: every dictionary word)")
    parser.add_argument("--verbose", action="store_true", help="Print per-game details")
    parser.add_argument("--plot", type=str, default=None, help="Save plot to this path")
    parser.add_argument("--json", type=str, default=None, help="Save results as JSON")
    add_solver_arguments(parser)
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
        words = load_words(args.words)
        solver = Solver(words, config)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)
    print(f"Vocabulary: {len(solver.dictionary)} words")
    print(f"Strategy: {solver.strategy.name}")

    if args.target:
        try:
            targets = [normalize_word(args.target)]
        except SolverError as exc:
            print(f"error: {exc}", file=sys.stderr)
            sys.exit(2)
        args.verbose = True
    else:
        targets = pick_targets(solver.dictionary.sample(None), args.num_games, args.seed)

    results = run_experiment(solver, targets, verbose=args.verbose)
    print_experiment_summary(results, solver.strategy.name)

    if args.plot:
        plot_distribution(results, solver.strategy.name, Path(args.plot))

    if args.json:
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        output = {
            "strategy": solver.strategy.name,
            "config": asdict(config),
            "summary": summarize(results),
            "games": [asdict(r) for r in results],
        }
        json_path.write_text(json.dumps(output, indent=2), encoding="utf-8")
        print(f"JSON saved to {json_path}")


if __name__ == "__main__":
    main()
