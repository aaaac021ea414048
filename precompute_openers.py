#!/usr/bin/env python3
"""Precompute the entropy-optimal opening guess for a dictionary.

The full-dictionary sweep is the most expensive ranking a session ever
does, and its answer depends only on the dictionary. This script runs
it once across all CPU cores and stores ``{fingerprint: word}`` in
``data/openers.pkl``, which the entropy strategy loads at start-up.

Usage:
    python3 precompute_openers.py                          # bundled word list
    python3 precompute_openers.py --words data/words.txt   # another list
    python3 precompute_openers.py --workers 4
"""

from __future__ import annotations

import argparse
import logging
import os
import pickle
import sys
import tempfile
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

from candidates import CandidateSet
from entropy import ChunkBest, EntropyCalculator, best_in_chunk, select_best
from lexicon import load_words
from strategies.entropy_strat import OPENERS_PATH, chunk_guesses, load_openers


# ── Opener table I/O ───────────────────────────────────────

def save_openers(data: dict[str, str], path: str | Path = OPENERS_PATH) -> None:
    """Atomically save the opener table (write tmp then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            pickle.dump(data, f, protocol=pickle.HIGHEST_PROTOCOL)
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


# ── Worker function (module-level for pickling) ───────────

def _eval_chunk(args) -> ChunkBest:
    """Worker: best guesses of one chunk against the whole dictionary."""
    chunk, dictionary = args
    return best_in_chunk(EntropyCalculator(cache_size=0), chunk, dictionary)


def compute_opener(
    dictionary: CandidateSet,
    max_workers: int | None = None,
) -> tuple[str, float]:
    """Evaluate every dictionary word as an opener; return (word, bits)."""
    if max_workers is None:
        max_workers = os.cpu_count() or 4

    chunks = chunk_guesses(dictionary.words, max_workers)
    print(f"  Evaluating {len(dictionary)} guesses x {len(dictionary)} candidates "
          f"in {len(chunks)} chunks ...")

    t0 = time.time()
    parts: list[ChunkBest] = []
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futs = [executor.submit(_eval_chunk, (ch, dictionary)) for ch in chunks]
        for fut in as_completed(futs):
            parts.append(fut.result())
            best = select_best(parts, dictionary)
            elapsed = time.time() - t0
            eta = elapsed / len(parts) * (len(chunks) - len(parts))
            print(f"\r  [{len(parts)}/{len(chunks)}] "
                  f"best={best[0]} H={best[1]:.4f}  "
                  f"{elapsed:.0f}s elapsed  ETA {eta:.0f}s   ",
                  end="", flush=True)
    print()
    return select_best(parts, dictionary)


# ── CLI ────────────────────────────────────────────────────

def main() -> None:
    parser = argparse.ArgumentParser(description="Precompute the opening guess for a word list")
    parser.add_argument("--words", type=str, default=None, help="Path to word list (.txt or .csv)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel workers (default: all CPU cores)")
    parser.add_argument("--output", type=str, default=str(OPENERS_PATH),
                        help=f"Opener table (default: {OPENERS_PATH})")
    parser.add_argument("--force", action="store_true",
                        help="Recompute even if the table already has this dictionary")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        dictionary = CandidateSet.from_words(load_words(args.words))
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    table = load_openers(args.output)
    key = dictionary.fingerprint
    print(f"Dictionary: {len(dictionary)} words (fingerprint {key})")

    if key in table and not args.force:
        print(f"Already computed: {table[key]} (use --force to recompute)")
        return

    t0 = time.time()
    word, bits = compute_opener(dictionary, max_workers=args.workers)
    table[key] = word
    save_openers(table, args.output)
    print(f"  -> {word} (H={bits:.4f}) [{time.time() - t0:.0f}s]")
    print(f"Opener table: {args.output} ({len(table)} dictionaries)")


if __name__ == "__main__":
    main()
