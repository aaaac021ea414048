"""Entropy strategy: maximise expected information gain per guess.

The opening guess for a dictionary comes from precomputed openers (see
precompute_openers.py) when available. Otherwise it is computed on the
first request and memoized, so the full-dictionary sweep runs once per
process for a given dictionary.

Large guess universes are split into contiguous chunks scored on worker
threads; the per-chunk bests are merged by a deterministic reduction, so
the chosen word never depends on scheduling order.
"""

from __future__ import annotations

import logging
import os
import pickle
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

from candidates import CandidateSet
from entropy import (
    ChunkBest,
    EntropyCalculator,
    best_in_chunk,
    order_ranking,
    select_best,
)
from strategy import History, SolverConfig, Strategy, Suggestion

log = logging.getLogger(__name__)

OPENERS_PATH = Path(__file__).resolve().parent.parent / "data" / "openers.pkl"


def load_openers(path: str | Path = OPENERS_PATH) -> dict[str, str]:
    """Read the ``{dictionary fingerprint: word}`` table, or return {}."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            data = pickle.load(f)
    except (OSError, EOFError, pickle.UnpicklingError) as exc:
        log.warning("ignoring unreadable opener file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("ignoring opener file %s: expected a dict", path)
        return {}
    return data


def chunk_guesses(guesses: Sequence[str], workers: int) -> list[Sequence[str]]:
    """Contiguous slices, a few per worker so slow slices even out."""
    chunk_size = max(50, len(guesses) // (workers * 4))
    return [guesses[i:i + chunk_size] for i in range(0, len(guesses), chunk_size)]


class EntropyStrategy(Strategy):
    """Select the guess that maximises Shannon entropy of the feedback partition.

    Ties (within ``entropy.TIE_EPSILON``) go to a word that is still a
    candidate, then to the alphabetically first word.
    """

    def __init__(
        self,
        config: SolverConfig | None = None,
        calculator: EntropyCalculator | None = None,
        openers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(config)
        self.calculator = calculator or EntropyCalculator(self.config.cache_size)
        self._openers = dict(load_openers() if openers is None else openers)
        self._openers_lock = threading.Lock()

    name = "entropy"

    @property
    def workers(self) -> int:
        return self.config.workers or os.cpu_count() or 1

    def guess_universe(
        self, candidates: CandidateSet, dictionary: CandidateSet
    ) -> CandidateSet:
        if len(candidates) <= self.config.small_set_threshold:
            return candidates
        return dictionary

    def bind(self, dictionary: CandidateSet) -> None:
        """Resolve the opener now so the first ``suggest`` is a lookup."""
        log.debug("opener for this dictionary: %s", self.opener(dictionary))

    def suggest(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        history: History = (),
    ) -> Suggestion | None:
        n = len(candidates)
        if n == 0:
            log.warning("no candidates remain; nothing to suggest")
            return None
        if n == 1:
            return Suggestion(candidates[0], 0.0, 1)

        if self._first_turn(candidates, dictionary, history):
            word = self.opener(dictionary)
            return Suggestion(word, self.calculator.score(word, candidates), n)

        universe = self.guess_universe(candidates, dictionary)
        word, score = select_best(self._scan(universe, candidates), candidates)
        log.debug("best of %d guesses over %d candidates: %s (H=%.4f)",
                  len(universe), n, word, score)
        return Suggestion(word, score, n)

    def opener(self, dictionary: CandidateSet) -> str:
        """Best first guess for *dictionary* (precomputed or memoized)."""
        key = dictionary.fingerprint
        word = self._openers.get(key)
        if word is not None and word in dictionary:
            return word

        log.debug("computing opener for %d-word dictionary", len(dictionary))
        word, score = select_best(self._scan(dictionary, dictionary), dictionary)
        log.debug("opener: %s (H=%.4f)", word, score)
        with self._openers_lock:
            self._openers[key] = word
        return word

    def rank(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        limit: int | None = None,
        history: History = (),
    ) -> list[tuple[str, float]]:
        if not candidates:
            return []
        universe = self.guess_universe(candidates, dictionary)
        scored = self._map_chunks(
            universe,
            lambda chunk: [(w, self.calculator.score(w, candidates)) for w in chunk],
        )
        ranked = order_ranking((e for part in scored for e in part), candidates)
        if len(candidates) > 1 and self._first_turn(candidates, dictionary, history):
            # the opener leads, as in suggest
            first = self.opener(dictionary)
            ranked.sort(key=lambda e: e[0] != first)
        return ranked if limit is None else ranked[:limit]

    @staticmethod
    def _first_turn(
        candidates: CandidateSet, dictionary: CandidateSet, history: History
    ) -> bool:
        return not history and candidates.fingerprint == dictionary.fingerprint

    # ------------------------------------------------------------------
    # Fan-out / fan-in
    # ------------------------------------------------------------------

    def _scan(self, universe: CandidateSet, candidates: CandidateSet) -> list[ChunkBest]:
        return self._map_chunks(
            universe, lambda chunk: best_in_chunk(self.calculator, chunk, candidates)
        )

    def _map_chunks(self, universe: CandidateSet, fn) -> list:
        workers = self.workers
        if len(universe) <= self.config.parallel_threshold or workers == 1:
            return [fn(universe.words)]
        chunks = chunk_guesses(universe.words, workers)
        log.debug("ranking %d guesses in %d chunks on %d threads",
                  len(universe), len(chunks), workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(fn, chunks))
