"""Entropy calculator: expected information gain of a guess, memoized.

For a guess *g* and candidate set *C* of size *N*, every candidate is
treated as a hypothetical target and bucketed by the feedback code *g*
would receive. With *n_i* candidates in bucket *i*::

    H(g) = -sum_i (n_i / N) * log2(n_i / N)

Scores are cached under ``(guess, C.fingerprint)``, so a filtered set
never reuses entries computed for its parent: invalidation is a pure
function of content.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict, namedtuple
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from candidates import CandidateSet
from feedback import NUM_CODES, FeedbackCode, feedback_index

log = logging.getLogger(__name__)

# Scores closer than this are considered tied.
TIE_EPSILON = 1e-9

CacheInfo = namedtuple("CacheInfo", ["hits", "misses", "maxsize", "currsize"])


def pattern_counts(guess: str, words: Sequence[str]) -> np.ndarray:
    """Histogram of feedback indices (length ``NUM_CODES``)."""
    codes = np.fromiter(
        (feedback_index(guess, w) for w in words), dtype=np.intp, count=len(words)
    )
    return np.bincount(codes, minlength=NUM_CODES)


def entropy_from_counts(counts) -> float:
    counts = np.asarray(counts)
    n = counts.sum()
    if n <= 0:
        return 0.0
    p = counts[counts > 0] / n
    h = -float(np.sum(p * np.log2(p)))
    return h if h > 0.0 else 0.0


class _LRUCache:
    """Bounded mapping with least-recently-used eviction, safe across threads.

    Values are computed outside the lock; two threads missing on the same
    key both compute and the last write wins, which is harmless because
    the computation is deterministic.
    """

    def __init__(self, maxsize: int) -> None:
        if maxsize < 0:
            raise ValueError(f"cache size must be >= 0, got {maxsize}")
        self._maxsize = maxsize
        self._data: OrderedDict = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key):
        with self._lock:
            try:
                value = self._data[key]
            except KeyError:
                self.misses += 1
                return None
            self._data.move_to_end(key)
            self.hits += 1
            return value

    def put(self, key, value) -> None:
        if self._maxsize == 0:
            return
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self._maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def maxsize(self) -> int:
        return self._maxsize


class EntropyCalculator:
    """Score guesses against candidate sets, with a bounded LRU memo.

    One instance may be shared by every session of a solver and by the
    ranking worker threads.
    """

    def __init__(self, cache_size: int = 100_000) -> None:
        self._cache = _LRUCache(cache_size)

    def score(self, guess: str, candidates: Sequence[str]) -> float:
        """Entropy in bits of the feedback distribution *guess* induces."""
        if not isinstance(candidates, CandidateSet):
            candidates = CandidateSet(candidates)
        if not candidates:
            return 0.0
        key = (guess, candidates.fingerprint)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        ent = self.compute(guess, candidates)
        self._cache.put(key, ent)
        return ent

    @staticmethod
    def compute(guess: str, words: Sequence[str]) -> float:
        """Uncached entropy computation."""
        if not words:
            return 0.0
        return entropy_from_counts(pattern_counts(guess, words))

    def partition(
        self, guess: str, candidates: Sequence[str]
    ) -> dict[FeedbackCode, CandidateSet]:
        """Group *candidates* by the feedback code *guess* would receive."""
        groups: dict[int, list[str]] = {}
        for w in candidates:
            groups.setdefault(feedback_index(guess, w), []).append(w)
        return {
            FeedbackCode.from_index(idx): CandidateSet(words)
            for idx, words in groups.items()
        }

    def expected_remaining(self, guess: str, candidates: Sequence[str]) -> float:
        """Expected candidate count after playing *guess* (sum n_i^2 / N)."""
        if not candidates:
            return 0.0
        counts = pattern_counts(guess, candidates).astype(np.float64)
        return float(np.sum(counts * counts) / len(candidates))

    def cache_info(self) -> CacheInfo:
        return CacheInfo(
            self._cache.hits, self._cache.misses, self._cache.maxsize, len(self._cache)
        )

    def clear_cache(self) -> None:
        log.debug("clearing entropy cache (%d entries)", len(self._cache))
        self._cache.clear()


# ------------------------------------------------------------------
# Ranking reduction
# ------------------------------------------------------------------

@dataclass(frozen=True)
class ChunkBest:
    """Local result of scanning one slice of the guess universe.

    ``entries`` holds every (word, score) within ``TIE_EPSILON`` of the
    slice maximum, so merging slices loses no tied word.
    """

    score: float
    entries: tuple[tuple[str, float], ...]


def best_in_chunk(
    calculator: EntropyCalculator,
    guesses: Iterable[str],
    candidates: CandidateSet,
) -> ChunkBest:
    best = -1.0
    near: list[tuple[str, float]] = []
    for g in guesses:
        s = calculator.score(g, candidates)
        if s < best - TIE_EPSILON:
            continue
        if s > best:
            best = s
            near = [(w, v) for w, v in near if v >= best - TIE_EPSILON]
        near.append((g, s))
    return ChunkBest(best, tuple(near))


def select_best(
    parts: Iterable[ChunkBest], candidates: CandidateSet
) -> tuple[str, float] | None:
    """Deterministic merge: max score, then candidate membership, then a-z."""
    parts = [p for p in parts if p.entries]
    if not parts:
        return None
    top = max(p.score for p in parts)
    pool = [
        (w, s) for p in parts for w, s in p.entries if s >= top - TIE_EPSILON
    ]
    return min(pool, key=lambda e: (e[0] not in candidates, e[0]))


def order_ranking(
    scored: Iterable[tuple[str, float]], candidates: CandidateSet
) -> list[tuple[str, float]]:
    """Sort (word, score) pairs best first, consistently with ``select_best``."""
    scored = list(scored)
    if not scored:
        return []
    top = max(s for _, s in scored)

    def key(e):
        w, s = e
        tied = s >= top - TIE_EPSILON
        return (not tied, 0.0 if tied else -s, w not in candidates, w)

    return sorted(scored, key=key)
