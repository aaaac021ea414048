"""Strategy interface and the settings every strategy receives."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from candidates import CandidateSet
from feedback import FeedbackCode

History = Sequence[tuple[str, FeedbackCode]]


@dataclass(frozen=True)
class SolverConfig:
    """Tunable engine parameters.

    Attributes
    ----------
    strategy : str
        Registered strategy name: ``"entropy"`` (default), ``"random"``
        or ``"frequency"``.
    max_candidates_displayed : int
        How many ranked words / remaining candidates a display should
        show.  Does not affect solving.
    cache_size : int
        Maximum number of memoized entropy scores (0 disables the cache).
    turn_budget : int
        Guesses allowed before a session becomes exhausted.
    parallel_threshold : int
        Guess-universe size above which ranking is split across threads.
    small_set_threshold : int
        When at most this many candidates remain, only candidates are
        considered as guesses.
    workers : int or None
        Ranking threads; ``None`` uses ``os.cpu_count()``.
    seed : int or None
        Seed for randomized strategies.
    """

    strategy: str = "entropy"
    max_candidates_displayed: int = 10
    cache_size: int = 100_000
    turn_budget: int = 6
    parallel_threshold: int = 2000
    small_set_threshold: int = 3
    workers: int | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.max_candidates_displayed < 0:
            raise ValueError(
                f"max_candidates_displayed must be >= 0, got {self.max_candidates_displayed}"
            )
        if self.cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {self.cache_size}")
        if self.turn_budget < 1:
            raise ValueError(f"turn_budget must be >= 1, got {self.turn_budget}")
        if self.parallel_threshold < 1:
            raise ValueError(
                f"parallel_threshold must be >= 1, got {self.parallel_threshold}"
            )
        if self.small_set_threshold < 1:
            raise ValueError(
                f"small_set_threshold must be >= 1, got {self.small_set_threshold}"
            )
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass(frozen=True)
class Suggestion:
    """What a strategy hands back to the caller."""

    word: str
    score: float
    remaining: int


class Strategy(ABC):
    """Interface that every solving strategy implements.

    Subclasses set the class attribute ``name``; the registry reads it
    without creating an instance.
    """

    name: str = ""

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    def bind(self, dictionary: CandidateSet) -> None:
        """Called once when a solver is built around *dictionary*.

        Use this for precomputation.  The default implementation does
        nothing.
        """

    @abstractmethod
    def suggest(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        history: History = (),
    ) -> Suggestion | None:
        """Return the next guess, or None when no candidate remains."""
        ...

    def rank(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        limit: int | None = None,
        history: History = (),
    ) -> list[tuple[str, float]]:
        """Ranked (word, score) pairs, best first; the first is what
        ``suggest`` returns for the same arguments.

        The default ranks only the single suggestion.
        """
        s = self.suggest(candidates, dictionary, history)
        return [] if s is None else [(s.word, s.score)]
