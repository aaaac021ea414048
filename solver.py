"""Solver engine: one dictionary, one strategy, any number of sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from candidates import CandidateSet
from feedback import FeedbackCode
from session import AdvanceResult, GameSession, Status
from strategies import create_strategy
from strategy import SolverConfig, Strategy, Suggestion

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverStatistics:
    turns: int
    remaining: int
    status: Status
    sample: list[str] = field(default_factory=list)


class Solver:
    """Entry point for callers (CLI, UI, benchmarks).

    The dictionary is validated once here and then shared read-only by
    every session and by the strategy's entropy cache.  ``suggest`` never
    mutates a session, so a caller may run it off its UI thread and
    discard the result at any time.
    """

    def __init__(
        self,
        dictionary: Iterable[str],
        config: SolverConfig | None = None,
        strategy: Strategy | None = None,
    ) -> None:
        self.config = config or SolverConfig()
        if isinstance(dictionary, CandidateSet):
            self.dictionary = dictionary
        else:
            self.dictionary = CandidateSet.from_words(dictionary)
        if not self.dictionary:
            raise ValueError("dictionary is empty")
        self.strategy = strategy or create_strategy(self.config)
        self.strategy.bind(self.dictionary)
        log.debug("solver ready: %d words, strategy=%s",
                  len(self.dictionary), self.strategy.name)

    def new_session(self) -> GameSession:
        return GameSession(self.dictionary, turn_budget=self.config.turn_budget)

    def suggest(self, session: GameSession) -> Suggestion | None:
        """Best next guess for *session*; None when no candidate remains."""
        return self.strategy.suggest(
            session.candidates, self.dictionary, session.history
        )

    def top_candidates(
        self, session: GameSession, limit: int | None = None
    ) -> list[tuple[str, float]]:
        if limit is None:
            limit = self.config.max_candidates_displayed
        return self.strategy.rank(
            session.candidates, self.dictionary, limit, session.history
        )

    def advance(
        self, session: GameSession, guess: str, feedback: str | FeedbackCode
    ) -> AdvanceResult:
        return session.advance(guess, feedback)

    def statistics(self, session: GameSession) -> SolverStatistics:
        return SolverStatistics(
            turns=session.turn_count,
            remaining=len(session.candidates),
            status=session.status,
            sample=session.candidates.sample(self.config.max_candidates_displayed),
        )
