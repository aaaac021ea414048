"""Random strategy: pick uniformly at random from remaining candidates."""

from __future__ import annotations

import random

from candidates import CandidateSet
from strategy import History, SolverConfig, Strategy, Suggestion


class RandomStrategy(Strategy):
    """Guess a random word from the set of remaining candidates.

    Serves as the baseline the entropy strategy is benchmarked against.
    The score is the chance that the guess is the answer.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        super().__init__(config)
        self._rng = random.Random(self.config.seed)

    name = "random"

    def suggest(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        history: History = (),
    ) -> Suggestion | None:
        if not candidates:
            return None
        n = len(candidates)
        return Suggestion(self._rng.choice(candidates), 1.0 / n, n)
