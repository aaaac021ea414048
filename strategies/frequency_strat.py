"""Letter-frequency strategy: guess the candidate covering the commonest letters."""

from __future__ import annotations

from collections import Counter

from candidates import CandidateSet
from strategy import History, Strategy, Suggestion


def letter_frequencies(words) -> dict[str, float]:
    counts = Counter(ch for w in words for ch in w)
    total = sum(counts.values())
    return {ch: c / total for ch, c in counts.items()} if total else {}


class FrequencyStrategy(Strategy):
    """Always guess a remaining candidate with the highest letter coverage.

    A word scores the summed frequency (over the remaining candidates) of
    its distinct letters; ties go to the alphabetically first word.
    """

    name = "frequency"

    def suggest(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        history: History = (),
    ) -> Suggestion | None:
        ranked = self.rank(candidates, dictionary, limit=1)
        if not ranked:
            return None
        word, score = ranked[0]
        return Suggestion(word, score, len(candidates))

    def rank(
        self,
        candidates: CandidateSet,
        dictionary: CandidateSet,
        limit: int | None = None,
        history: History = (),
    ) -> list[tuple[str, float]]:
        freqs = letter_frequencies(candidates)
        scored = [(w, sum(freqs[ch] for ch in set(w))) for w in candidates]
        scored.sort(key=lambda e: (-e[1], e[0]))
        return scored if limit is None else scored[:limit]
