"""Candidate store: an immutable, ordered set of still-possible words."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from functools import cached_property
from typing import Iterable, Iterator

from feedback import FeedbackCode, feedback_index, normalize_word


class CandidateSet(Sequence):
    """Ordered, immutable sequence of words.

    Filtering never mutates the receiver; it returns a new set, so a
    snapshot handed to the ranking step stays valid while the session
    moves on. Identity for caching purposes is the content
    ``fingerprint``, not the Python object.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: tuple[str, ...] = tuple(words)
        self._members: frozenset[str] | None = None

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "CandidateSet":
        """Normalize, validate and deduplicate raw input (first occurrence wins)."""
        seen: set[str] = set()
        out: list[str] = []
        for raw in words:
            w = normalize_word(raw)
            if w in seen:
                continue
            seen.add(w)
            out.append(w)
        return cls(out)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __getitem__(self, i):
        if isinstance(i, slice):
            return CandidateSet(self._words[i])
        return self._words[i]

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        if self._members is None:
            self._members = frozenset(self._words)
        return word in self._members

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CandidateSet):
            return self._words == other._words
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        preview = ", ".join(self._words[:5])
        more = f", ... +{len(self) - 5}" if len(self) > 5 else ""
        return f"CandidateSet([{preview}{more}])"

    def __reduce__(self):
        return (CandidateSet, (self._words,))

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def size(self) -> int:
        return len(self._words)

    @cached_property
    def fingerprint(self) -> str:
        """Order-sensitive content digest; equal for equal word sequences."""
        h = hashlib.blake2b(digest_size=16)
        h.update("\n".join(self._words).encode("ascii"))
        h.update(f"#{len(self._words)}".encode("ascii"))
        return h.hexdigest()

    def filter(self, guess: str, code: FeedbackCode) -> "CandidateSet":
        """Keep only the words consistent with *guess* having produced *code*.

        An empty result is valid: it means the feedback so far is
        contradictory for this dictionary.
        """
        idx = FeedbackCode(code).index
        return CandidateSet(w for w in self._words if feedback_index(guess, w) == idx)

    def filter_history(
        self, history: Iterable[tuple[str, FeedbackCode]]
    ) -> "CandidateSet":
        result = self
        for guess, code in history:
            result = result.filter(guess, code)
        return result

    def sample(self, limit: int | None) -> list[str]:
        if limit is None:
            return list(self._words)
        return list(self._words[:limit])
