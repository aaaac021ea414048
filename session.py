"""Game session: history, turn count and termination state of one playthrough."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from candidates import CandidateSet
from errors import SessionTerminatedError
from feedback import FeedbackCode, normalize_word, parse_feedback

log = logging.getLogger(__name__)


class Status(Enum):
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self is not Status.IN_PROGRESS


@dataclass(frozen=True)
class Turn:
    guess: str
    feedback: FeedbackCode
    remaining: int


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of one accepted (guess, feedback) pair."""

    status: Status
    feedback: FeedbackCode
    remaining: int
    turn: int

    @property
    def no_candidates(self) -> bool:
        """The feedback history is contradictory for this dictionary."""
        return self.remaining == 0


class GameSession:
    """A single solving session.

    Parameters
    ----------
    dictionary : CandidateSet
        Full word list, shared read-only with other sessions.
    turn_budget : int
        Guesses allowed before the session is exhausted.

    ``advance`` is the only mutating operation.  It validates all input
    before touching any state, so a failed call leaves the session as it
    was.
    """

    def __init__(self, dictionary: CandidateSet, turn_budget: int = 6) -> None:
        if turn_budget < 1:
            raise ValueError(f"turn_budget must be >= 1, got {turn_budget}")
        self._dictionary = dictionary
        self._turn_budget = turn_budget
        self._candidates = dictionary
        self._history: list[Turn] = []
        self._status = Status.IN_PROGRESS

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def advance(self, guess: str, feedback: str | FeedbackCode) -> AdvanceResult:
        """Record *guess* with its *feedback* and narrow the candidates.

        Raises
        ------
        SessionTerminatedError
            If the session is already solved or exhausted.
        FormatError
            If *feedback* is not a valid digit string.
        ValidationError
            If *guess* has the wrong length or characters outside a-z.
        """
        if self._status.is_terminal:
            raise SessionTerminatedError(
                f"session is already {self._status.value}; start a new one"
            )
        code = parse_feedback(feedback) if isinstance(feedback, str) else FeedbackCode(feedback)
        word = normalize_word(guess)

        remaining = self._candidates.filter(word, code)

        self._candidates = remaining
        self._history.append(Turn(word, code, len(remaining)))
        if code.is_win:
            self._status = Status.SOLVED
        elif len(self._history) >= self._turn_budget:
            self._status = Status.EXHAUSTED
        if not remaining:
            log.warning("no candidates remain after %s %s", word, code)

        log.debug("turn %d: %s %s -> %d candidates (%s)",
                  len(self._history), word, code, len(remaining), self._status.value)
        return AdvanceResult(self._status, code, len(remaining), len(self._history))

    @property
    def candidates(self) -> CandidateSet:
        return self._candidates

    @property
    def dictionary(self) -> CandidateSet:
        return self._dictionary

    @property
    def history(self) -> list[tuple[str, FeedbackCode]]:
        return [(t.guess, t.feedback) for t in self._history]

    @property
    def turns(self) -> list[Turn]:
        return list(self._history)

    @property
    def status(self) -> Status:
        return self._status

    @property
    def turn_count(self) -> int:
        return len(self._history)

    @property
    def turn_budget(self) -> int:
        return self._turn_budget

    def remaining_turns(self) -> int:
        return self._turn_budget - len(self._history)

    def is_over(self) -> bool:
        return self._status.is_terminal

    def is_solved(self) -> bool:
        return self._status is Status.SOLVED
