"""Feedback codec: compare a guess with a target and encode the result."""

from __future__ import annotations

import re
from collections import Counter
from enum import IntEnum
from functools import lru_cache
from typing import Iterable

from errors import FormatError, ValidationError

WORD_LENGTH = 5
NUM_CODES = 3 ** WORD_LENGTH

_WORD_RE = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")


class Mark(IntEnum):
    """Per-letter verdict.

    0 = absent  (letter not present, or already consumed by hits/presents)
    1 = present (correct letter, wrong position)
    2 = hit     (correct letter, correct position)
    """

    ABSENT = 0
    PRESENT = 1
    HIT = 2


_EMOJI = {Mark.HIT: "\U0001f7e9", Mark.PRESENT: "\U0001f7e8", Mark.ABSENT: "⬛"}


class FeedbackCode(tuple):
    """Immutable sequence of exactly ``WORD_LENGTH`` marks.

    Compares equal to a plain tuple of ints holding the same marks.
    """

    __slots__ = ()

    def __new__(cls, marks: Iterable[int]) -> "FeedbackCode":
        try:
            values = tuple(Mark(m) for m in marks)
        except ValueError as exc:
            raise FormatError(f"invalid feedback mark: {exc}") from None
        if len(values) != WORD_LENGTH:
            raise FormatError(
                f"feedback must have {WORD_LENGTH} marks, got {len(values)}"
            )
        return super().__new__(cls, values)

    @classmethod
    def from_digits(cls, code: str) -> "FeedbackCode":
        return parse_feedback(code)

    @classmethod
    def from_index(cls, index: int) -> "FeedbackCode":
        """Decode the base-3 form (position *i* has weight ``3**i``)."""
        if not 0 <= index < NUM_CODES:
            raise FormatError(f"feedback index out of range: {index}")
        marks = []
        for _ in range(WORD_LENGTH):
            index, digit = divmod(index, 3)
            marks.append(digit)
        return cls(marks)

    @property
    def index(self) -> int:
        val = 0
        for i, m in enumerate(self):
            val += int(m) * (3 ** i)
        return val

    @property
    def is_win(self) -> bool:
        return all(m == Mark.HIT for m in self)

    def emoji(self) -> str:
        return "".join(_EMOJI[m] for m in self)

    def __str__(self) -> str:
        return "".join(str(int(m)) for m in self)

    def __repr__(self) -> str:
        return f"FeedbackCode({str(self)!r})"


ALL_HIT = FeedbackCode([Mark.HIT] * WORD_LENGTH)


def normalize_word(text: str) -> str:
    """Return *text* lower-cased and stripped, or raise ``ValidationError``."""
    if not isinstance(text, str):
        raise ValidationError(f"word must be a string, got {type(text).__name__}")
    word = text.strip().lower()
    if len(word) != WORD_LENGTH:
        raise ValidationError(
            f"word {text!r} must have {WORD_LENGTH} letters, got {len(word)}"
        )
    if not _WORD_RE.match(word):
        raise ValidationError(f"word {text!r} may only contain letters a-z")
    return word


def _marks(guess: str, target: str) -> tuple[int, ...]:
    pat = [0] * WORD_LENGTH
    remaining = Counter(target)

    # Pass 1 - hits
    for i, (t, g) in enumerate(zip(target, guess)):
        if g == t:
            pat[i] = 2
            remaining[g] -= 1

    # Pass 2 - presents, left to right, bounded by what the hits left over
    for i, g in enumerate(guess):
        if pat[i] == 2:
            continue
        if remaining[g] > 0:
            pat[i] = 1
            remaining[g] -= 1

    return tuple(pat)


@lru_cache(maxsize=1 << 20)
def feedback_index(guess: str, target: str) -> int:
    """Base-3 feedback index for *guess* played against *target*.

    This is the hot path of entropy ranking, so results are memoized
    per (guess, target) pair. Both words must already be normalized.
    """
    val = 0
    for i, m in enumerate(_marks(guess, target)):
        val += m * (3 ** i)
    return val


def compute_feedback(guess: str, target: str) -> FeedbackCode:
    """Return the feedback *target* gives to *guess* (official duplicate rules)."""
    if len(guess) != len(target):
        raise ValidationError(
            f"guess length ({len(guess)}) != target length ({len(target)})"
        )
    if len(guess) != WORD_LENGTH:
        raise ValidationError(
            f"words must have {WORD_LENGTH} letters, got {len(guess)}"
        )
    return FeedbackCode(_marks(guess.lower(), target.lower()))


def parse_feedback(code: str) -> FeedbackCode:
    """Parse a digit string such as ``"20100"``."""
    code = code.strip()
    if len(code) != WORD_LENGTH:
        raise FormatError(
            f"feedback {code!r} must have {WORD_LENGTH} digits, got {len(code)}"
        )
    bad = [c for c in code if c not in "012"]
    if bad:
        raise FormatError(f"feedback {code!r} has invalid digit {bad[0]!r}")
    return FeedbackCode(int(c) for c in code)


def matches(candidate: str, guess: str, code: FeedbackCode) -> bool:
    """True iff playing *guess* against *candidate* would produce *code*."""
    return compute_feedback(guess, candidate) == code
