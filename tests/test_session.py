from __future__ import annotations

import pytest

from errors import FormatError, SessionTerminatedError, ValidationError
from feedback import compute_feedback, parse_feedback
from session import GameSession, Status


def test_fresh_session(dictionary):
    session = GameSession(dictionary)
    assert session.status is Status.IN_PROGRESS
    assert session.candidates == dictionary
    assert session.history == []
    assert session.turn_count == 0
    assert session.remaining_turns() == 6


def test_advance_narrows_candidates(dictionary):
    session = GameSession(dictionary)
    result = session.advance("CRANE", str(compute_feedback("crane", "trace")))
    assert result.status is Status.IN_PROGRESS
    assert result.turn == 1
    assert result.remaining == len(session.candidates)
    assert "trace" in session.candidates
    assert session.history == [("crane", parse_feedback("12202"))]
    assert session.candidates == dictionary.filter("crane", parse_feedback("12202"))


def test_accepts_feedback_code(dictionary):
    session = GameSession(dictionary)
    session.advance("crane", compute_feedback("crane", "trace"))
    assert session.turns[0].feedback == parse_feedback("12202")


def test_solved_then_terminated(dictionary):
    session = GameSession(dictionary)
    first = session.advance("crane", "22222")
    assert first.status is Status.SOLVED
    assert session.is_solved() and session.is_over()
    history = session.history
    candidates = session.candidates
    with pytest.raises(SessionTerminatedError):
        session.advance("crane", "22222")
    assert session.history == history
    assert session.candidates == candidates
    assert session.turn_count == 1


@pytest.mark.parametrize(
    "guess, feedback, error",
    [
        ("crane", "2010", FormatError),
        ("crane", "20103", FormatError),
        ("cranes", "20100", ValidationError),
        ("cr4ne", "20100", ValidationError),
    ],
)
def test_failed_advance_changes_nothing(dictionary, guess, feedback, error):
    session = GameSession(dictionary)
    session.advance("slate", "00000")
    before = (session.history, session.candidates, session.status)
    with pytest.raises(error):
        session.advance(guess, feedback)
    assert (session.history, session.candidates, session.status) == before


def test_exhausted_after_budget(dictionary):
    session = GameSession(dictionary, turn_budget=2)
    session.advance("crane", "00000")
    result = session.advance("slate", "00000")
    assert result.status is Status.EXHAUSTED
    assert not session.is_solved()
    assert session.remaining_turns() == 0
    with pytest.raises(SessionTerminatedError):
        session.advance("abide", "00000")


def test_winning_on_last_turn_is_solved(dictionary):
    session = GameSession(dictionary, turn_budget=1)
    assert session.advance("trace", "22222").status is Status.SOLVED


def test_contradictory_feedback_leaves_session_open(dictionary):
    session = GameSession(dictionary)
    session.advance("crane", str(compute_feedback("crane", "trace")))
    result = session.advance("crane", "00000")
    assert result.no_candidates
    assert result.status is Status.IN_PROGRESS
    assert len(session.candidates) == 0


def test_invalid_budget(dictionary):
    with pytest.raises(ValueError):
        GameSession(dictionary, turn_budget=0)
