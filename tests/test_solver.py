from __future__ import annotations

import pytest

from errors import ValidationError
from experiment import play_game
from feedback import compute_feedback, parse_feedback
from session import Status
from solver import Solver
from strategies.entropy_strat import EntropyStrategy
from strategy import SolverConfig


def test_solves_crane_within_budget(solver):
    result = play_game(solver, "crane")
    assert result.solved
    assert result.turns <= 6
    assert result.guesses[-1] == "crane"


def test_adieu_narrowing(solver):
    session = solver.new_session()
    result = solver.advance(session, "adieu", "20100")
    assert result.remaining == len(session.candidates)
    assert "avail" in session.candidates
    assert "admit" not in session.candidates
    suggestion = solver.suggest(session)
    assert suggestion.remaining == len(session.candidates)


def test_suggest_does_not_touch_session(solver, dictionary):
    session = solver.new_session()
    suggestion = solver.suggest(session)
    assert suggestion.word in dictionary
    assert suggestion.remaining == len(dictionary)
    assert suggestion.score > 0
    assert session.turn_count == 0
    assert session.candidates == dictionary


def test_top_candidates(solver):
    session = solver.new_session()
    top = solver.top_candidates(session)
    assert len(top) == solver.config.max_candidates_displayed
    assert top[0][0] == solver.suggest(session).word
    assert len(solver.top_candidates(session, limit=3)) == 3


def test_statistics(solver):
    session = solver.new_session()
    solver.advance(session, "crane", compute_feedback("crane", "trace"))
    stats = solver.statistics(session)
    assert stats.turns == 1
    assert stats.status is Status.IN_PROGRESS
    assert stats.remaining == len(session.candidates)
    assert stats.sample == list(session.candidates)[:10]


def test_sessions_are_independent(solver):
    a = solver.new_session()
    b = solver.new_session()
    solver.advance(a, "crane", "22222")
    assert b.status is Status.IN_PROGRESS
    assert b.candidates == solver.dictionary
    assert a.history == [("crane", parse_feedback("22222"))]


def test_dictionary_validation():
    with pytest.raises(ValidationError):
        Solver(["crane", "cranes"])
    with pytest.raises(ValueError):
        Solver([])
    assert list(Solver([" Crane", "trace", "CRANE"]).dictionary) == ["crane", "trace"]


def test_strategy_from_config(words):
    solver = Solver(words, SolverConfig(strategy="frequency"))
    assert solver.strategy.name == "frequency"
    result = play_game(solver, "there")
    assert result.turns <= 6
    assert all(g in solver.dictionary for g in result.guesses)


def test_top_candidates_follow_precomputed_opener(dictionary):
    config = SolverConfig()
    strategy = EntropyStrategy(config, openers={dictionary.fingerprint: "eerie"})
    solver = Solver(dictionary, config, strategy=strategy)
    session = solver.new_session()
    assert solver.top_candidates(session)[0][0] == solver.suggest(session).word == "eerie"
