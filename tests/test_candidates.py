from __future__ import annotations

import pytest

from candidates import CandidateSet
from errors import ValidationError
from feedback import compute_feedback, matches, parse_feedback


def test_from_words_normalizes_and_dedupes():
    cs = CandidateSet.from_words([" Crane", "TRACE", "crane", "react"])
    assert list(cs) == ["crane", "trace", "react"]
    assert cs.size() == 3


def test_from_words_rejects_bad_words():
    with pytest.raises(ValidationError):
        CandidateSet.from_words(["crane", "cranes"])


def test_filter_adieu_example(dictionary):
    remaining = dictionary.filter("adieu", parse_feedback("20100"))
    for w in ("avail", "anvil", "april", "attic"):
        assert w in remaining
    assert "admit" not in remaining
    for w in remaining:
        assert w[0] == "a"
        assert "i" in w and w[2] != "i"
        assert not set("deu") & set(w)


def test_filter_keeps_exactly_consistent_words(dictionary):
    code = compute_feedback("crane", "trace")
    remaining = dictionary.filter("crane", code)
    assert "trace" in remaining
    assert all(matches(w, "crane", code) for w in remaining)
    assert all(w in remaining for w in dictionary if matches(w, "crane", code))


def test_filter_preserves_order_and_source(dictionary):
    before = list(dictionary)
    remaining = dictionary.filter("slate", parse_feedback("00000"))
    assert list(dictionary) == before
    positions = [before.index(w) for w in remaining]
    assert positions == sorted(positions)


def test_filter_is_idempotent_and_monotonic(dictionary):
    code = compute_feedback("crane", "there")
    once = dictionary.filter("crane", code)
    twice = once.filter("crane", code)
    assert twice == once
    assert len(once) <= len(dictionary)
    narrower = once.filter("those", compute_feedback("those", "there"))
    assert set(narrower) <= set(once)


def test_filter_can_empty_the_set():
    cs = CandidateSet(["crane", "trace", "react"])
    assert len(cs.filter("crane", parse_feedback("00000"))) == 0


def test_filter_history(dictionary):
    history = [
        ("crane", compute_feedback("crane", "trace")),
        ("react", compute_feedback("react", "trace")),
    ]
    step = dictionary.filter(*history[0]).filter(*history[1])
    assert dictionary.filter_history(history) == step
    assert "trace" in step


def test_fingerprint():
    a = CandidateSet(["crane", "trace"])
    assert a.fingerprint == CandidateSet(["crane", "trace"]).fingerprint
    assert a.fingerprint != CandidateSet(["trace", "crane"]).fingerprint
    assert a.fingerprint != CandidateSet(["crane"]).fingerprint
    assert CandidateSet().fingerprint != a.fingerprint


def test_sequence_behaviour():
    cs = CandidateSet(["crane", "trace", "react", "there"])
    assert cs[0] == "crane"
    assert isinstance(cs[1:3], CandidateSet)
    assert list(cs[1:3]) == ["trace", "react"]
    assert cs.sample(2) == ["crane", "trace"]
    assert cs.sample(None) == list(cs)
    assert not CandidateSet()
