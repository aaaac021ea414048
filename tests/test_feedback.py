from __future__ import annotations

from collections import Counter

import pytest

from errors import FormatError, ValidationError
from feedback import (
    ALL_HIT,
    FeedbackCode,
    Mark,
    compute_feedback,
    feedback_index,
    matches,
    normalize_word,
    parse_feedback,
)


@pytest.mark.parametrize(
    "guess, target, expected",
    [
        ("crane", "trace", "12202"),
        ("crane", "crane", "22222"),
        ("crane", "react", "11201"),
        ("speed", "abide", "00101"),
        ("eerie", "there", "10102"),
        ("jolly", "crane", "00000"),
        # one 'l' in the target: only the first extra 'l' is reported
        ("llama", "label", "21100"),
    ],
)
def test_compute_feedback_examples(guess, target, expected):
    assert str(compute_feedback(guess, target)) == expected


def test_hit_takes_priority_over_earlier_present():
    # the target's only 'e' is consumed by the hit at the end
    assert str(compute_feedback("eerie", "crane")) == "00102"


def test_feedback_properties(words):
    sample = words[::8]
    for g in sample:
        for t in sample:
            code = compute_feedback(g, t)
            for i, m in enumerate(code):
                assert (m == Mark.HIT) == (g[i] == t[i])
            marked = Counter(g[i] for i, m in enumerate(code) if m != Mark.ABSENT)
            target_counts = Counter(t)
            for letter, n in marked.items():
                assert n <= target_counts[letter]
            assert code.is_win == (g == t)


def test_feedback_index_agrees_with_code(words):
    for t in words[:40]:
        assert feedback_index("crane", t) == compute_feedback("crane", t).index


def test_compute_feedback_rejects_length_mismatch():
    with pytest.raises(ValidationError):
        compute_feedback("crane", "cranes")


@pytest.mark.parametrize("word", ["cranes", "abcd", ""])
def test_compute_feedback_rejects_wrong_word_length(word):
    with pytest.raises(ValidationError):
        compute_feedback(word, word)


def test_parse_feedback():
    code = parse_feedback("20100")
    assert code == (2, 0, 1, 0, 0)
    assert code == FeedbackCode([Mark.HIT, Mark.ABSENT, Mark.PRESENT, Mark.ABSENT, Mark.ABSENT])
    assert str(code) == "20100"
    assert FeedbackCode.from_digits("20100") == code
    assert parse_feedback(" 22222\n").is_win


@pytest.mark.parametrize("bad", ["", "2010", "201000", "20103", "abcde", "2 100"])
def test_parse_feedback_rejects_malformed(bad):
    with pytest.raises(FormatError):
        parse_feedback(bad)


def test_format_error_is_value_error():
    with pytest.raises(ValueError):
        parse_feedback("9")


def test_numeric_form():
    assert parse_feedback("20100").index == 11
    assert ALL_HIT.index == 242
    assert parse_feedback("00000").index == 0
    assert FeedbackCode.from_index(11) == parse_feedback("20100")
    with pytest.raises(FormatError):
        FeedbackCode.from_index(243)
    with pytest.raises(FormatError):
        FeedbackCode.from_index(-1)


def test_feedback_code_validates_marks():
    with pytest.raises(FormatError):
        FeedbackCode([2, 2, 2, 2])
    with pytest.raises(FormatError):
        FeedbackCode([3, 0, 0, 0, 0])


def test_emoji_rendering():
    assert parse_feedback("21000").emoji() == "\U0001f7e9\U0001f7e8⬛⬛⬛"


def test_normalize_word():
    assert normalize_word("  CRANE\n") == "crane"
    with pytest.raises(ValidationError):
        normalize_word("cran")
    with pytest.raises(ValidationError):
        normalize_word("cr4ne")
    with pytest.raises(ValidationError):
        normalize_word("crâne")


def test_matches():
    code = compute_feedback("crane", "trace")
    assert matches("trace", "crane", code)
    assert not matches("react", "crane", code)
