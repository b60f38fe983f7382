import itertools

import pytest

from constraints import (
    UNSET,
    GuessResult,
    UnsetConstraintError,
    absent,
    classify,
    correct,
    misplaced,
)
from wordle_env import filter_candidates, matches

WORDS = [
    "crane", "crate", "trace", "brace", "grace", "react", "cater", "caret",
    "abbey", "bobby", "ebbed", "hobby", "lobby", "green", "groan", "grown",
    "steel", "sleet", "stele", "leets",
]


def test_crane_against_trace_leaves_only_trace():
    history = (classify("trace", "crane"),)
    assert filter_candidates(["crane", "crate", "trace"], history) == ["trace"]


def test_all_correct_keeps_at_most_the_matching_word():
    history = (classify("grace", "grace"),)
    assert filter_candidates(WORDS, history) == ["grace"]
    history = (classify("zzzzz", "zzzzz"),)
    assert filter_candidates(WORDS, history) == []


def test_misplaced_letter_excludes_its_own_position():
    # 'a' misplaced at position 2: 'a' must be elsewhere, never at index 2
    result = GuessResult(
        (absent("q"), absent("u"), misplaced("a"), absent("i"), absent("l"))
    )
    assert not matches("trace", result)      # 'a' at index 2
    assert matches("cater", result)          # 'a' elsewhere
    assert not matches("green", result)      # no 'a' at all


def test_absent_letter_excludes_word_containing_it():
    result = GuessResult(
        (absent("n"), absent("o"), absent("i"), absent("s"), absent("y"))
    )
    assert filter_candidates(["crane", "trace", "groan"], [result]) == ["trace"]


def test_absent_surplus_copy_does_not_eliminate_target():
    # 'b' is both confirmed and absent in the same result
    history = (classify("abbey", "bobby"),)
    survivors = filter_candidates(WORDS, history)
    assert "abbey" in survivors
    assert "hobby" not in survivors


def test_result_is_subset_and_narrows_monotonically():
    h1 = (classify("sleet", "crane"),)
    h2 = h1 + (classify("sleet", "steel"),)
    first = filter_candidates(WORDS, h1)
    second = filter_candidates(WORDS, h2)
    assert set(first) <= set(WORDS)
    assert set(second) <= set(first)


def test_filter_is_idempotent():
    history = (classify("grown", "green"),)
    once = filter_candidates(WORDS, history)
    assert filter_candidates(once, history) == once


def test_target_is_never_eliminated():
    for target, guess in itertools.product(WORDS, repeat=2):
        history = (classify(target, guess),)
        assert target in filter_candidates(WORDS, history), (target, guess)


def test_target_survives_longer_histories():
    guesses = ["crane", "bobby", "steel", "aeiou"]
    for target in WORDS:
        history = tuple(classify(target, g) for g in guesses)
        assert target in filter_candidates(WORDS, history)


def test_order_is_preserved_and_list_is_fresh():
    words = ["grace", "brace", "trace"]
    out = filter_candidates(words, ())
    assert out == words
    assert out is not words


def test_unset_in_history_is_fatal():
    with pytest.raises(UnsetConstraintError):
        filter_candidates(["crane"], [[UNSET] * 5])
    with pytest.raises(UnsetConstraintError):
        filter_candidates(
            ["crane"],
            [[correct("c"), correct("r"), UNSET, correct("n"), correct("e")]],
        )
