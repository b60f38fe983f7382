import pytest

from constraints import (
    UNSET,
    GuessResult,
    LetterConstraint,
    LetterKind,
    absent,
    classify,
    correct,
    misplaced,
    render,
)


def test_classify_crane_against_trace():
    result = classify("trace", "crane")
    assert list(result) == [
        misplaced("c"), correct("r"), correct("a"), absent("n"), correct("e"),
    ]
    assert str(result) == "c?r!a!n.e!"
    assert result.word == "crane"


def test_classify_repeated_letters_as_multiset():
    # target has two b's; the guess has three, so one copy is surplus
    result = classify("abbey", "bobby")
    kinds = [c.kind for c in result]
    assert kinds == [
        LetterKind.MISPLACED,
        LetterKind.ABSENT,
        LetterKind.CORRECT,
        LetterKind.ABSENT,
        LetterKind.CORRECT,
    ]
    assert result.confirmed_counts()["b"] == 2


def test_classify_exact_match_is_solved():
    assert classify("solve", "solve").is_solved()
    assert not classify("solve", "salve").is_solved()


def test_classify_rejects_wrong_length():
    with pytest.raises(ValueError):
        classify("trace", "trac")


def test_guess_result_refuses_unset():
    with pytest.raises(ValueError):
        GuessResult((correct("a"), UNSET, correct("c"), correct("d"), correct("e")))


def test_guess_result_requires_five_positions():
    with pytest.raises(ValueError):
        GuessResult((correct("a"), correct("b")))


def test_letter_constraint_validates_letter():
    with pytest.raises(ValueError):
        LetterConstraint(LetterKind.CORRECT, "A")
    with pytest.raises(ValueError):
        LetterConstraint(LetterKind.ABSENT, "ab")
    with pytest.raises(ValueError):
        LetterConstraint(LetterKind.UNSET, "a")


def test_guess_result_is_immutable_and_hashable():
    a = classify("trace", "crane")
    b = classify("trace", "crane")
    assert a == b
    assert hash(a) == hash(b)
    with pytest.raises(AttributeError):
        a.constraints = ()


def test_render_shows_every_letter():
    out = render(classify("trace", "crane"))
    for ch in "crane":
        assert f" {ch} " in out
