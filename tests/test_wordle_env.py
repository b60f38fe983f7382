import random

import pytest

from wordle_env import WordleEnv

WORDS = ["crane", "trace", "grace", "brace"]


def test_reset_rejects_unknown_secret():
    env = WordleEnv(WORDS)
    with pytest.raises(ValueError):
        env.reset(secret="zebra")


def test_rejects_wrong_length_vocabulary():
    with pytest.raises(ValueError):
        WordleEnv(["crane", "cat"])


def test_guess_before_reset():
    env = WordleEnv(WORDS)
    with pytest.raises(RuntimeError):
        env.guess("crane")


def test_game_is_won_on_exact_guess():
    env = WordleEnv(WORDS)
    env.reset(secret="trace")
    result = env.guess("TRACE")
    assert result.is_solved()
    assert env.is_solved()
    assert env.game_over()
    assert env.secret == "trace"


def test_non_words_are_accepted_as_probes():
    env = WordleEnv(WORDS)
    env.reset(secret="trace")
    env.guess("eeeee")
    assert len(env.history) == 1


def test_budget_runs_out():
    env = WordleEnv(WORDS, max_guesses=2)
    env.reset(secret="trace")
    env.guess("crane")
    with pytest.raises(RuntimeError):
        _ = env.secret
    assert env.reveal() == "trace"
    env.guess("grace")
    assert env.game_over()
    assert not env.is_solved()
    assert env.remaining_guesses() == 0
    with pytest.raises(RuntimeError):
        env.guess("brace")


def test_wrong_length_guess():
    env = WordleEnv(WORDS)
    env.reset(secret="trace")
    with pytest.raises(ValueError):
        env.guess("tracer")


def test_random_secret_is_drawn_from_vocabulary():
    env = WordleEnv(WORDS)
    env.reset(rng=random.Random(1))
    assert env.reveal() in WORDS
