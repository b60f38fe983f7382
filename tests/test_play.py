from play import play_game
from wordle_env import WordleEnv

WORDS = ["crane", "trace", "grace"]


def scripted(*answers):
    it = iter(answers)
    return lambda prompt="": next(it)


def test_wrong_length_does_not_cost_a_chance():
    env = WordleEnv(WORDS, max_guesses=2)
    env.reset(secret="trace")
    out = []
    assert play_game(env, scripted("cat", "crane", "trace"), out.append)
    assert any("right" in line for line in out)
    assert len(env.history) == 2


def test_loss_reveals_word():
    env = WordleEnv(WORDS, max_guesses=1)
    env.reset(secret="trace")
    out = []
    assert not play_game(env, scripted("grace"), out.append)
    assert out[-1] == "The word was trace!"


def test_exit_ends_game():
    env = WordleEnv(WORDS)
    env.reset(secret="grace")
    out = []
    assert not play_game(env, scripted("exit"), out.append)
    assert "grace" in out[-1]
