#!/usr/bin/env python3
"""Play the guessing game in the terminal against a random secret.

Useful for trying the assistant (``solver.py``) in a second terminal.

Usage:
    python3 play.py                     # bundled word list
    python3 play.py --words list.txt    # custom word list
    python3 play.py --debug --seed 3    # show the secret, fixed draw
"""

from __future__ import annotations

import argparse
import random
from typing import Callable

from constraints import WORD_LENGTH, render
from lexicon import load_lexicon
from tournament import GUESS_BUDGET
from wordle_env import WordleEnv


def play_game(
    env: WordleEnv,
    ask: Callable[[str], str] = input,
    say: Callable[..., None] = print,
) -> bool:
    """Run one game on an already reset *env*; return True if solved.

    Wrong-length input does not use up a chance.  ``exit`` ends the game
    early and reveals the secret.
    """
    say(f"I have a {WORD_LENGTH} letter word in mind. Can you guess it?")
    while not env.game_over():
        word = ask(">> ").strip().lower()
        if word == "exit":
            break
        if len(word) != WORD_LENGTH or not word.isalpha() or not word.isascii():
            say(f"Please enter a word of {WORD_LENGTH} letters")
            continue
        result = env.guess(word)
        say(f"\n{render(result)}")
        if result.is_solved():
            say("You guessed it right!")
            return True
        if env.remaining_guesses():
            say(f"You guessed it wrong. You have {env.remaining_guesses()} "
                f"chances left.")

    say(f"The word was {env.reveal()}!")
    return False


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Terminal word guessing game")
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: data/words.txt)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--debug", action="store_true", help="Print the secret")
    args = parser.parse_args(argv)

    lex = load_lexicon(args.words)
    env = WordleEnv(lex.words, max_guesses=GUESS_BUDGET)
    env.reset(rng=random.Random(args.seed))
    if args.debug:
        print(f"(debug: {env.reveal()})")

    try:
        play_game(env)
    except (EOFError, KeyboardInterrupt):
        print(f"\nExiting. The word was {env.reveal()}!")


if __name__ == "__main__":
    main()
