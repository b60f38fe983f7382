#!/usr/bin/env python3
"""Interactive assistant for a live game.

The assistant proposes a guess, the player types back the colours the game
showed, and the assistant narrows and re-ranks the word list.

Feedback is entered in three stages (misplaced, absent, correct).  Each
stage takes up to five characters from ``a-z`` and ``-``, where ``-`` means
"not this colour"; short lines are padded with ``-``.  An empty line gives
every position not yet set that stage's colour, using the letters of the
last guess.  Whatever is still unset after the correct stage is taken as
correct.  Type ``exit`` at any prompt to quit.

Usage:
    python3 solver.py                          # bundled word list
    python3 solver.py --words my_words.txt     # custom word list
    python3 solver.py --no-cache --seed 7      # recompute, seeded random opener
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Callable, Sequence

from cache import DEFAULT_CACHE, FileStore, MemoryStore
from constraints import (
    ALPHABET,
    UNSET,
    WORD_LENGTH,
    ConstraintHistory,
    GuessResult,
    LetterConstraint,
    LetterKind,
    render,
)
from lexicon import Lexicon, load_lexicon
from scoring import PARALLEL_THRESHOLD, ScoredWord, score_and_sort, share
from tournament import GUESS_BUDGET, resolve_opening
from wordle_env import filter_candidates

# Invalid lines / rejected confirmations tolerated before giving up.
MAX_ATTEMPTS = 10

STAGES = (LetterKind.MISPLACED, LetterKind.ABSENT, LetterKind.CORRECT)
_STAGE_NAMES = {
    LetterKind.MISPLACED: "misplaced (yellow)",
    LetterKind.ABSENT: "absent (grey)",
    LetterKind.CORRECT: "correct (green)",
}

Ask = Callable[[str], str]
Say = Callable[..., None]


class SessionExit(Exception):
    """The player asked to leave, or gave up entering valid feedback."""


# ── Input handling ─────────────────────────────────────────

def normalise_line(raw: str) -> str:
    """Validate one feedback line and pad it to five characters.

    Returns ``""`` for an empty line.

    Raises
    ------
    SessionExit
        On ``exit``.
    ValueError
        On characters outside ``a-z-`` or more than five characters.
    """
    line = raw.strip()
    if line == "exit":
        raise SessionExit("exit requested")
    if any(ch not in ALPHABET and ch != "-" for ch in line):
        raise ValueError("Please enter only lowercase letters or '-'.")
    if len(line) > WORD_LENGTH:
        raise ValueError(f"Please enter at most {WORD_LENGTH} characters.")
    if not line:
        return ""
    return line.ljust(WORD_LENGTH, "-")


def read_line(ask: Ask, say: Say) -> str:
    """Prompt until a valid line is entered (bounded)."""
    for _ in range(MAX_ATTEMPTS):
        try:
            return normalise_line(ask(">> "))
        except ValueError as exc:
            say(str(exc))
    raise SessionExit(f"no valid input after {MAX_ATTEMPTS} attempts")


def apply_stage(
    buffer: Sequence[LetterConstraint],
    line: str,
    kind: LetterKind,
    last_guess: str,
) -> list[LetterConstraint]:
    """Return a copy of *buffer* with one stage's line applied."""
    out = list(buffer)
    if not line:
        for i, c in enumerate(out):
            if c.kind is LetterKind.UNSET:
                out[i] = LetterConstraint(kind, last_guess[i])
        return out
    for i, ch in enumerate(line):
        if ch != "-":
            out[i] = LetterConstraint(kind, ch)
    return out


def collect_result(last_guess: str, ask: Ask = input, say: Say = print) -> GuessResult:
    """Ask the player for the feedback *last_guess* received."""
    for _ in range(MAX_ATTEMPTS):
        buffer: list[LetterConstraint] = [UNSET] * WORD_LENGTH
        for kind in STAGES:
            if all(c.kind is not LetterKind.UNSET for c in buffer):
                break
            say(f"Enter the {_STAGE_NAMES[kind]} letters. "
                f"For other letters, use '-':")
            buffer = apply_stage(buffer, read_line(ask, say), kind, last_guess)
        # anything left after the correct stage can only be correct
        buffer = apply_stage(buffer, "", LetterKind.CORRECT, last_guess)

        key = ask(f"You have entered {render(buffer)}. Correct? (y): ").strip()
        if key == "exit":
            raise SessionExit("exit requested")
        if key in ("y", ""):
            return GuessResult(tuple(buffer))
    raise SessionExit(f"feedback not confirmed after {MAX_ATTEMPTS} attempts")


# ── Session ────────────────────────────────────────────────

def _suggest(scored: list[ScoredWord], show_all: bool, say: Say) -> None:
    shares = share(scored)
    if show_all:
        say("Try one of these:")
        for word, pct in shares:
            say(f"  - {word} ({pct:.1f}%)")
    else:
        word, pct = shares[0]
        say(f"Try {word} ({pct:.1f}%)")


def run_session(
    lexicon: Lexicon,
    opening_guess: str,
    ask: Ask = input,
    say: Say = print,
    budget: int = GUESS_BUDGET,
    executor: Executor | None = None,
) -> list[ScoredWord]:
    """Play one assisted game.

    Returns the last ranked candidate list, ``[]`` if the feedback
    contradicted every word in the list.  *executor* is handed to the
    scorer, which only uses it for very large candidate sets.
    """
    say("\nTIPS:")
    say(" - Leave a field empty to give every unset letter that colour")
    say(f" - Lines shorter than {WORD_LENGTH} letters are padded with '-'")
    say(f"\nFirst guess is {opening_guess}!")

    candidates = list(lexicon.words)
    history: ConstraintHistory = ()
    scored: list[ScoredWord] = []
    last_guess = opening_guess

    for round_no in range(1, budget):
        say(f"\nGuess {round_no} of {budget}")
        result = collect_result(last_guess, ask, say)
        history = history + (result,)
        if result.is_solved():
            say(f"Solved in {round_no} guess{'es' if round_no > 1 else ''}!")
            return [ScoredWord(result.word, 1)]

        t0 = time.perf_counter()
        candidates = filter_candidates(candidates, history)
        elapsed = time.perf_counter() - t0
        say(f"[{elapsed * 1000:.1f} ms] Found {len(candidates)} possible "
            f"{'word' if len(candidates) == 1 else 'words'}")
        if not candidates:
            say("No word in the list fits that feedback; "
                "check the colours that were entered.")
            return []

        scored = score_and_sort(candidates, history, executor)
        last_guess = scored[0].word
        _suggest(scored, show_all=len(scored) < 5 or round_no == budget - 1,
                 say=say)

    return scored


# ── CLI ────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Interactive word puzzle assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: data/words.txt)")
    parser.add_argument("--cache", type=str, default=None,
                        help=f"Strategy cache file (default: {DEFAULT_CACHE})")
    parser.add_argument("--no-cache", action="store_true",
                        help="Do not read or write the strategy cache")
    parser.add_argument("--workers", type=int, default=None,
                        help="Max parallel workers for strategy selection")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random opener")
    args = parser.parse_args(argv)

    lex = load_lexicon(args.words)
    store = MemoryStore() if args.no_cache else FileStore(args.cache or DEFAULT_CACHE)
    rng = random.Random(args.seed) if args.seed is not None else None

    entry, cached = resolve_opening(lex, store, max_workers=args.workers, rng=rng)
    if not cached and not args.no_cache:
        print(f"Cached strategy in {store.path}")

    # scoring workers only pay off on very large lists
    pool = (ProcessPoolExecutor(max_workers=args.workers)
            if len(lex) >= PARALLEL_THRESHOLD else None)
    try:
        run_session(lex, entry.opening_guess, executor=pool)
    except (SessionExit, EOFError, KeyboardInterrupt) as exc:
        reason = f" ({exc})" if isinstance(exc, SessionExit) and str(exc) != "exit requested" else ""
        print(f"\nExiting...{reason}", file=sys.stderr)
    finally:
        if pool is not None:
            pool.shutdown()


if __name__ == "__main__":
    main()
