"""Candidate filtering and single-game environment."""

from __future__ import annotations

import random
from collections import Counter
from typing import Iterable, Sequence

from constraints import (
    WORD_LENGTH,
    ConstraintHistory,
    GuessResult,
    LetterConstraint,
    LetterKind,
    UnsetConstraintError,
    classify,
)


class _Rule:
    """One guess result flattened into cheap per-word checks."""

    __slots__ = ("fixed", "excluded", "at_least", "at_most")

    def __init__(self, result: Iterable[LetterConstraint]) -> None:
        constraints = list(result)
        if len(constraints) != WORD_LENGTH:
            raise ValueError(
                f"a guess result has {WORD_LENGTH} positions, got {len(constraints)}"
            )
        confirmed: Counter = Counter()
        for c in constraints:
            if c.kind is LetterKind.UNSET:
                raise UnsetConstraintError(
                    "UNSET constraint in committed history: feedback collection "
                    "handed over an incomplete result"
                )
            if c.kind is not LetterKind.ABSENT:
                confirmed[c.letter] += 1

        self.fixed: list[tuple[int, str]] = []
        self.excluded: list[tuple[int, str]] = []
        self.at_least: dict[str, int] = {}
        self.at_most: dict[str, int] = {}
        for i, c in enumerate(constraints):
            if c.kind is LetterKind.CORRECT:
                self.fixed.append((i, c.letter))
            elif c.kind is LetterKind.MISPLACED:
                self.excluded.append((i, c.letter))
                self.at_least[c.letter] = confirmed[c.letter]
            else:
                # ABSENT: no copy here, and no copies beyond those confirmed
                self.excluded.append((i, c.letter))
                self.at_most[c.letter] = confirmed[c.letter]

    def __call__(self, word: str) -> bool:
        for i, t in self.fixed:
            if word[i] != t:
                return False
        for i, t in self.excluded:
            if word[i] == t:
                return False
        for t, n in self.at_least.items():
            if word.count(t) < n:
                return False
        for t, n in self.at_most.items():
            if word.count(t) > n:
                return False
        return True


def matches(word: str, result: Iterable[LetterConstraint]) -> bool:
    """True if *word* could be the target given a single guess result."""
    return _Rule(result)(word)


def filter_candidates(
    candidates: Iterable[str],
    history: Iterable[Iterable[LetterConstraint]],
) -> list[str]:
    """Keep only candidates consistent with every result in *history*.

    Input order is preserved and a fresh list is always returned.

    Raises
    ------
    UnsetConstraintError
        If any result still holds an ``UNSET`` placeholder.
    """
    rules = [_Rule(result) for result in history]
    return [w for w in candidates if all(rule(w) for rule in rules)]


class WordleEnv:
    """A single game against a known secret.

    Parameters
    ----------
    vocabulary : sequence of str
        Valid secrets (all must be 5 letters).
    max_guesses : int
        Maximum allowed guesses before the game is lost.
    """

    def __init__(
        self,
        vocabulary: Sequence[str],
        max_guesses: int = 5,
    ) -> None:
        bad = [w for w in vocabulary if len(w) != WORD_LENGTH]
        if bad:
            raise ValueError(
                f"Words with wrong length (expected {WORD_LENGTH}): {bad[:5]}"
            )
        self._vocab = list(vocabulary)
        self._vocab_set = set(self._vocab)
        self._max_guesses = max_guesses

        # Game state (set by reset)
        self._secret: str | None = None
        self._history: ConstraintHistory = ()
        self._solved = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def reset(self, secret: str | None = None, rng: random.Random | None = None) -> None:
        """Start a new game. Random secret if *secret* is None."""
        if secret is not None and secret not in self._vocab_set:
            raise ValueError(f"secret {secret!r} is not in the word list")
        if secret is None:
            secret = (rng or random).choice(self._vocab)
        self._secret = secret
        self._history = ()
        self._solved = False

    def guess(self, word: str) -> GuessResult:
        """Submit a guess and receive feedback.

        Any 5-letter string is accepted, not only words from the list.

        Raises
        ------
        RuntimeError
            If the game is over (solved or out of guesses).
        ValueError
            If *word* has the wrong length.
        """
        if self._secret is None:
            raise RuntimeError("Call reset() before guessing")
        if self.game_over():
            raise RuntimeError("Game is already over")
        word = word.lower()
        if len(word) != WORD_LENGTH:
            raise ValueError(
                f"Guess length ({len(word)}) != word length ({WORD_LENGTH})"
            )

        result = classify(self._secret, word)
        self._history = self._history + (result,)
        if result.is_solved():
            self._solved = True
        return result

    def is_solved(self) -> bool:
        return self._solved

    def remaining_guesses(self) -> int:
        return self._max_guesses - len(self._history)

    def game_over(self) -> bool:
        return self._solved or len(self._history) >= self._max_guesses

    @property
    def history(self) -> ConstraintHistory:
        return self._history

    @property
    def secret(self) -> str:
        """Reveal the secret word (only after game over)."""
        if self._secret is None:
            raise RuntimeError("No game in progress")
        if not self.game_over():
            raise RuntimeError("Game is still in progress")
        return self._secret

    def reveal(self) -> str:
        """Return the secret even mid-game (the player gave up)."""
        if self._secret is None:
            raise RuntimeError("No game in progress")
        return self._secret

    @property
    def max_guesses(self) -> int:
        return self._max_guesses
