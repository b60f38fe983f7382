"""Letter constraints and guess feedback.

Feedback for one guess is a ``GuessResult``: five ``LetterConstraint``
values, one per position.  Each constraint carries the guessed letter and
one of three committed kinds:

  - ``CORRECT``   letter in the target, at this position
  - ``MISPLACED`` letter in the target, elsewhere
  - ``ABSENT``    letter not in the target (or surplus copy, see ``classify``)

``UNSET`` is a placeholder used only while the interactive assistant is
still collecting a result; a ``GuessResult`` refuses to hold it.
"""

from __future__ import annotations

import enum
import string
from collections import Counter
from dataclasses import dataclass
from typing import Iterator

WORD_LENGTH = 5
ALPHABET = string.ascii_lowercase


class UnsetConstraintError(RuntimeError):
    """An ``UNSET`` placeholder reached code that expects committed feedback."""


class LetterKind(enum.Enum):
    ABSENT = "absent"
    MISPLACED = "misplaced"
    CORRECT = "correct"
    UNSET = "unset"


_SYMBOLS = {
    LetterKind.CORRECT: "!",
    LetterKind.MISPLACED: "?",
    LetterKind.ABSENT: ".",
    LetterKind.UNSET: "-",
}

# ANSI backgrounds, same palette as the game's tiles
_COLOURS = {
    LetterKind.CORRECT: "\033[1;42m",
    LetterKind.MISPLACED: "\033[1;43m",
    LetterKind.ABSENT: "\033[1;47m",
    LetterKind.UNSET: "\033[1;44m",
}
_RESET = "\033[0m"


@dataclass(frozen=True)
class LetterConstraint:
    kind: LetterKind
    letter: str

    def __post_init__(self) -> None:
        if self.kind is LetterKind.UNSET:
            if self.letter != "-":
                raise ValueError("UNSET constraint carries no letter")
        elif len(self.letter) != 1 or self.letter not in ALPHABET:
            raise ValueError(f"expected a single letter a-z, got {self.letter!r}")

    def __str__(self) -> str:
        return f"{self.letter}{_SYMBOLS[self.kind]}"


def absent(letter: str) -> LetterConstraint:
    return LetterConstraint(LetterKind.ABSENT, letter)


def misplaced(letter: str) -> LetterConstraint:
    return LetterConstraint(LetterKind.MISPLACED, letter)


def correct(letter: str) -> LetterConstraint:
    return LetterConstraint(LetterKind.CORRECT, letter)


UNSET = LetterConstraint(LetterKind.UNSET, "-")


@dataclass(frozen=True)
class GuessResult:
    """Committed feedback for a single guess (immutable, never UNSET)."""

    constraints: tuple[LetterConstraint, ...]

    def __post_init__(self) -> None:
        constraints = tuple(self.constraints)
        object.__setattr__(self, "constraints", constraints)
        if len(constraints) != WORD_LENGTH:
            raise ValueError(
                f"a guess result has {WORD_LENGTH} positions, got {len(constraints)}"
            )
        if any(c.kind is LetterKind.UNSET for c in constraints):
            raise ValueError("cannot commit a guess result with UNSET positions")

    def __iter__(self) -> Iterator[LetterConstraint]:
        return iter(self.constraints)

    def __getitem__(self, i: int) -> LetterConstraint:
        return self.constraints[i]

    def __len__(self) -> int:
        return len(self.constraints)

    def __str__(self) -> str:
        return "".join(str(c) for c in self.constraints)

    @property
    def word(self) -> str:
        """The guess this result was produced for."""
        return "".join(c.letter for c in self.constraints)

    def is_solved(self) -> bool:
        return all(c.kind is LetterKind.CORRECT for c in self.constraints)

    def confirmed_counts(self) -> Counter:
        """Per letter, how many copies this result proves the target holds."""
        return Counter(
            c.letter for c in self.constraints if c.kind is not LetterKind.ABSENT
        )


# An ordered, append-only sequence of results for one session.
ConstraintHistory = tuple[GuessResult, ...]


def classify(target: str, guess: str) -> GuessResult:
    """Return the feedback *guess* receives when the secret is *target*.

    Repeated letters are scored as a multiset: correct positions are
    matched first, then misplaced letters consume the target's remaining
    copies from left to right.  Extra copies in the guess are ``ABSENT``.
    """
    if len(target) != WORD_LENGTH or len(guess) != WORD_LENGTH:
        raise ValueError(
            f"expected {WORD_LENGTH}-letter words, got {target!r} and {guess!r}"
        )

    kinds = [LetterKind.ABSENT] * WORD_LENGTH
    remaining = Counter(target)

    # Pass 1 - correct positions
    for i, (t, g) in enumerate(zip(target, guess)):
        if g == t:
            kinds[i] = LetterKind.CORRECT
            remaining[g] -= 1

    # Pass 2 - misplaced letters
    for i, g in enumerate(guess):
        if kinds[i] is LetterKind.CORRECT:
            continue
        if remaining[g] > 0:
            kinds[i] = LetterKind.MISPLACED
            remaining[g] -= 1

    return GuessResult(
        tuple(LetterConstraint(k, g) for k, g in zip(kinds, guess))
    )


def render(constraints) -> str:
    """Return an ANSI-coloured tile strip for a result or a partial buffer."""
    return "".join(
        f"{_COLOURS[c.kind]} {c.letter} {_RESET}" for c in constraints
    )
