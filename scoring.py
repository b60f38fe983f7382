"""Positional letter-frequency scoring of surviving candidates.

After filtering, every CORRECT position is pinned and every ABSENT letter is
gone.  What is left to decide are the positions that have only ever been
marked MISPLACED.  For those positions we count, across the current
candidates, how often each letter sits there, and reward candidates whose
letters are the common ones:

    score(w) = 1 + sum(freq[i][w[i]] for i in open positions)

The frequencies come from the candidate set being ranked, so scores only
compare within one filtering step.
"""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from constraints import ALPHABET, WORD_LENGTH, GuessResult, LetterKind

# Below this many candidates the per-word work is not worth shipping to workers.
PARALLEL_THRESHOLD = 20_000
_CHUNK = 4_096


@dataclass(frozen=True)
class ScoredWord:
    word: str
    score: int


def letter_matrix(words: Sequence[str]) -> np.ndarray:
    """Return an (n, 5) array of letter indices 0-25.

    Raises ``ValueError`` unless every word is five letters ``a-z``.
    """
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.intp)
    bad = [w for w in words if len(w) != WORD_LENGTH]
    if bad:
        raise ValueError(f"Words with wrong length (expected {WORD_LENGTH}): {bad[:5]}")
    raw = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
    letters = raw.reshape(-1, WORD_LENGTH).astype(np.intp) - ord("a")
    if ((letters < 0) | (letters >= len(ALPHABET))).any():
        raise ValueError("Words must use only the letters a-z")
    return letters


def frequency_table(words: Sequence[str]) -> np.ndarray:
    """5 x 26 table: how often each letter occurs at each position."""
    letters = letter_matrix(words)
    table = np.zeros((WORD_LENGTH, len(ALPHABET)), dtype=np.int64)
    for i in range(WORD_LENGTH):
        table[i] = np.bincount(letters[:, i], minlength=len(ALPHABET))
    return table


def open_positions(history: Sequence[GuessResult]) -> list[int]:
    """Positions where every constraint so far is MISPLACED."""
    return [
        i for i in range(WORD_LENGTH)
        if all(result[i].kind is LetterKind.MISPLACED for result in history)
    ]


def _score_words(
    words: Sequence[str],
    table: np.ndarray,
    positions: list[int],
) -> np.ndarray:
    if not positions:
        return np.ones(len(words), dtype=np.int64)
    letters = letter_matrix(words)[:, positions]
    cols = np.asarray(positions)[None, :]
    return 1 + table[cols, letters].sum(axis=1)


def _score_chunk(args) -> list[int]:
    """Worker: score one chunk of candidates against a shared table."""
    words, table, positions = args
    return _score_words(words, table, positions).tolist()


def score_and_sort(
    candidates: Sequence[str],
    history: Sequence[GuessResult],
    executor: Executor | None = None,
) -> list[ScoredWord]:
    """Score *candidates* and return them best first.

    Ties keep their input order.  An empty candidate list returns ``[]``
    without building the frequency table.  When *executor* is given and the
    list is large, scoring is split into chunks and mapped over it; the
    result is identical to the serial path.
    """
    if len(candidates) == 0:
        return []

    words = list(candidates)
    table = frequency_table(words)
    positions = open_positions(history)

    if executor is not None and len(words) >= PARALLEL_THRESHOLD:
        chunks = [
            (words[i:i + _CHUNK], table, positions)
            for i in range(0, len(words), _CHUNK)
        ]
        scores = np.fromiter(
            (s for part in executor.map(_score_chunk, chunks) for s in part),
            dtype=np.int64,
            count=len(words),
        )
    else:
        scores = _score_words(words, table, positions)

    order = np.argsort(-scores, kind="stable")
    return [ScoredWord(words[j], int(scores[j])) for j in order]


def share(scored: Sequence[ScoredWord]) -> list[tuple[str, float]]:
    """Each candidate's percentage of the total score."""
    total = sum(sw.score for sw in scored)
    if total == 0:
        return [(sw.word, 0.0) for sw in scored]
    return [(sw.word, 100.0 * sw.score / total) for sw in scored]
