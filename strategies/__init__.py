"""Registry of the built-in opening-guess heuristics.

The set is closed: one opener per ``Strategy`` member, nothing is
discovered at runtime.
"""

from __future__ import annotations

import random
from typing import Sequence

from strategy import Opener, Strategy
from strategies.frequency_simple import FrequencySimpleOpener
from strategies.position_aware import PositionAwareOpener
from strategies.random_strat import RandomOpener

_OPENERS: dict[Strategy, Opener] = {
    opener.strategy: opener
    for opener in (
        PositionAwareOpener(),
        FrequencySimpleOpener(),
        RandomOpener(),
    )
}


def opener_for(strategy: Strategy) -> Opener:
    """Return the opener implementing *strategy*."""
    try:
        return _OPENERS[strategy]
    except KeyError:
        raise ValueError(f"unknown strategy {strategy!r}") from None


def first_guess(
    words: Sequence[str],
    strategy: Strategy,
    rng: random.Random | None = None,
) -> str:
    """Opening guess for *words* under *strategy*."""
    return opener_for(strategy).first_guess(words, rng=rng)


__all__ = [
    "FrequencySimpleOpener",
    "PositionAwareOpener",
    "RandomOpener",
    "first_guess",
    "opener_for",
]
