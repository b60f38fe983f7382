"""Opening-guess strategies: the closed set and their common interface."""

from __future__ import annotations

import enum
import random
from abc import ABC, abstractmethod
from typing import Sequence


class Strategy(enum.Enum):
    """Heuristics for the first guess, made before any feedback exists.

    Declaration order is the tie-break priority when two strategies solve
    the same number of words.
    """

    FREQUENCY_POSITION_AWARE = "frequency-position-aware"
    FREQUENCY_SIMPLE = "frequency-simple"
    RANDOM = "random"


class Opener(ABC):
    """Interface every opening-guess heuristic implements."""

    @property
    @abstractmethod
    def strategy(self) -> Strategy:
        """The strategy this opener implements."""
        ...

    @abstractmethod
    def first_guess(
        self,
        words: Sequence[str],
        rng: random.Random | None = None,
    ) -> str:
        """Return a 5-letter probe for *words*.

        The probe is built from letter statistics and need not be a word
        from the list.  *rng* only matters for randomised openers.
        """
        ...
