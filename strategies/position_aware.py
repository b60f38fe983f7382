"""Position-aware opener: the commonest letter in each position."""

from __future__ import annotations

import random
from typing import Sequence

import numpy as np

from constraints import ALPHABET
from scoring import frequency_table
from strategy import Opener, Strategy


class PositionAwareOpener(Opener):
    """For each position emit the letter that occurs there most often.

    Ties go to the letter earliest in the alphabet.
    """

    @property
    def strategy(self) -> Strategy:
        return Strategy.FREQUENCY_POSITION_AWARE

    def first_guess(
        self,
        words: Sequence[str],
        rng: random.Random | None = None,
    ) -> str:
        table = frequency_table(words)
        # argmax returns the first maximum, i.e. the lowest letter index
        return "".join(ALPHABET[i] for i in np.argmax(table, axis=1))
