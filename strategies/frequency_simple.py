"""Simple frequency opener: the five commonest letters overall."""

from __future__ import annotations

import random
from typing import Sequence

import numpy as np

from constraints import ALPHABET, WORD_LENGTH
from scoring import frequency_table
from strategy import Opener, Strategy


class FrequencySimpleOpener(Opener):
    """Concatenate the five letters with the highest global count.

    Positions are ignored: letters are emitted in descending count order,
    ties in alphabetical order.
    """

    @property
    def strategy(self) -> Strategy:
        return Strategy.FREQUENCY_SIMPLE

    def first_guess(
        self,
        words: Sequence[str],
        rng: random.Random | None = None,
    ) -> str:
        counts = frequency_table(words).sum(axis=0)
        top = np.argsort(-counts, kind="stable")[:WORD_LENGTH]
        return "".join(ALPHABET[i] for i in top)
