"""Random opener: five uniformly drawn letters (the baseline)."""

from __future__ import annotations

import random
from typing import Sequence

from constraints import ALPHABET, WORD_LENGTH
from strategy import Opener, Strategy


class RandomOpener(Opener):
    """Ignore the word list and draw each letter independently.

    Pass a seeded ``random.Random`` for a reproducible probe.
    """

    @property
    def strategy(self) -> Strategy:
        return Strategy.RANDOM

    def first_guess(
        self,
        words: Sequence[str],
        rng: random.Random | None = None,
    ) -> str:
        rng = rng or random.Random()
        return "".join(rng.choice(ALPHABET) for _ in range(WORD_LENGTH))
