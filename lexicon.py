"""Word-list loading.

The word list is a whitespace-separated sequence of lowercase 5-letter
words.  It is loaded once and handed around as an immutable ``Lexicon``;
its SHA-256 digest identifies it in the strategy cache.
"""

from __future__ import annotations

import hashlib
import re
import sys
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from constraints import WORD_LENGTH

_DIR = Path(__file__).resolve().parent
DEFAULT_WORDS = _DIR / "data" / "words.txt"

_WORD = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")


def _strip_accents(text: str) -> str:
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in nfkd if unicodedata.category(ch) != "Mn")


@dataclass(frozen=True)
class Lexicon:
    """A loaded word list and the digest of the text it came from."""
    words: tuple[str, ...]
    digest: str
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.words)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Lexicon":
        """Build a lexicon from an in-memory list (digest over the joined text)."""
        text = "\n".join(words)
        return cls(words=parse_words(text), digest=word_digest(text))


def word_digest(text: str) -> str:
    """Hex SHA-256 of the raw word-list text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def parse_words(text: str) -> tuple[str, ...]:
    """Split *text* into words, keeping file order and dropping repeats.

    Tokens that are not 5 letters a-z (after lowercasing and stripping
    accents) are skipped with a warning.
    """
    seen: set[str] = set()
    words: list[str] = []
    skipped = 0
    for raw in text.split():
        w = _strip_accents(raw.lower())
        if not _WORD.match(w):
            skipped += 1
            continue
        if w in seen:
            continue
        seen.add(w)
        words.append(w)
    if skipped:
        print(f"  [warn] skipped {skipped} token(s) that are not "
              f"{WORD_LENGTH}-letter words", file=sys.stderr)
    return tuple(words)


def load_lexicon(path: str | Path | None = None) -> Lexicon:
    """Load a word list from *path* (default: ``data/words.txt``).

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If it holds no usable words.
    """
    src = Path(path) if path is not None else DEFAULT_WORDS
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    text = src.read_text(encoding="utf-8")
    words = parse_words(text)
    if not words:
        raise ValueError(f"No {WORD_LENGTH}-letter words found in {src}")

    return Lexicon(words=words, digest=word_digest(text), source=src)
