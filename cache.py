"""Strategy cache: word-list digest -> (strategy, opening guess).

Choosing a strategy means simulating the whole word list three times, so
the winner is remembered per word list.  A changed list has a different
digest and simply misses.  Anything wrong with the cache file is treated
as a miss as well; the cache never stops the solver from starting.
"""

from __future__ import annotations

import os
import pickle
import sys
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from constraints import ALPHABET, WORD_LENGTH
from strategy import Strategy

_DIR = Path(__file__).resolve().parent
DEFAULT_CACHE = _DIR / "data" / "cache" / "strategies.pkl"


@dataclass(frozen=True)
class CacheEntry:
    strategy: Strategy
    opening_guess: str


class StrategyStore(ABC):
    """Key-value store for previously selected strategies."""

    @abstractmethod
    def get(self, digest: str) -> CacheEntry | None:
        """Return the entry for *digest*, or None on a miss."""
        ...

    @abstractmethod
    def put(self, digest: str, entry: CacheEntry) -> None:
        ...


class MemoryStore(StrategyStore):
    """Process-local store (tests, ``--no-cache``)."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, digest: str) -> CacheEntry | None:
        return self._entries.get(digest)

    def put(self, digest: str, entry: CacheEntry) -> None:
        self._entries[digest] = entry


# ── File-backed store ──────────────────────────────────────

def save_records(records: dict, path: Path) -> None:
    """Atomically save the record map (write tmp then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            pickle.dump(records, f, protocol=pickle.HIGHEST_PROTOCOL)
        os.replace(tmp, str(path))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def load_records(path: Path) -> dict[str, tuple[str, str]]:
    """Load the record map, or an empty one if the file is absent or bad."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            data = pickle.load(f)
    except Exception as exc:
        print(f"  [info] ignoring unreadable strategy cache {path}: {exc}",
              file=sys.stderr)
        return {}
    if not isinstance(data, dict):
        print(f"  [info] ignoring malformed strategy cache {path}",
              file=sys.stderr)
        return {}
    return data


def _is_word(guess) -> bool:
    return (isinstance(guess, str) and len(guess) == WORD_LENGTH
            and all(ch in ALPHABET for ch in guess))


class FileStore(StrategyStore):
    """Single pickle file holding every digest seen so far."""

    def __init__(self, path: str | Path = DEFAULT_CACHE) -> None:
        self.path = Path(path)

    def get(self, digest: str) -> CacheEntry | None:
        record = load_records(self.path).get(digest)
        if record is None:
            return None
        try:
            label, guess = record
            strategy = Strategy(label)
        except (TypeError, ValueError):
            strategy = guess = None
        if strategy is None or not _is_word(guess):
            print(f"  [info] ignoring malformed cache record for {digest[:12]}",
                  file=sys.stderr)
            return None
        return CacheEntry(strategy, guess)

    def put(self, digest: str, entry: CacheEntry) -> None:
        records = load_records(self.path)
        records[digest] = (entry.strategy.value, entry.opening_guess)
        save_records(records, self.path)
