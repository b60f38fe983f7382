import pickle
import random

from cache import CacheEntry, FileStore, MemoryStore
from strategy import Strategy


def test_file_store_round_trip(tmp_path):
    path = tmp_path / "cache" / "strategies.pkl"
    store = FileStore(path)
    assert store.get("abc") is None
    entry = CacheEntry(Strategy.FREQUENCY_SIMPLE, "earot")
    store.put("abc", entry)
    assert FileStore(path).get("abc") == entry


def test_other_digest_misses(tmp_path):
    store = FileStore(tmp_path / "s.pkl")
    store.put("abc", CacheEntry(Strategy.RANDOM, "qwert"))
    assert store.get("abd") is None


def test_entries_accumulate(tmp_path):
    store = FileStore(tmp_path / "s.pkl")
    store.put("one", CacheEntry(Strategy.RANDOM, "qwert"))
    store.put("two", CacheEntry(Strategy.FREQUENCY_POSITION_AWARE, "saree"))
    assert store.get("one").opening_guess == "qwert"
    assert store.get("two").strategy is Strategy.FREQUENCY_POSITION_AWARE


def test_corrupt_file_is_a_miss(tmp_path, capsys):
    path = tmp_path / "s.pkl"
    path.write_bytes(b"\x00not a pickle")
    store = FileStore(path)
    assert store.get("abc") is None
    assert "[info]" in capsys.readouterr().err
    store.put("abc", CacheEntry(Strategy.RANDOM, "qwert"))
    assert store.get("abc") == CacheEntry(Strategy.RANDOM, "qwert")


def test_wrong_shape_is_a_miss(tmp_path):
    path = tmp_path / "s.pkl"
    path.write_bytes(pickle.dumps(["not", "a", "dict"]))
    assert FileStore(path).get("abc") is None
    path.write_bytes(pickle.dumps({"abc": ("no-such-strategy", "qwert")}))
    assert FileStore(path).get("abc") is None
    for guess in ("ab", "QWERT", "qwerty", 12345, None):
        path.write_bytes(pickle.dumps({"abc": ("random", guess)}))
        assert FileStore(path).get("abc") is None
    path.write_bytes(pickle.dumps({"abc": "random"}))
    assert FileStore(path).get("abc") is None


def test_damaged_pickle_is_a_miss(tmp_path, capsys):
    good = pickle.dumps({"abc": ("random", "qwert")}, protocol=pickle.HIGHEST_PROTOCOL)
    rng = random.Random(3)
    damaged = [good[:n] for n in range(len(good))]
    for _ in range(500):
        raw = bytearray(good)
        for _ in range(rng.randint(1, 4)):
            raw[rng.randrange(len(raw))] = rng.randrange(256)
        damaged.append(bytes(raw))
    # oversized length fields make pickle ask for huge allocations
    damaged.append(b"\x80\x04\x95" + b"\xff" * 8)
    damaged.append(b"\x80\x04\x8e" + (1 << 62).to_bytes(8, "little"))

    path = tmp_path / "s.pkl"
    for raw in damaged:
        path.write_bytes(raw)
        entry = FileStore(path).get("abc")
        # a flipped letter can still leave a well-formed record behind
        assert entry is None or (len(entry.opening_guess) == 5
                                 and entry.opening_guess.isalpha())
    capsys.readouterr()

    path.write_bytes(good[:-3])
    assert FileStore(path).get("abc") is None
    assert "[info]" in capsys.readouterr().err


def test_memory_store():
    store = MemoryStore()
    assert store.get("x") is None
    store.put("x", CacheEntry(Strategy.RANDOM, "abcde"))
    assert store.get("x").strategy is Strategy.RANDOM
