#!/usr/bin/env python3
"""Pick the best opening strategy for a word list by brute force.

Every heuristic in ``Strategy`` plays one game against every word in the
list.  Each game starts from the heuristic's opening probe; afterwards the
next guess is always the top-scored survivor.  A game counts as solved when
that top survivor is the target before the guess budget runs out.  The
heuristic solving the most words wins.

Games are independent, so they are fanned out over a process pool and only
the per-game results are gathered back.
"""

from __future__ import annotations

import argparse
import json
import os
import random
import sys
import time
from concurrent.futures import Executor, ProcessPoolExecutor
from dataclasses import asdict, dataclass, field
from functools import partial
from pathlib import Path
from typing import Sequence

from cache import CacheEntry, StrategyStore
from lexicon import Lexicon
from scoring import score_and_sort
from strategies import first_guess
from strategy import Strategy
from wordle_env import WordleEnv, filter_candidates

RESULTS_DIR = Path(__file__).resolve().parent / "results"

# Feedback rounds per simulated game.
GUESS_BUDGET = 5


# ------------------------------------------------------------------
# Result containers
# ------------------------------------------------------------------

@dataclass
class GameResult:
    target: str
    num_guesses: int
    solved: bool


@dataclass
class StrategyReport:
    strategy: Strategy
    opening_guess: str
    games: list[GameResult] = field(default_factory=list)

    @property
    def solved(self) -> int:
        return sum(1 for g in self.games if g.solved)

    @property
    def mean_guesses(self) -> float:
        solved = [g.num_guesses for g in self.games if g.solved]
        return sum(solved) / len(solved) if solved else 0.0

    def guess_distribution(self) -> dict[str, int]:
        dist: dict[str, int] = {}
        for g in self.games:
            key = str(g.num_guesses) if g.solved else "failed"
            dist[key] = dist.get(key, 0) + 1
        return dist

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy.value,
            "opening_guess": self.opening_guess,
            "games_played": len(self.games),
            "games_solved": self.solved,
            "mean_guesses": round(self.mean_guesses, 3),
            "guess_distribution": self.guess_distribution(),
            "games": [asdict(g) for g in self.games],
        }


@dataclass
class SelectionResult:
    winner: Strategy
    opening_guess: str
    reports: list[StrategyReport]

    def report_for(self, strategy: Strategy) -> StrategyReport:
        for r in self.reports:
            if r.strategy is strategy:
                return r
        raise KeyError(strategy)


# ------------------------------------------------------------------
# Single game (runs in a worker process)
# ------------------------------------------------------------------

def simulate_target(
    words: Sequence[str],
    target: str,
    opening_guess: str,
    max_guesses: int = GUESS_BUDGET,
) -> GameResult:
    """Play one game against *target* and report how it went.

    Raises
    ------
    ValueError
        If *target* is not in *words*.
    RuntimeError
        If filtering ever eliminates *target*.
    """
    env = WordleEnv(words, max_guesses=max_guesses)
    env.reset(secret=target)

    candidates = list(words)
    guess = opening_guess
    while True:
        env.guess(guess)
        candidates = filter_candidates(candidates, env.history)
        if target not in candidates:
            raise RuntimeError(
                f"filtering eliminated target {target!r} "
                f"(history: {', '.join(str(r) for r in env.history)})"
            )
        top = score_and_sort(candidates, env.history)[0].word
        if top == target:
            # the target still has to be played unless it was just guessed
            played = len(env.history) + (0 if env.is_solved() else 1)
            return GameResult(target, played, True)
        if env.game_over():
            return GameResult(target, len(env.history), False)
        guess = top


def _play_all(
    words: Sequence[str],
    opening_guess: str,
    max_guesses: int,
    executor: Executor | None,
    workers: int,
) -> list[GameResult]:
    play = partial(simulate_target, words, opening_guess=opening_guess,
                   max_guesses=max_guesses)
    if executor is None:
        return [play(t) for t in words]
    chunksize = max(1, len(words) // (workers * 4))
    return list(executor.map(play, words, chunksize=chunksize))


# ------------------------------------------------------------------
# Evaluation and selection
# ------------------------------------------------------------------

def _resolve_workers(max_workers: int | None) -> int:
    if max_workers is None:
        return os.cpu_count() or 4
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    return max_workers


def run_strategy(
    words: Sequence[str],
    strategy: Strategy,
    max_workers: int | None = None,
    rng: random.Random | None = None,
    max_guesses: int = GUESS_BUDGET,
    executor: Executor | None = None,
) -> StrategyReport:
    """Play every word in *words* as the target using *strategy*'s opener."""
    words = tuple(words)
    opening = first_guess(words, strategy, rng=rng)
    workers = _resolve_workers(max_workers)

    if executor is not None or workers == 1:
        games = _play_all(words, opening, max_guesses, executor, workers)
    else:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            games = _play_all(words, opening, max_guesses, pool, workers)

    return StrategyReport(strategy=strategy, opening_guess=opening, games=games)


def evaluate(
    words: Sequence[str],
    strategy: Strategy,
    max_workers: int | None = None,
    rng: random.Random | None = None,
) -> tuple[int, str]:
    """Return ``(solved_count, opening_guess)`` for *strategy*."""
    report = run_strategy(words, strategy, max_workers=max_workers, rng=rng)
    return report.solved, report.opening_guess


def select_strategy(
    words: Sequence[str],
    max_workers: int | None = None,
    rng: random.Random | None = None,
    max_guesses: int = GUESS_BUDGET,
    verbose: bool = True,
) -> SelectionResult:
    """Evaluate every strategy and return the winner with all reports.

    Strategies run one after another, each fanned out over the same pool.
    The winner has the strictly highest solved count; on a tie the one
    declared first in ``Strategy`` wins.
    """
    words = tuple(words)
    if not words:
        raise ValueError("cannot select a strategy for an empty word list")
    workers = _resolve_workers(max_workers)
    options = list(Strategy)

    if verbose:
        print(f"Choosing opening strategy for {len(words)} words "
              f"(workers: {workers}) ...", flush=True)

    t0 = time.time()
    reports: list[StrategyReport] = []
    pool = ProcessPoolExecutor(max_workers=workers) if workers > 1 else None
    try:
        for i, strategy in enumerate(options, 1):
            if verbose:
                print(f"  [{i}/{len(options)}] testing {strategy.value} ...",
                      end="", flush=True)
            report = run_strategy(words, strategy, max_workers=workers,
                                  rng=rng, max_guesses=max_guesses,
                                  executor=pool)
            reports.append(report)
            if verbose:
                print(f"\r  [{i}/{len(options)}] {strategy.value:<26} "
                      f"opener {report.opening_guess} — "
                      f"{report.solved}/{len(words)} solved", flush=True)
    finally:
        if pool is not None:
            pool.shutdown()

    best = reports[0]
    for report in reports[1:]:
        if report.solved > best.solved:
            best = report

    if verbose:
        elapsed = time.time() - t0
        total = len(words) * len(options)
        rate = total / elapsed if elapsed > 0 else float("inf")
        print(f"Best strategy is {best.strategy.value} with "
              f"{best.solved}/{len(words)} solvable words "
              f"({100 * best.solved / len(words):.1f}%)")
        print(f"  Solved {total} games with {len(options)} strategies "
              f"in {elapsed:.1f}s ({rate:.0f} games/s)", flush=True)

    return SelectionResult(winner=best.strategy,
                           opening_guess=best.opening_guess,
                           reports=reports)


def select(
    words: Sequence[str],
    max_workers: int | None = None,
    rng: random.Random | None = None,
) -> tuple[Strategy, str]:
    """Return ``(winning_strategy, opening_guess)`` for *words*."""
    result = select_strategy(words, max_workers=max_workers, rng=rng,
                             verbose=False)
    return result.winner, result.opening_guess


def resolve_opening(
    lexicon: Lexicon,
    store: StrategyStore,
    max_workers: int | None = None,
    rng: random.Random | None = None,
    verbose: bool = True,
) -> tuple[CacheEntry, bool]:
    """Cached strategy for *lexicon*, selecting and storing one on a miss.

    Returns the entry and whether it came from the store.
    """
    entry = store.get(lexicon.digest)
    if entry is not None:
        if verbose:
            print(f"Using {entry.strategy.value} strategy from cache "
                  f"for word list {lexicon.digest[:12]}")
        return entry, True

    if verbose:
        print(f"No cached strategy found, generating one for word list "
              f"{lexicon.digest[:12]}")
    result = select_strategy(lexicon.words, max_workers=max_workers, rng=rng,
                             verbose=verbose)
    entry = CacheEntry(result.winner, result.opening_guess)
    store.put(lexicon.digest, entry)
    return entry, False


# ------------------------------------------------------------------
# Reporting
# ------------------------------------------------------------------

def print_summary(reports: Sequence[StrategyReport]) -> None:
    print(f"\n{'Strategy':<26} {'Opener':>6} {'Games':>6} {'Solved':>7} "
          f"{'Rate':>6} {'Mean':>6}")
    print("-" * 62)
    ranking = sorted(reports, key=lambda r: -r.solved)
    for r in ranking:
        n = len(r.games)
        rate = 100 * r.solved / n if n else 0.0
        print(f"{r.strategy.value:<26} {r.opening_guess:>6} {n:>6} "
              f"{r.solved:>7} {rate:>5.1f}% {r.mean_guesses:>6.2f}")
    print()


def plot_histograms(reports: Sequence[StrategyReport],
                    path: str | Path | None = None) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("matplotlib not installed — skipping plot", file=sys.stderr)
        return

    if not reports:
        return

    cols = len(reports)
    fig, axes = plt.subplots(1, cols, figsize=(5 * cols, 4), squeeze=False)
    solved = [g.num_guesses for r in reports for g in r.games if g.solved]
    max_guess = max(solved) if solved else GUESS_BUDGET + 1
    bins = list(range(1, max_guess + 2))

    for ax, r in zip(axes[0], reports):
        ax.hist([g.num_guesses for g in r.games if g.solved], bins=bins,
                edgecolor="black", align="left")
        ax.set_title(f"{r.strategy.value} ({r.opening_guess})", fontsize=10)
        ax.set_xlabel("Guesses")
        ax.set_ylabel("Solved words")

    fig.suptitle("Guess-count distribution by opening strategy")
    fig.tight_layout()
    dest = Path(path) if path else RESULTS_DIR / "strategy_histograms.png"
    dest.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(dest, dpi=150)
    plt.close(fig)
    print(f"Histogram saved to {dest}")


def to_json(result: SelectionResult, lexicon: Lexicon, path: str | Path) -> None:
    """Write the selection and every game as JSON."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "word_list": str(lexicon.source) if lexicon.source else None,
        "digest": lexicon.digest,
        "num_words": len(lexicon),
        "winner": result.winner.value,
        "opening_guess": result.opening_guess,
        "strategies": [r.to_dict() for r in result.reports],
    }
    p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"JSON saved to {p}")


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Compare opening strategies on a word list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python tournament.py                             # bundled word list
  python tournament.py --words my_words.txt        # custom word list
  python tournament.py --workers 4 --seed 7        # 4 processes, seeded random opener
  python tournament.py --json out.json --plot out.png
""",
    )
    parser.add_argument("--words", type=str, default=None,
                        help="Path to word list (default: data/words.txt)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Max parallel workers (default: all CPU cores)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random opener (default: unseeded)")
    parser.add_argument("--json", type=str, default=None, help="Save results JSON path")
    parser.add_argument("--plot", type=str, default=None, help="Save histogram path")
    args = parser.parse_args(argv)

    from lexicon import load_lexicon

    lex = load_lexicon(args.words)
    print(f"Word list: {len(lex)} words (digest {lex.digest[:12]})")

    rng = random.Random(args.seed) if args.seed is not None else None
    result = select_strategy(lex.words, max_workers=args.workers, rng=rng)
    print_summary(result.reports)
    print(f"Winner: {result.winner.value}, first guess {result.opening_guess}")

    if args.json:
        to_json(result, lex, args.json)
    if args.plot:
        plot_histograms(result.reports, args.plot)


if __name__ == "__main__":
    main()
