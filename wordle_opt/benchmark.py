"""
benchmark.py

Plays the solver against every answer word and reports accuracy and the
average number of attempts.
"""

import time
from collections import Counter
from dataclasses import dataclass, field

import numpy as np
from tqdm import tqdm

from wordle_opt.solver import SolverState


# attempts charged to a game that was not solved
FAILED_ATTEMPTS = 7


@dataclass
class BenchmarkResult:
    total: int = 0
    solved: int = 0
    attempts: int = 0
    distribution: Counter = field(default_factory=Counter)
    failed_words: list = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def accuracy(self):
        return self.solved / self.total if self.total else 0.0

    @property
    def average(self):
        return self.attempts / self.total if self.total else 0.0

    @property
    def failures(self):
        return self.total - self.solved

    def add(self, word, episode):
        self.total += 1
        if episode.state == SolverState.WON:
            self.solved += 1
            self.attempts += episode.attempts
            self.distribution[episode.attempts] += 1
        else:
            self.attempts += FAILED_ATTEMPTS
            self.distribution[FAILED_ATTEMPTS] += 1
            self.failed_words.append(word)


def run_benchmark(engine, answers=None, limit=None, seed=None, progress=True):
    """
    Solve every word of `answers` (default: the whole solution list).

    `limit` restricts the run to that many words, drawn at random when a
    `seed` is given and from the front of the list otherwise.
    """
    words = list(answers if answers is not None else engine.lists.answers)
    if limit is not None and limit < len(words):
        if seed is not None:
            rng = np.random.default_rng(seed)
            picked = rng.choice(len(words), size=limit, replace=False)
            words = [words[i] for i in sorted(picked)]
        else:
            words = words[:limit]

    result = BenchmarkResult()
    start = time.time()

    bar = tqdm(words, desc="Benchmark", disable=not progress)
    for word in bar:
        episode = engine.solve(word)
        result.add(word, episode)
        bar.set_postfix(
            accuracy=f"{100 * result.accuracy:.1f}%", avg=f"{result.average:.3f}"
        )

    result.elapsed = time.time() - start
    return result


def print_results(result):
    """Pretty print benchmark results."""
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Words tested: {result.total}")
    print(f"Accuracy: {100 * result.accuracy:.2f}% ({result.solved}/{result.total})")
    print(f"Average attempts: {result.average:.4f}")
    if result.elapsed > 0:
        print(f"Time: {result.elapsed:.1f}s ({result.total / result.elapsed:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in sorted(result.distribution.items()):
        pct = 100 * count / result.total
        bar = "#" * int(pct / 2)
        label = "X" if n == FAILED_ATTEMPTS else str(n)
        print(f"  {label}: {count:5d} ({pct:5.2f}%) {bar}")
    if result.failed_words:
        print(f"\nFailed words: {result.failed_words[:20]}")
    print("=" * 50)
