"""
search.py

Parallel arg-max of the fitness function over a guess vocabulary.

The vocabulary is cut into contiguous chunks that worker processes score
independently. Workers only read the pattern matrix and the per-round
scoring context; the parent reassembles the scores in vocabulary order and
takes the first maximum, so chunk boundaries never change the result.
"""

import multiprocessing as mp
import os

import numpy as np
from tqdm import tqdm

from wordle_opt.fitness import (
    ENTROPY,
    ENTROPY_ONLY,
    GuessTable,
    ScoringContext,
    score_indices,
)
from wordle_opt.patterns import pattern_matrix


_SEARCH_WORKER_STATE = {}


def _init_search_worker(matrix, table):
    _SEARCH_WORKER_STATE["matrix"] = matrix
    _SEARCH_WORKER_STATE["table"] = table


def _worker_score_chunk(task):
    start, guess_idx, context = task
    matrix = _SEARCH_WORKER_STATE["matrix"]
    table = _SEARCH_WORKER_STATE["table"]
    return start, score_indices(guess_idx, matrix, table, context)


class ParallelSearch:
    """
    Scores guesses with a pool of worker processes.

    The process pool is started lazily on the first search and reused for
    every later round; its initializer installs the matrix and guess table
    once per worker. With a single worker everything runs in-process.
    """

    def __init__(self, matrix, table, workers=None, chunk_size=None, progress=False):
        worker_count = workers if workers is not None else (os.cpu_count() or 1)
        self.workers = max(1, int(worker_count))
        self.chunk_size = chunk_size
        self.progress = progress
        self.matrix = matrix
        self.table = table
        self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def _get_pool(self):
        if self._pool is None:
            start_methods = mp.get_all_start_methods()
            start_method = "fork" if "fork" in start_methods else "spawn"
            ctx = mp.get_context(start_method)
            self._pool = ctx.Pool(
                processes=self.workers,
                initializer=_init_search_worker,
                initargs=(self.matrix, self.table),
            )
        return self._pool

    def _chunk_size(self, n):
        if self.chunk_size is not None:
            return max(1, int(self.chunk_size))
        # several tasks per worker so no process sits idle
        return max(1, -(-n // (self.workers * 4)))

    def _tasks(self, guess_idx, context):
        chunk_size = self._chunk_size(len(guess_idx))
        return [
            (start, guess_idx[start:start + chunk_size], context)
            for start in range(0, len(guess_idx), chunk_size)
        ]

    def score(self, guess_idx, context):
        """Scores for `guess_idx`, in the same order."""
        guess_idx = np.asarray(guess_idx, dtype=np.int64)
        n = len(guess_idx)
        tasks = self._tasks(guess_idx, context)

        scores = np.empty(n, dtype=np.float64)
        with tqdm(
            total=n, desc="Scoring guesses", disable=not self.progress, leave=False
        ) as bar:
            if self.workers == 1 or len(tasks) == 1:
                results = (
                    (start, score_indices(chunk, self.matrix, self.table, ctx))
                    for start, chunk, ctx in tasks
                )
            else:
                results = self._get_pool().imap_unordered(
                    _worker_score_chunk, tasks, chunksize=1
                )
            for start, chunk_scores in results:
                scores[start:start + len(chunk_scores)] = chunk_scores
                bar.update(len(chunk_scores))

        return scores

    def best_guess(self, guess_idx, context):
        """
        Index (into the guess vocabulary) and score of the best guess.

        Ties go to the guess that comes first in `guess_idx`. Requires a
        non-empty `guess_idx`; the context already guarantees a non-empty
        pool.
        """
        guess_idx = np.asarray(guess_idx, dtype=np.int64)
        if guess_idx.size == 0:
            raise ValueError("best_guess requires a non-empty vocabulary")
        scores = self.score(guess_idx, context)
        best = int(np.argmax(scores))
        return int(guess_idx[best]), float(scores[best])

    def top_guesses(self, guess_idx, context, k):
        """The `k` best (index, score) pairs, best first, ties in input order."""
        guess_idx = np.asarray(guess_idx, dtype=np.int64)
        scores = self.score(guess_idx, context)
        order = np.argsort(-scores, kind="stable")[:k]
        return [(int(guess_idx[i]), float(scores[i])) for i in order]


def best_guess(
    vocabulary,
    pool,
    lists,
    weights=ENTROPY_ONLY,
    fitness=ENTROPY,
    strict=False,
    constraints=None,
    used_letters=0,
    workers=1,
):
    """
    Best word of `vocabulary` to guess against the candidate `pool`.

    Both arguments are lists of words drawn from `lists`; both must be
    non-empty.
    """
    if not vocabulary:
        raise ValueError("best_guess requires a non-empty vocabulary")
    if not pool:
        raise ValueError("best_guess requires a non-empty pool")

    matrix = pattern_matrix(lists, strict)
    table = GuessTable(lists)
    context = ScoringContext.build(
        lists,
        pool,
        constraints=constraints,
        used_letters=used_letters,
        weights=weights,
        fitness=fitness,
        strict=strict,
    )
    guess_idx = [lists.allowed_index[w] for w in vocabulary]

    with ParallelSearch(matrix, table, workers=workers) as search:
        index, _ = search.best_guess(guess_idx, context)
    return lists.allowed[index]
