"""
entropy.py

Shannon entropy of the feedback-pattern distribution a guess induces over
the remaining candidate answers.
"""

from collections import Counter

import numpy as np

from wordle_opt.patterns import N_PATTERNS, classify


def entropy_from_counts(counts):
    """Compute Shannon entropy from bucket counts."""
    counts = np.asarray(counts)
    total = counts.sum()
    probs = counts[counts > 0] / total
    return float(-np.sum(probs * np.log2(probs)))


def pattern_entropy(guess, pool, classifier=classify):
    """
    Entropy of `guess` against `pool`, computed directly from the classifier.

    Matches `batch_entropy` on the corresponding matrix row; useful when no
    matrix has been built for the words involved.
    """
    counts = Counter(classifier(candidate, guess) for candidate in pool)
    return entropy_from_counts(list(counts.values()))


def batch_entropy(rows):
    """
    Entropy of every row of a (n_guesses, n_pool) pattern block.

    Each row is histogrammed into its own slice of one flat bincount, so the
    whole block is handled without a Python loop.
    """
    n_rows, n_pool = rows.shape
    if n_rows == 0:
        return np.zeros(0)
    offsets = np.arange(n_rows, dtype=np.int64)[:, None] * N_PATTERNS
    flat = (rows.astype(np.int64) + offsets).ravel()
    counts = np.bincount(flat, minlength=n_rows * N_PATTERNS)
    probs = counts.reshape(n_rows, N_PATTERNS) / n_pool
    logs = np.log2(probs, out=np.zeros_like(probs), where=probs > 0)
    return -np.sum(probs * logs, axis=1)
