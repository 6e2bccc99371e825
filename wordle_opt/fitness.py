"""
fitness.py

Scores candidate guesses against the current candidate pool.

The core term is the entropy of the feedback-pattern distribution (expected
information gain). Optional bias terms, each with its own weight, act as
tie-breakers:

- candidate bonus: the guess could itself be the answer
- prior: Bayesian prior probability of the guess being the answer
- frequency: positional letter frequency of the guess within the pool
- repeat penalty: letters already tried by earlier guesses

Weights are kept small enough that none of the bias terms can outweigh a
meaningful entropy difference.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from wordle_opt.constraints import Constraints
from wordle_opt.entropy import batch_entropy, pattern_entropy
from wordle_opt.patterns import classify, get_classifier, words_to_codes


ENTROPY = "entropy"
ELIMINATED = "eliminated"
FITNESS_MODES = (ENTROPY, ELIMINATED)

KNOWN_BOOST = 1.5
INCLUDED_BOOST = 1.2
EXCLUDED_PENALTY = 0.1

# pool size above which the elimination fitness works on a sample
MAX_SAMPLE = 500


@dataclass(frozen=True)
class ScoreWeights:
    candidate_bonus: float = 0.0
    prior: float = 0.0
    frequency: float = 0.0
    repeat_penalty: float = 0.0


ENTROPY_ONLY = ScoreWeights()
DEFAULT_WEIGHTS = ScoreWeights(candidate_bonus=0.01)
REFINED_WEIGHTS = ScoreWeights(
    candidate_bonus=0.02,
    prior=0.05,
    frequency=0.01,
    repeat_penalty=0.005,
)


def letter_mask(word) -> int:
    """26-bit field with one bit per distinct letter of `word`."""
    mask = 0
    for ch in word:
        mask |= 1 << (ord(ch) - ord("a"))
    return mask


def mask_to_vector(mask):
    return np.array([(mask >> i) & 1 for i in range(26)], dtype=bool)


def candidate_priors(pool, constraints=None):
    """
    Prior probability of each pool word being the answer.

    Words matching known letters are boosted per matching position, words
    containing letters known to be included are boosted per letter, and
    words containing excluded letters are penalized per letter. The result
    is normalized to sum to 1 over the pool.
    """
    if constraints is None:
        constraints = Constraints()
    known = constraints.known_letters()
    included = constraints.included_letters()
    excluded = constraints.excluded_letters()

    weights = []
    for word in pool:
        weight = 1.0
        for i, letter in known.items():
            if word[i] == letter:
                weight *= KNOWN_BOOST
        letters = set(word)
        weight *= INCLUDED_BOOST ** len(letters & included)
        weight *= EXCLUDED_PENALTY ** len(letters & excluded)
        weights.append(weight)

    total = sum(weights)
    return {word: weight / total for word, weight in zip(pool, weights)}


def position_frequencies(pool):
    """(5, 26) letter frequencies per position, each row summing to 1."""
    codes = words_to_codes(pool).astype(np.int64)
    freq = np.zeros((5, 26))
    for pos in range(5):
        freq[pos] = np.bincount(codes[:, pos], minlength=26)
    return freq / len(pool)


def elimination_fitness(guess, pool, sample, classifier=classify):
    """
    Expected number of `sample` words ruled out by playing `guess`.

    For every candidate answer the feedback it would produce is turned into
    constraints and counted against the sample. Candidates sharing a
    feedback pattern share the same constraints, so each pattern is only
    evaluated once.
    """
    buckets = {}
    for candidate in pool:
        feedback = classifier(candidate, guess)
        buckets[feedback] = buckets.get(feedback, 0) + 1

    total = 0
    for feedback, count in buckets.items():
        constraints = Constraints.from_feedback(guess, feedback)
        eliminated = sum(1 for word in sample if not constraints.matches(word))
        total += count * eliminated
    return total / len(pool)


def sample_pool(pool, seed=0, max_sample=MAX_SAMPLE):
    if len(pool) <= max_sample:
        return list(pool)
    rng = np.random.default_rng(seed)
    picked = np.sort(rng.choice(len(pool), size=max_sample, replace=False))
    return [pool[i] for i in picked]


def score_guess(
    guess,
    pool,
    weights=ENTROPY_ONLY,
    constraints=None,
    used_letters=0,
    classifier=classify,
):
    """
    Fitness of a single guess against `pool`; higher is better.

    Reference implementation of the scorer that works directly on words.
    The search uses `score_indices`, which computes the same value from the
    pattern matrix.
    """
    if not pool:
        raise ValueError("cannot score a guess against an empty pool")

    score = pattern_entropy(guess, pool, classifier)

    if weights.candidate_bonus and guess in pool:
        score += weights.candidate_bonus
    if weights.prior:
        score += weights.prior * candidate_priors(pool, constraints).get(guess, 0.0)
    if weights.frequency:
        freq = position_frequencies(pool)
        score += weights.frequency * sum(
            freq[pos, ord(ch) - ord("a")] for pos, ch in enumerate(guess)
        )
    if weights.repeat_penalty:
        overlap = bin(letter_mask(guess) & used_letters).count("1")
        score -= weights.repeat_penalty * overlap

    return score


class GuessTable:
    """Per-vocabulary arrays the vectorized scorer indexes into."""

    def __init__(self, lists):
        self.words = lists.allowed
        self.answers = lists.answers
        self.codes = words_to_codes(lists.allowed).astype(np.int64)
        self.answer_index = np.array(
            [lists.answer_index.get(w, -1) for w in lists.allowed], dtype=np.int64
        )
        self.letters = np.zeros((len(lists.allowed), 26), dtype=bool)
        rows = np.repeat(np.arange(len(lists.allowed)), 5)
        self.letters[rows, self.codes.ravel()] = True


@dataclass(frozen=True, eq=False)
class ScoringContext:
    """
    Read-only auxiliary data for one search round.

    Built once by the episode and shipped unchanged to every worker.
    """

    pool_idx: np.ndarray
    pool_mask: np.ndarray
    prior: np.ndarray
    position_freq: Optional[np.ndarray]
    used_letters: np.ndarray
    weights: ScoreWeights
    fitness: str = ENTROPY
    strict: bool = False
    sample: tuple = ()

    @classmethod
    def build(
        cls,
        lists,
        pool,
        constraints=None,
        used_letters=0,
        weights=ENTROPY_ONLY,
        fitness=ENTROPY,
        strict=False,
        seed=0,
    ):
        if not pool:
            raise ValueError("cannot build a scoring context for an empty pool")
        if fitness not in FITNESS_MODES:
            raise ValueError(f"unknown fitness mode: {fitness!r}")

        pool_idx = np.array([lists.answer_index[w] for w in pool], dtype=np.int64)
        pool_mask = np.zeros(len(lists.answers), dtype=bool)
        pool_mask[pool_idx] = True

        prior = np.zeros(len(lists.answers))
        if weights.prior:
            priors = candidate_priors(pool, constraints)
            prior[pool_idx] = [priors[w] for w in pool]

        position_freq = position_frequencies(pool) if weights.frequency else None
        sample = tuple(sample_pool(pool, seed)) if fitness == ELIMINATED else ()

        return cls(
            pool_idx=pool_idx,
            pool_mask=pool_mask,
            prior=prior,
            position_freq=position_freq,
            used_letters=mask_to_vector(used_letters),
            weights=weights,
            fitness=fitness,
            strict=strict,
            sample=sample,
        )


def score_indices(guess_idx, matrix, table, context):
    """Fitness of every guess in `guess_idx` (indices into the guess vocabulary)."""
    guess_idx = np.asarray(guess_idx, dtype=np.int64)

    if context.fitness == ENTROPY:
        rows = matrix[np.ix_(guess_idx, context.pool_idx)]
        scores = batch_entropy(rows)
    else:
        classifier = get_classifier(context.strict)
        pool = [table.answers[i] for i in context.pool_idx]
        scores = np.array(
            [
                elimination_fitness(table.words[g], pool, context.sample, classifier)
                for g in guess_idx
            ],
            dtype=np.float64,
        )

    weights = context.weights
    answer_idx = table.answer_index[guess_idx]
    is_answer = answer_idx >= 0
    safe_idx = np.where(is_answer, answer_idx, 0)

    if weights.candidate_bonus:
        in_pool = is_answer & context.pool_mask[safe_idx]
        scores = scores + weights.candidate_bonus * in_pool
    if weights.prior:
        scores = scores + weights.prior * np.where(is_answer, context.prior[safe_idx], 0.0)
    if weights.frequency:
        likelihood = context.position_freq[np.arange(5), table.codes[guess_idx]]
        scores = scores + weights.frequency * likelihood.sum(axis=1)
    if weights.repeat_penalty:
        overlap = (table.letters[guess_idx] & context.used_letters).sum(axis=1)
        scores = scores - weights.repeat_penalty * overlap

    return scores
