"""
solver.py

Game loop tying the classifier, constraint model and search together.

One Episode is one game: it owns its constraints and candidate pool and
moves through

    AWAITING_FIRST_GUESS -> GUESSING -> WON | EXHAUSTED | NO_CANDIDATES

The GuessEngine holds everything that is shared between episodes: the word
lists, the pattern matrix, the worker pool and the cached opening guess.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from wordle_opt.constraints import Constraints
from wordle_opt.fitness import (
    DEFAULT_WEIGHTS,
    ENTROPY,
    FITNESS_MODES,
    GuessTable,
    ScoreWeights,
    ScoringContext,
    letter_mask,
)
from wordle_opt.patterns import ALL_CORRECT, get_classifier, pattern_matrix
from wordle_opt.search import ParallelSearch


MAX_GUESSES = 6

# (fingerprint, strict, fitness, weights, hard_mode, seed) -> opening guess
_OPENER_CACHE = {}


class SolverState(Enum):
    AWAITING_FIRST_GUESS = "awaiting first guess"
    GUESSING = "guessing"
    WON = "won"
    EXHAUSTED = "exhausted"
    NO_CANDIDATES = "no candidates"


TERMINAL_STATES = frozenset(
    {SolverState.WON, SolverState.EXHAUSTED, SolverState.NO_CANDIDATES}
)


@dataclass(frozen=True)
class SolverConfig:
    max_guesses: int = MAX_GUESSES
    hard_mode: bool = False
    strict_feedback: bool = False
    fitness: str = ENTROPY
    weights: ScoreWeights = DEFAULT_WEIGHTS
    workers: Optional[int] = 1
    chunk_size: Optional[int] = None
    first_guess: Optional[str] = None
    # pool size at or below which the first candidate is guessed directly
    endgame_size: int = 2
    seed: int = 0
    progress: bool = False


class GuessEngine:
    def __init__(self, lists, config=None, verbose=False):
        config = config or SolverConfig()
        if config.fitness not in FITNESS_MODES:
            raise ValueError(f"unknown fitness mode: {config.fitness!r}")
        if config.max_guesses < 1:
            raise ValueError("max_guesses must be at least 1")
        if config.first_guess is not None and not lists.is_guessable(config.first_guess):
            raise ValueError(f"first guess not in allowed list: {config.first_guess}")

        self.lists = lists
        self.config = config
        self.classifier = get_classifier(config.strict_feedback)
        self.matrix = pattern_matrix(lists, config.strict_feedback, verbose)
        self.table = GuessTable(lists)
        self.search = ParallelSearch(
            self.matrix,
            self.table,
            workers=config.workers,
            chunk_size=config.chunk_size,
            progress=config.progress,
        )
        self._all_guesses = np.arange(len(lists.allowed), dtype=np.int64)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.search.close()

    def opening_guess(self):
        """
        First guess of every episode.

        It only depends on the word lists and scoring settings, so it is
        computed once and cached for the rest of the process.
        """
        config = self.config
        if config.first_guess is not None:
            return config.first_guess

        key = (
            self.lists.fingerprint,
            config.strict_feedback,
            config.fitness,
            config.weights,
            config.hard_mode,
            config.seed,
        )
        guess = _OPENER_CACHE.get(key)
        if guess is None:
            guess = self.choose_guess(list(self.lists.answers))
            _OPENER_CACHE[key] = guess
        return guess

    def scoring_context(self, pool, constraints=None, used_letters=0):
        config = self.config
        return ScoringContext.build(
            self.lists,
            pool,
            constraints=constraints,
            used_letters=used_letters,
            weights=config.weights,
            fitness=config.fitness,
            strict=config.strict_feedback,
            seed=config.seed,
        )

    def candidate_guesses(self, pool):
        if self.config.hard_mode:
            return np.array([self.lists.allowed_index[w] for w in pool], dtype=np.int64)
        return self._all_guesses

    def choose_guess(self, pool, constraints=None, used_letters=0):
        """Best guess for `pool` according to the configured fitness."""
        context = self.scoring_context(pool, constraints, used_letters)
        index, _ = self.search.best_guess(self.candidate_guesses(pool), context)
        return self.lists.allowed[index]

    def rank_guesses(self, pool, k, constraints=None, used_letters=0):
        """The `k` best (word, score) pairs for `pool`."""
        context = self.scoring_context(pool, constraints, used_letters)
        ranked = self.search.top_guesses(self.candidate_guesses(pool), context, k)
        return [(self.lists.allowed[i], score) for i, score in ranked]

    def new_episode(self):
        return Episode(self)

    def solve(self, answer):
        """Play a simulated game against `answer` and return the episode."""
        episode = Episode(self)
        episode.play(answer)
        return episode


class Episode:
    def __init__(self, engine):
        self.engine = engine
        self.constraints = Constraints()
        self.pool = list(engine.lists.answers)
        self.history = []
        self.used_letters = 0
        self.state = SolverState.AWAITING_FIRST_GUESS

    @property
    def attempts(self):
        return len(self.history)

    @property
    def finished(self):
        return self.state in TERMINAL_STATES

    @property
    def guesses_left(self):
        return self.engine.config.max_guesses - self.attempts

    def _check_active(self):
        if self.finished:
            raise RuntimeError(f"episode already finished: {self.state.value}")

    def next_guess(self):
        self._check_active()
        config = self.engine.config

        if self.state == SolverState.AWAITING_FIRST_GUESS:
            return self.engine.opening_guess()

        # No search once the ending is down to a couple of words or no
        # further feedback can follow this guess.
        if len(self.pool) <= config.endgame_size or self.guesses_left == 1:
            return self.pool[0]

        return self.engine.choose_guess(self.pool, self.constraints, self.used_letters)

    def record(self, guess, feedback):
        """Apply the feedback for one played guess and return the new state."""
        self._check_active()
        if not self.engine.lists.is_guessable(guess):
            raise ValueError(f"guess not in allowed list: {guess}")
        feedback = tuple(feedback)
        if len(feedback) != 5:
            raise ValueError(f"feedback must have 5 tags, got {len(feedback)}")

        self.history.append((guess, feedback))
        self.used_letters |= letter_mask(guess)

        if feedback == ALL_CORRECT:
            self.pool = [guess]
            self.state = SolverState.WON
            return self.state

        self.constraints.update(guess, feedback)
        self.pool = self.constraints.filter(self.pool)

        if self.attempts >= self.engine.config.max_guesses:
            self.state = SolverState.EXHAUSTED
        elif not self.pool:
            self.state = SolverState.NO_CANDIDATES
        else:
            self.state = SolverState.GUESSING
        return self.state

    def play(self, answer):
        """Run the loop to completion with feedback simulated against `answer`."""
        while not self.finished:
            guess = self.next_guess()
            self.record(guess, self.engine.classifier(answer, guess))
        return self.state

    @property
    def guesses(self):
        return [guess for guess, _ in self.history]
