"""
Wordle guess optimizer.

Picks the next guess by maximizing the entropy of the feedback patterns a
guess induces over the words still consistent with earlier feedback.
"""

__version__ = "1.0.0"

from wordle_opt.words import WordLists, load_words
from wordle_opt.solver import Episode, GuessEngine, SolverConfig, SolverState
