"""
words.py

Handles loading and organizing the Wordle word lists.
No numpy here, just clean text handling.
"""

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from string import ascii_lowercase


DATA_DIR = Path(__file__).resolve().parent.parent / "data"
ANSWERS_PATH = DATA_DIR / "answers.txt"
ALLOWED_PATH = DATA_DIR / "allowed.txt"

WORD_LENGTH = 5
_LETTERS = frozenset(ascii_lowercase)


def is_valid_word(word):
    return len(word) == WORD_LENGTH and set(word) <= _LETTERS


def load_word_list(path):
    """Load a newline-separated word list into a Python list."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip().lower() for line in f if line.strip()]


def _dedupe(words, source):
    seen = set()
    result = []
    for word in words:
        if not is_valid_word(word):
            raise ValueError(f"{source}: not a {WORD_LENGTH}-letter word: {word!r}")
        if word not in seen:
            seen.add(word)
            result.append(word)
    if not result:
        raise ValueError(f"{source}: word list is empty")
    return result


@dataclass(frozen=True)
class WordLists:
    """
    Immutable pair of vocabularies shared by every episode and worker.

    answers: words that can be the hidden answer
    allowed: words that may be guessed, always a superset of answers
    """

    answers: tuple
    allowed: tuple
    answer_index: dict = field(init=False, repr=False, compare=False)
    allowed_index: dict = field(init=False, repr=False, compare=False)
    fingerprint: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "answer_index", {w: i for i, w in enumerate(self.answers)}
        )
        object.__setattr__(
            self, "allowed_index", {w: i for i, w in enumerate(self.allowed)}
        )
        digest = hashlib.sha1()
        digest.update("\n".join(self.answers).encode("ascii"))
        digest.update(b"\0")
        digest.update("\n".join(self.allowed).encode("ascii"))
        object.__setattr__(self, "fingerprint", digest.hexdigest())

    @classmethod
    def from_lists(cls, answers, allowed=None, source="<memory>"):
        """
        Validate and normalize raw lists.

        Answer words missing from the allowed list are appended to it, so the
        guess vocabulary always covers the solution vocabulary.
        """
        answers = _dedupe([w.lower() for w in answers], f"{source} answers")
        allowed = [w.lower() for w in (allowed or [])]
        allowed_set = set(allowed)
        allowed = allowed + [w for w in answers if w not in allowed_set]
        allowed = _dedupe(allowed, f"{source} allowed")
        return cls(tuple(answers), tuple(allowed))

    def is_guessable(self, word):
        return word in self.allowed_index


def load_words(answers_path=None, allowed_path=None):
    """
    Returns:
        WordLists with the possible solution words and the valid guess words
    """
    # Use paths relative to this source tree so execution is robust even when
    # Python is launched from a different current working directory.
    answers_path = Path(answers_path) if answers_path else ANSWERS_PATH
    allowed_path = Path(allowed_path) if allowed_path else ALLOWED_PATH
    answers = load_word_list(answers_path)
    allowed = load_word_list(allowed_path)
    return WordLists.from_lists(answers, allowed, source=str(answers_path.parent))
