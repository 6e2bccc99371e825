"""
patterns.py

Feedback classification and the guess/answer pattern matrix.

A Feedback is a 5-tuple of tags, one per letter:

    0 = absent  (gray, "x")
    1 = present (yellow, "y")
    2 = correct (green, "g")

For fast scoring every (guess, answer) feedback is packed as a base-3
integer 0..242, first letter most significant, and precomputed once per
pair of word lists into a matrix of shape (n_allowed_guesses, n_answers).

The default classifier is deliberately naive: a guess letter that is not
correct is reported present whenever it occurs anywhere in the answer, even
if that occurrence is already accounted for by another tile. A guess with a
repeated letter can therefore show more yellows than the official game
would (guess "sassy" against "mesas" reports every "s" as present).
`classify_strict` implements the official duplicate-letter rule and is
available as an opt-in.
"""

import time
from collections import Counter

import numpy as np
from numba import njit


ABSENT = 0
PRESENT = 1
CORRECT = 2

N_PATTERNS = 243
ALL_CORRECT = (CORRECT,) * 5
ALL_CORRECT_CODE = 242

_RESULT_CHARS = {"x": ABSENT, "y": PRESENT, "g": CORRECT}
_TAG_CHARS = {tag: ch for ch, tag in _RESULT_CHARS.items()}

# (fingerprint, strict) -> matrix
_MATRIX_CACHE = {}


def classify(answer: str, guess: str) -> tuple:
    """Naive feedback for `guess` against the hidden `answer`."""
    return tuple(
        CORRECT if g == a else PRESENT if g in answer else ABSENT
        for g, a in zip(guess, answer)
    )


def classify_strict(answer: str, guess: str) -> tuple:
    """
    Feedback following the official duplicate-letter rule.

    1. Greens consume one instance of their letter from the answer.
    2. Yellows are only given while unused instances of the letter remain.
    """
    result = [ABSENT] * 5
    counts = Counter(answer)

    for i in range(5):
        if guess[i] == answer[i]:
            result[i] = CORRECT
            counts[guess[i]] -= 1

    for i in range(5):
        if result[i] == ABSENT and counts[guess[i]] > 0:
            result[i] = PRESENT
            counts[guess[i]] -= 1

    return tuple(result)


def get_classifier(strict=False):
    return classify_strict if strict else classify


def encode_pattern(feedback) -> int:
    code = 0
    for tag in feedback:
        code = code * 3 + tag
    return code


def parse_result(text: str) -> tuple:
    """Parse a result string such as "ggyxx" into a Feedback."""
    text = text.strip().lower()
    if len(text) != 5:
        raise ValueError(f"result must be 5 characters long, got {text!r}")
    try:
        return tuple(_RESULT_CHARS[ch] for ch in text)
    except KeyError as exc:
        raise ValueError(
            f"result may only contain g, y and x, got {text!r}"
        ) from exc


def format_result(feedback) -> str:
    return "".join(_TAG_CHARS[tag] for tag in feedback)


def words_to_codes(words) -> np.ndarray:
    """Convert words to a (n, 5) array of letter codes 0..25."""
    arr = np.zeros((len(words), 5), dtype=np.int8)
    for i, word in enumerate(words):
        for j, ch in enumerate(word):
            arr[i, j] = ord(ch) - ord("a")
    return arr


@njit(cache=True)
def _pattern_code(guess, answer, strict):
    tags = np.zeros(5, dtype=np.int64)

    if strict:
        counts = np.zeros(26, dtype=np.int64)
        for i in range(5):
            counts[answer[i]] += 1
        for i in range(5):
            if guess[i] == answer[i]:
                tags[i] = 2
                counts[guess[i]] -= 1
        for i in range(5):
            if tags[i] == 0 and counts[guess[i]] > 0:
                tags[i] = 1
                counts[guess[i]] -= 1
    else:
        for i in range(5):
            if guess[i] == answer[i]:
                tags[i] = 2
            else:
                for j in range(5):
                    if answer[j] == guess[i]:
                        tags[i] = 1
                        break

    code = 0
    for i in range(5):
        code = code * 3 + tags[i]
    return code


@njit(cache=True)
def _pattern_matrix_kernel(guess_codes, answer_codes, strict):
    n_guesses = guess_codes.shape[0]
    n_answers = answer_codes.shape[0]
    result = np.zeros((n_guesses, n_answers), dtype=np.uint8)

    for i in range(n_guesses):
        for j in range(n_answers):
            result[i, j] = _pattern_code(guess_codes[i], answer_codes[j], strict)

    return result


def build_matrix(allowed, answers, strict=False, verbose=False) -> np.ndarray:
    """
    Compute the full pattern matrix from scratch.

    This is the most expensive step of a run, but it only needs to be done
    once per pair of word lists.
    """
    if verbose:
        print(
            f"Building pattern matrix ({len(allowed)} guesses x "
            f"{len(answers)} answers)..."
        )
    start = time.time()
    matrix = _pattern_matrix_kernel(
        words_to_codes(allowed), words_to_codes(answers), bool(strict)
    )
    if verbose:
        print(f"Matrix built in {time.time() - start:.1f}s.")
    return matrix


def pattern_matrix(lists, strict=False, verbose=False) -> np.ndarray:
    """
    Return the pattern matrix for `lists`, building it on first use.

    Matrices are kept in memory for the life of the process, keyed by the
    word-list fingerprint and classifier, and are never written to disk.
    """
    key = (lists.fingerprint, bool(strict))
    matrix = _MATRIX_CACHE.get(key)
    if matrix is None:
        matrix = build_matrix(lists.allowed, lists.answers, strict, verbose)
        matrix.setflags(write=False)
        _MATRIX_CACHE[key] = matrix
    elif verbose:
        print("Reusing cached pattern matrix.")
    return matrix
