"""
constraints.py

Cumulative knowledge extracted from feedback within one game.

Per position the model keeps an optional fixed letter (a correct tile seen
there) and the set of letters known to be in the answer but not at that
position (present tiles seen there). Globally it keeps the letters known to
be absent from the answer.

A letter that was ever reported correct or present is never added to the
global absent set.
"""

from wordle_opt.patterns import ABSENT, CORRECT, PRESENT


class Constraints:
    def __init__(self):
        self.known = [None] * 5
        self.included = [set() for _ in range(5)]
        self.excluded = set()

    @classmethod
    def from_feedback(cls, guess, feedback):
        constraints = cls()
        constraints.update(guess, feedback)
        return constraints

    def _confirmed(self, letter):
        return letter in self.known or any(letter in s for s in self.included)

    def update(self, guess, feedback):
        """
        Fold one round of feedback into the model.

        An absent tile only excludes its letter globally when the letter is
        not correct or present elsewhere in this guess and not already
        confirmed by an earlier round. Otherwise the tile only says the
        letter is not at that position.
        """
        seen = {
            letter
            for letter, tag in zip(guess, feedback)
            if tag in (CORRECT, PRESENT)
        }

        for i, (letter, tag) in enumerate(zip(guess, feedback)):
            if tag == CORRECT:
                self.known[i] = letter
            elif tag == PRESENT:
                self.included[i].add(letter)
            elif tag == ABSENT:
                if letter in seen or self._confirmed(letter):
                    self.included[i].add(letter)
                else:
                    self.excluded.add(letter)

    def matches(self, word):
        for included_set in self.included:
            if included_set and not any(c in word for c in included_set):
                return False

        if any(c in word for c in self.excluded):
            return False

        for i, c in enumerate(word):
            letter = self.known[i]
            if letter is not None:
                if c != letter:
                    return False
            elif c in self.included[i]:
                return False

        return True

    def filter(self, words):
        return [w for w in words if self.matches(w)]

    def known_letters(self):
        return {i: c for i, c in enumerate(self.known) if c is not None}

    def included_letters(self):
        return set().union(*self.included)

    def excluded_letters(self):
        return set(self.excluded)

    def __repr__(self):
        known = "".join(c or "_" for c in self.known)
        included = ",".join("".join(sorted(s)) or "-" for s in self.included)
        excluded = "".join(sorted(self.excluded))
        return f"Constraints(known={known!r}, included={included!r}, excluded={excluded!r})"
