import pytest

from wordle_opt.solver import GuessEngine, SolverConfig
from wordle_opt.words import WordLists


@pytest.fixture
def tiny_lists():
    return WordLists.from_lists(["spark", "crane", "blitz"])


@pytest.fixture
def small_lists():
    answers = [
        "spark", "crane", "blitz", "chair", "speed", "abide", "ethic",
        "there", "mesas", "geese", "eerie", "sassy", "spare", "store",
    ]
    allowed = ["salet", "mummy", "soare", "tares"]
    return WordLists.from_lists(answers, allowed)


@pytest.fixture
def make_engine():
    engines = []

    def factory(lists, **overrides):
        overrides.setdefault("workers", 1)
        engine = GuessEngine(lists, SolverConfig(**overrides))
        engines.append(engine)
        return engine

    yield factory
    for engine in engines:
        engine.close()
