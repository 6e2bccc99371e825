import pytest

from wordle_opt import solver as solver_module
from wordle_opt.patterns import ABSENT, ALL_CORRECT, CORRECT, PRESENT, classify
from wordle_opt.solver import GuessEngine, SolverConfig, SolverState
from wordle_opt.words import WordLists


def test_spark_scenario(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    episode = engine.new_episode()
    assert episode.state == SolverState.AWAITING_FIRST_GUESS

    guess = episode.next_guess()
    assert guess == "crane"
    feedback = classify("spark", guess)
    assert feedback == (ABSENT, PRESENT, CORRECT, ABSENT, ABSENT)

    assert episode.record(guess, feedback) == SolverState.GUESSING
    assert episode.pool == ["spark"]
    assert episode.next_guess() == "spark"

    assert episode.record("spark", ALL_CORRECT) == SolverState.WON
    assert episode.attempts == 2


def test_solve_by_simulation(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    episode = engine.solve("blitz")
    assert episode.state == SolverState.WON
    assert episode.guesses == ["crane", "blitz"]


def test_first_guess_correct_wins_in_one_round(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="spark")
    episode = engine.solve("spark")
    assert episode.state == SolverState.WON
    assert episode.attempts == 1


def test_budget_is_never_exceeded():
    lists = WordLists.from_lists(["spark", "crane", "blitz"], ["mummy"])
    with GuessEngine(lists, SolverConfig(workers=1, first_guess="mummy")) as engine:
        episode = engine.new_episode()
        for _ in range(6):
            assert not episode.finished
            episode.record("mummy", (ABSENT,) * 5)
        assert episode.state == SolverState.EXHAUSTED
        assert episode.attempts == 6
        with pytest.raises(RuntimeError):
            episode.next_guess()
        with pytest.raises(RuntimeError):
            episode.record("spark", ALL_CORRECT)


def test_last_guess_takes_first_candidate(small_lists, make_engine):
    engine = make_engine(small_lists, first_guess="mummy", max_guesses=2)
    episode = engine.new_episode()
    episode.record("mummy", (ABSENT,) * 5)
    assert len(episode.pool) > 2
    assert episode.next_guess() == episode.pool[0]


def test_contradictory_feedback_ends_episode(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    episode = engine.new_episode()
    assert episode.record("spark", (CORRECT, ABSENT, ABSENT, ABSENT, ABSENT)) == (
        SolverState.NO_CANDIDATES
    )
    assert episode.pool == []
    assert episode.finished


def test_record_rejects_unknown_words(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    episode = engine.new_episode()
    with pytest.raises(ValueError):
        episode.record("zzzzz", (ABSENT,) * 5)
    with pytest.raises(ValueError):
        episode.record("crane", (ABSENT,) * 4)


def test_opening_guess_is_computed_once(tiny_lists, make_engine, monkeypatch):
    monkeypatch.setattr(solver_module, "_OPENER_CACHE", {})
    engine = make_engine(tiny_lists)
    # spark and crane both split the pool three ways; spark comes first
    assert engine.opening_guess() == "spark"

    other = make_engine(WordLists.from_lists(["spark", "crane", "blitz"]))

    def fail(*args, **kwargs):
        raise AssertionError("opening guess recomputed")

    monkeypatch.setattr(other, "choose_guess", fail)
    assert other.opening_guess() == "spark"


def test_opening_guess_depends_on_vocabulary(make_engine, monkeypatch):
    monkeypatch.setattr(solver_module, "_OPENER_CACHE", {})
    first = make_engine(WordLists.from_lists(["spark", "crane", "blitz"]))
    second = make_engine(WordLists.from_lists(["crane", "spark", "blitz"]))
    assert first.opening_guess() == "spark"
    assert second.opening_guess() == "crane"


def test_hard_mode_only_guesses_candidates(small_lists, make_engine):
    engine = make_engine(small_lists, hard_mode=True)
    for answer in small_lists.answers:
        episode = engine.new_episode()
        while not episode.finished:
            guess = episode.next_guess()
            assert guess in episode.pool
            episode.record(guess, engine.classifier(answer, guess))


@pytest.mark.parametrize("strict", [False, True])
def test_every_answer_is_solved(small_lists, make_engine, strict):
    engine = make_engine(small_lists, strict_feedback=strict)
    for answer in small_lists.answers:
        episode = engine.solve(answer)
        assert episode.state in (SolverState.WON, SolverState.EXHAUSTED)
        assert episode.attempts <= 6
        if episode.state == SolverState.WON:
            assert episode.guesses[-1] == answer


def test_invalid_configuration(tiny_lists, make_engine):
    with pytest.raises(ValueError):
        make_engine(tiny_lists, first_guess="zzzzz")
    with pytest.raises(ValueError):
        make_engine(tiny_lists, fitness="bogus")


def test_won_episode_keeps_only_the_answer(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    episode = engine.new_episode()
    episode.record("crane", ALL_CORRECT)
    assert episode.state == SolverState.WON
    assert episode.pool == ["crane"]


def test_opening_guess_cache_separates_seeds(tiny_lists, make_engine, monkeypatch):
    monkeypatch.setattr(solver_module, "_OPENER_CACHE", {})
    first = make_engine(tiny_lists, fitness="eliminated", seed=1)
    opener = first.opening_guess()

    reseeded = make_engine(tiny_lists, fitness="eliminated", seed=2)
    monkeypatch.setattr(reseeded, "choose_guess", lambda pool, *args: "blitz")
    assert reseeded.opening_guess() == "blitz"

    same_seed = make_engine(tiny_lists, fitness="eliminated", seed=1)
    monkeypatch.setattr(same_seed, "choose_guess", lambda pool, *args: "blitz")
    assert same_seed.opening_guess() == opener


def test_elimination_fitness_plays_whole_games(small_lists, make_engine):
    serial = make_engine(small_lists, fitness="eliminated", workers=1)
    pooled = make_engine(small_lists, fitness="eliminated", workers=2, chunk_size=3)

    for answer in small_lists.answers:
        episode = serial.solve(answer)
        assert episode.state in (SolverState.WON, SolverState.EXHAUSTED)
        assert episode.attempts <= 6
        assert pooled.solve(answer).guesses == episode.guesses
