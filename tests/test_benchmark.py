from wordle_opt.benchmark import BenchmarkResult, print_results, run_benchmark
from wordle_opt.solver import SolverState


def test_benchmark_on_tiny_lists(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    result = run_benchmark(engine, progress=False)

    assert result.total == 3
    assert result.solved == 3
    assert result.accuracy == 1.0
    assert result.average == 5 / 3
    assert dict(result.distribution) == {1: 1, 2: 2}
    assert result.failed_words == []


def test_benchmark_limit(tiny_lists, make_engine):
    engine = make_engine(tiny_lists, first_guess="crane")
    assert run_benchmark(engine, limit=2, progress=False).total == 2

    sampled = run_benchmark(engine, limit=2, seed=1, progress=False)
    assert sampled.total == 2
    assert sampled.solved == 2


def test_failures_count_as_seven_attempts():
    class Lost:
        state = SolverState.EXHAUSTED
        attempts = 6

    class Won:
        state = SolverState.WON
        attempts = 3

    result = BenchmarkResult()
    result.add("spark", Lost())
    result.add("crane", Won())
    assert result.failures == 1
    assert result.failed_words == ["spark"]
    assert result.average == 5.0
    assert result.accuracy == 0.5


def test_print_results(tiny_lists, make_engine, capsys):
    engine = make_engine(tiny_lists, first_guess="crane")
    print_results(run_benchmark(engine, progress=False))
    out = capsys.readouterr().out
    assert "Accuracy: 100.00% (3/3)" in out
    assert "Average attempts: 1.6667" in out
