import subprocess
import sys
from pathlib import Path

import pytest

import wordle_solver


@pytest.fixture
def word_files(tmp_path):
    answers = tmp_path / "answers.txt"
    allowed = tmp_path / "allowed.txt"
    answers.write_text("spark\ncrane\nblitz\n")
    allowed.write_text("mummy\n")
    return ["-answers", str(answers), "-allowed", str(allowed)]


def test_solve_mode(word_files, capsys):
    wordle_solver.main(
        ["-mode", "solve", "-answer", "spark", "-first", "crane", "-workers", "1", "-quiet"]
        + word_files
    )
    out = capsys.readouterr().out
    assert "Turn 1: crane -> xygxx" in out
    assert "Turn 2: spark -> ggggg" in out
    assert "Result: won after 2 guess(es)" in out


def test_benchmark_mode(word_files, capsys):
    wordle_solver.main(["-mode", "benchmark", "-workers", "1", "-quiet"] + word_files)
    out = capsys.readouterr().out
    assert "Words tested: 3" in out


def test_interactive_mode(word_files, capsys, monkeypatch):
    lines = iter(["bogus", "crane ggggg"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    wordle_solver.main(["-first", "crane", "-workers", "1", "-quiet"] + word_files)
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Solved in 1 guess(es)!" in out


def test_bad_word_list_exits(tmp_path):
    answers = tmp_path / "answers.txt"
    answers.write_text("spark\nsparks\n")
    with pytest.raises(SystemExit, match="sparks"):
        wordle_solver.main(["-answers", str(answers), "-allowed", str(answers), "-quiet"])


def test_unknown_first_guess_exits(word_files):
    with pytest.raises(SystemExit, match="zzzzz"):
        wordle_solver.main(["-first", "zzzzz", "-quiet"] + word_files)


def test_solve_needs_answer(word_files):
    with pytest.raises(SystemExit):
        wordle_solver.main(["-mode", "solve", "-workers", "1", "-quiet"] + word_files)


def test_process_exits_after_pooled_benchmark(word_files):
    root = Path(__file__).resolve().parent.parent
    completed = subprocess.run(
        [
            sys.executable,
            str(root / "wordle_solver.py"),
            "-mode", "benchmark", "-workers", "2", "-chunk-size", "2", "-quiet",
        ]
        + word_files,
        cwd=root,
        capture_output=True,
        text=True,
        timeout=120,
    )
    assert completed.returncode == 0, completed.stderr
    assert "Words tested: 3" in completed.stdout
