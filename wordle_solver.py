"""
wordle_solver.py

Unified CLI for the Wordle guess optimizer.

Modes:
-mode interactive (default): suggest guesses, read back the colors shown
-mode benchmark: play every answer word and report accuracy
-mode solve -answer WORD: trace one simulated game

Optional:
-hard: only guess words that can still be the answer.
-strict: use the official duplicate-letter feedback rule.
-refined: blend prior, letter-frequency and repeat-letter terms into entropy.
-fitness eliminated: score by expected eliminations instead of entropy.
-workers N / -chunk-size N: worker processes and guesses per task.
"""

import argparse

from wordle_opt.benchmark import print_results, run_benchmark
from wordle_opt.fitness import DEFAULT_WEIGHTS, FITNESS_MODES, REFINED_WEIGHTS
from wordle_opt.interactive import run_interactive
from wordle_opt.patterns import format_result
from wordle_opt.solver import GuessEngine, SolverConfig
from wordle_opt.words import load_words


def run_solve(engine, answer):
    episode = engine.new_episode()
    print(f"\n=== Solving for: {answer} ===\n")

    while not episode.finished:
        n_candidates = len(episode.pool)
        guess = episode.next_guess()
        feedback = engine.classifier(answer, guess)
        episode.record(guess, feedback)
        print(
            f"Turn {episode.attempts}: {guess} -> {format_result(feedback)} "
            f"({n_candidates} candidates before, {len(episode.pool)} after)"
        )

    print(f"\nResult: {episode.state.value} after {episode.attempts} guess(es)")
    return episode


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Wordle solver that picks guesses by expected information gain."
    )
    parser.add_argument(
        "-mode",
        choices=("interactive", "benchmark", "solve"),
        default="interactive",
        help="What to run (default: interactive).",
    )
    parser.add_argument(
        "-answer",
        type=str,
        default=None,
        help="Hidden answer for -mode solve.",
    )
    parser.add_argument(
        "-answers",
        type=str,
        default=None,
        help="Path to the solution word list (default: data/answers.txt).",
    )
    parser.add_argument(
        "-allowed",
        type=str,
        default=None,
        help="Path to the guess word list (default: data/allowed.txt).",
    )
    parser.add_argument(
        "-hard",
        action="store_true",
        help="Hard mode: only guess words still consistent with the feedback.",
    )
    parser.add_argument(
        "-strict",
        action="store_true",
        help="Use the official duplicate-letter feedback rule.",
    )
    parser.add_argument(
        "-fitness",
        choices=FITNESS_MODES,
        default=FITNESS_MODES[0],
        help="Fitness function for guesses (default: entropy).",
    )
    parser.add_argument(
        "-refined",
        action="store_true",
        help="Blend prior, letter-frequency and repeat-letter terms into the score.",
    )
    parser.add_argument(
        "-first",
        type=str,
        default=None,
        help="Fixed first guess (default: computed once from the word lists).",
    )
    parser.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for the guess search (default: CPU count).",
    )
    parser.add_argument(
        "-chunk-size",
        type=int,
        default=None,
        help="Guesses per worker task (default: twice vocabulary / workers).",
    )
    parser.add_argument(
        "-limit",
        type=int,
        default=None,
        help="Benchmark only this many answers.",
    )
    parser.add_argument(
        "-seed",
        type=int,
        default=None,
        help="Pick the -limit benchmark answers at random with this seed.",
    )
    parser.add_argument(
        "-quiet",
        action="store_true",
        help="Hide progress bars and build messages.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        lists = load_words(args.answers, args.allowed)
    except (OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    if not args.quiet:
        print(f"Answers: {len(lists.answers)} words, guesses: {len(lists.allowed)} words")

    config = SolverConfig(
        hard_mode=args.hard,
        strict_feedback=args.strict,
        fitness=args.fitness,
        weights=REFINED_WEIGHTS if args.refined else DEFAULT_WEIGHTS,
        workers=args.workers,
        chunk_size=args.chunk_size,
        first_guess=args.first.lower() if args.first else None,
        progress=not args.quiet,
    )

    try:
        engine = GuessEngine(lists, config, verbose=not args.quiet)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    with engine:
        if args.mode == "benchmark":
            result = run_benchmark(
                engine, limit=args.limit, seed=args.seed, progress=not args.quiet
            )
            print_results(result)
            return

        if args.mode == "solve":
            if args.answer is None:
                raise SystemExit("-mode solve needs -answer WORD")
            answer = args.answer.lower()
            if not lists.is_guessable(answer):
                raise SystemExit(f"word not found in allowed list: {answer}")
            run_solve(engine, answer)
            return

        run_interactive(engine)


if __name__ == "__main__":
    main()
