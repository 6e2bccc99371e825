"""
interactive.py

Human-in-the-loop mode: the solver suggests a guess, the player types the
word they actually played and the colors the game showed.

Input lines look like

    salet ggyyx

with g = green, y = yellow, x = gray. "exit" ends the session.
"""

from wordle_opt.patterns import format_result, parse_result
from wordle_opt.solver import SolverState


EXIT_COMMAND = "exit"


class InputError(ValueError):
    """A feedback line that cannot be used; the player is asked again."""


def parse_feedback_line(line, lists):
    """Return (guess, feedback) or raise InputError."""
    tokens = line.split()
    if len(tokens) != 2:
        raise InputError("expected '<guess> <result>', e.g. 'salet ggyyx'")

    guess, result = (t.lower() for t in tokens)
    if len(guess) != 5:
        raise InputError(f"guess must be 5 letters long, got {guess!r}")
    if not lists.is_guessable(guess):
        raise InputError(f"unknown word: {guess}")
    try:
        feedback = parse_result(result)
    except ValueError as exc:
        raise InputError(str(exc)) from exc
    return guess, feedback


def run_interactive(engine, read_line=None, write=None):
    """
    Run one interactive game and return its episode.

    Malformed lines are reported and re-prompted. The session ends on a win,
    when the guesses run out, when the feedback leaves no candidate, on
    "exit" or at end of input.
    """
    read_line = read_line or input
    write = write or print
    episode = engine.new_episode()
    write("Enter '<guess> <result>' after each guess (g/y/x), or 'exit' to quit.")

    while not episode.finished:
        suggestion = episode.next_guess()
        write(
            f"Guess {episode.attempts + 1}/{engine.config.max_guesses}: "
            f"try {suggestion.upper()} ({len(episode.pool)} candidates left)"
        )

        while True:
            try:
                line = read_line("> ")
            except EOFError:
                line = EXIT_COMMAND
            line = line.strip()

            if line.lower() == EXIT_COMMAND:
                write("Session ended.")
                _print_summary(episode, write)
                return episode

            try:
                guess, feedback = parse_feedback_line(line, engine.lists)
            except InputError as exc:
                write(f"Invalid input: {exc}")
                continue
            break

        episode.record(guess, feedback)
        if not episode.finished and len(episode.pool) <= 10:
            write("Candidates: " + ", ".join(episode.pool))

    _print_summary(episode, write)
    return episode


def _print_summary(episode, write):
    if episode.state == SolverState.WON:
        write(f"Solved in {episode.attempts} guess(es)!")
    elif episode.state == SolverState.NO_CANDIDATES:
        write("No valid words remain; check the results you entered.")
    elif episode.state == SolverState.EXHAUSTED:
        write(f"Out of guesses after {episode.attempts} attempts.")

    for guess, feedback in episode.history:
        write(f"  {guess} {format_result(feedback)}")
    write(f"Candidates remaining: {len(episode.pool)}")
