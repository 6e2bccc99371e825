"""
main.py

Ranks every allowed guess as an opening word against the full answer list.
"""

from wordle_opt.fitness import ENTROPY_ONLY
from wordle_opt.solver import GuessEngine, SolverConfig
from wordle_opt.words import load_words


TOP_OPENERS = 20


def main():
    lists = load_words()
    answer_set = set(lists.answers)
    config = SolverConfig(weights=ENTROPY_ONLY, workers=None, progress=True)

    with GuessEngine(lists, config, verbose=True) as engine:
        print("Computing opening-guess entropies...")
        ranked = engine.rank_guesses(list(lists.answers), TOP_OPENERS)

    print("\nTop opening guesses:")
    print("flag: [+] in answers.txt, [-] guess-only in allowed.txt")
    for word, entropy in ranked:
        flag = "+" if word in answer_set else "-"
        print(f"{word} [{flag}]: {entropy:.4f} bits")


if __name__ == "__main__":
    main()
