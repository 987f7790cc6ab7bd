#!/usr/bin/env python3
"""
Bar chart of how many puzzles needed 1, 2, ..., max_guesses clues (plus
puzzles that were not unique), from the CSV written by
benchmark_guesses_csv.py.
"""

import argparse
import csv
from collections import Counter
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mastermind.config import CONFIG


def load_guess_csv(path):
    rows = []
    with Path(path).open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            row["guesses_used"] = int(row["guesses_used"])
            row["unique"] = int(row["unique"])
            rows.append(row)
    return rows


def count_distribution(rows):
    counts = Counter()
    for r in rows:
        if r["unique"]:
            counts[r["guesses_used"]] += 1
        else:
            counts["not unique"] += 1
    labels = list(range(1, CONFIG.generator.max_guesses + 1)) + ["not unique"]
    return labels, [counts[label] for label in labels]


def plot_distribution(csv_path="guess_bench.csv", out_path="guess_distribution.png"):
    rows = load_guess_csv(csv_path)
    labels, values = count_distribution(rows)

    plt.figure()
    plt.bar([str(label) for label in labels], values)
    plt.xlabel("Clues in the generated trail")
    plt.ylabel("Number of puzzles")
    plt.title("Puzzle generator: distribution of trail length")
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()
    print(f"Wrote {out_path}")


def main():
    parser = argparse.ArgumentParser(description="Plot trail-length distribution.")
    parser.add_argument("--csv", type=str, default="guess_bench.csv")
    parser.add_argument("--png", type=str, default="guess_distribution.png")
    args = parser.parse_args()
    plot_distribution(args.csv, args.png)


if __name__ == "__main__":
    main()
