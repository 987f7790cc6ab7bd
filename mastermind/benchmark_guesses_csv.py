#!/usr/bin/env python3
"""
Generate one puzzle per secret and write a CSV for guess-count analysis.

With --all every one of the 1296 secrets is used, which checks empirically
that the trail never reaches the guess ceiling and is always unique.

Usage:
    python -m mastermind.benchmark_guesses_csv --games 100 --out guess_bench.csv
    python -m mastermind.benchmark_guesses_csv --all --out guess_bench_all.csv
"""

import argparse
import csv
import random
import time
from multiprocessing import Pool, cpu_count
from pathlib import Path

from mastermind.config import CONFIG
from mastermind.mastermind_env import ALL_CODES, format_code
from mastermind.puzzle_generator import build_puzzle

FIELDNAMES = ["game_idx", "secret", "guesses_used", "unique", "hit_ceiling"]


def _play_one(job):
    idx, secret, seed = job
    rng = random.Random(seed)
    puzzle = build_puzzle(secret, rng=rng, verbose=False)
    guesses_used = len(puzzle.guesses)
    return {
        "game_idx": idx,
        "secret": format_code(secret),
        "guesses_used": guesses_used,
        "unique": int(puzzle.is_unique),
        "hit_ceiling": int(guesses_used >= CONFIG.generator.max_guesses and not puzzle.is_unique),
    }


def run_guess_benchmark(secrets, out_path: Path, parallel=None, seed=None):
    if parallel is None:
        parallel = CONFIG.benchmark.parallel_eval
    base_seed = seed if seed is not None else random.randrange(2**31)
    jobs = [(i, s, base_seed + i) for i, s in enumerate(secrets)]

    print(f"[bench] generating {len(jobs)} puzzles (parallel={parallel}, seed={base_seed})")
    t0 = time.perf_counter()
    if parallel and len(jobs) > 1:
        processes = CONFIG.benchmark.processes or cpu_count()
        with Pool(processes=processes) as pool:
            rows = pool.map(_play_one, jobs)
    else:
        rows = []
        for job in jobs:
            rows.append(_play_one(job))
            if len(rows) % 10 == 0:
                print(f"[bench] finished {len(rows)}/{len(jobs)} puzzles")
    elapsed = time.perf_counter() - t0

    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)

    if rows:
        avg_guesses = sum(r["guesses_used"] for r in rows) / len(rows)
        max_guesses = max(r["guesses_used"] for r in rows)
        not_unique = sum(1 for r in rows if not r["unique"])
        print(f"[bench] wrote {out_path}")
        print(
            f"[bench] avg_guesses={avg_guesses:.3f}, max_guesses={max_guesses}, "
            f"not_unique={not_unique} over {len(rows)} puzzles in {elapsed:.1f}s"
        )
    return rows


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark trail length of generated Mastermind puzzles."
    )
    parser.add_argument(
        "--games",
        type=int,
        default=CONFIG.benchmark.games,
        help="Number of random secrets to generate puzzles for.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Use every code in the code space as a secret (overrides --games).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Base random seed.")
    parser.add_argument(
        "--serial",
        action="store_true",
        help="Disable multiprocessing.",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="guess_bench.csv",
        help="Output CSV filename.",
    )
    args = parser.parse_args()

    if args.all:
        secrets = list(ALL_CODES)
    else:
        rng = random.Random(args.seed)
        secrets = [rng.choice(ALL_CODES) for _ in range(args.games)]

    run_guess_benchmark(
        secrets,
        Path(args.out),
        parallel=False if args.serial else None,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
