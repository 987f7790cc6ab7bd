#!/usr/bin/env python3
"""
puzzle_generator.py

Builds one-turn Mastermind puzzles: a secret plus a trail of guesses whose
feedback pins the secret down to exactly one code.

How a trail is built:
- The first guess is drawn at random from every code except the secret, so
  the same secret gives a different puzzle each time.
- Every later guess is chosen by minimax over the WHOLE code space (not just
  the codes still possible): a guess scores
      len(remaining) - size of the largest feedback bucket it leaves,
  i.e. the number of candidates it is guaranteed to eliminate whatever the
  secret is. Probing guesses that cannot be the answer are allowed because
  they often split the remaining candidates better.
- Ties are broken uniformly at random with reservoir sampling.
- We stop when only the secret is left, or at the safety ceiling
  (CONFIG.generator.max_guesses).
- Finally the trail is replayed from scratch to verify the solution is unique.
"""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from mastermind.config import CONFIG, RNG
from mastermind.mastermind_env import (
    ALL_CODES,
    COLORS,
    CODE_LEN,
    Code,
    Feedback,
    GuessWithFeedback,
    compare,
    filter_consistent,
    find_all_solutions,
    format_code,
    format_feedback,
    random_code,
)


class PuzzleGenerationError(RuntimeError):
    """Raised when no uniquely solvable puzzle could be produced."""


@dataclass
class Puzzle:
    secret: Code
    guesses: List[GuessWithFeedback] = field(default_factory=list)
    # How many codes survive replaying `guesses` from the full code space
    solution_count: int = len(ALL_CODES)

    @property
    def is_unique(self) -> bool:
        return self.solution_count == 1


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


def worst_case_score(guess: Code, remaining: Sequence[Code]) -> int:
    """
    Number of candidates `guess` is guaranteed to eliminate: every remaining
    code is bucketed by the feedback `guess` would get against it, and the
    largest bucket is what survives in the worst case.
    """
    if not remaining:
        return 0
    buckets = Counter(compare(guess, c) for c in remaining)
    return len(remaining) - max(buckets.values())


def find_best_guess(
    remaining: Sequence[Code],
    guess_pool: Sequence[Code],
    rng: Optional[random.Random] = None,
) -> Code:
    """
    Pick the guess from `guess_pool` with the highest worst-case score
    against `remaining`. Each tied guess has an equal chance of being picked.
    """
    rng = rng or RNG
    best_guess = None
    best_score = -1
    ties = 0
    for guess in guess_pool:
        score = worst_case_score(guess, remaining)
        if score > best_score:
            best_score = score
            best_guess = guess
            ties = 1
        elif score == best_score:
            ties += 1
            if rng.random() < 1.0 / ties:
                best_guess = guess
    if best_guess is None:
        raise ValueError("guess_pool is empty")
    return best_guess


# ---------------------------------------------------------------------------
# Trail generation
# ---------------------------------------------------------------------------


def _log_step(verbose, guess_number, kind, guess, feedback, before, after):
    if verbose:
        print(
            f"[generator] guess {guess_number} ({kind}): {format_code(guess)} "
            f"-> {format_feedback(feedback)} | eliminated={before - after}, "
            f"remaining={after}"
        )


def generate_optimal_guesses(
    secret: Code,
    rng: Optional[random.Random] = None,
    verbose: Optional[bool] = None,
) -> List[GuessWithFeedback]:
    """
    Produce the ordered guess/feedback trail for `secret`.

    Repeated calls with the same secret give different (individually valid)
    trails because of the random first guess and random tie-breaks.
    """
    rng = rng or RNG
    if verbose is None:
        verbose = CONFIG.generator.debug
    max_guesses = CONFIG.generator.max_guesses

    secret = tuple(secret)
    guess_pool = [c for c in ALL_CODES if c != secret]
    remaining = list(ALL_CODES)
    trail: List[GuessWithFeedback] = []

    if verbose:
        print(f"[generator] secret={format_code(secret)}, initial candidates={len(remaining)}")

    # First guess is completely random for variety
    if guess_pool:
        first = rng.choice(guess_pool)
        feedback = compare(first, secret)
        trail.append(GuessWithFeedback(first, feedback))
        narrowed = filter_consistent(remaining, first, feedback)
        _log_step(verbose, 1, "random", first, feedback, len(remaining), len(narrowed))
        remaining = narrowed

    while len(remaining) > 1:
        if len(trail) >= max_guesses:
            print(
                f"WARNING: [generator] reached the {max_guesses}-guess ceiling with "
                f"{len(remaining)} candidates left for secret {format_code(secret)}"
            )
            break
        guess = find_best_guess(remaining, guess_pool, rng)
        feedback = compare(guess, secret)
        trail.append(GuessWithFeedback(guess, feedback))
        narrowed = filter_consistent(remaining, guess, feedback)
        _log_step(verbose, len(trail), "minimax", guess, feedback, len(remaining), len(narrowed))
        remaining = narrowed

    return trail


def verify_puzzle(secret: Code, trail: Sequence[GuessWithFeedback]) -> bool:
    """True if replaying `trail` from the full code space leaves only `secret`."""
    return find_all_solutions(trail) == [tuple(secret)]


def build_puzzle(
    secret: Code,
    rng: Optional[random.Random] = None,
    verbose: Optional[bool] = None,
) -> Puzzle:
    """
    Generate and verify a puzzle for `secret`.

    A trail that does not single out the secret is a generator defect: it is
    reported and returned with its real solution_count so the caller can
    decide whether to retry.
    """
    if verbose is None:
        verbose = CONFIG.generator.debug
    secret = tuple(secret)
    trail = generate_optimal_guesses(secret, rng=rng, verbose=verbose)
    solutions = find_all_solutions(trail)
    puzzle = Puzzle(secret=secret, guesses=trail, solution_count=len(solutions))

    if solutions != [secret]:
        print(
            f"WARNING: [generator] puzzle for {format_code(secret)} does not have a "
            f"unique solution ({len(solutions)} codes remain: "
            f"{', '.join(format_code(s) for s in solutions[:10])})"
        )
    elif verbose:
        print(f"[generator] success: {len(trail)} guesses single out {format_code(secret)}")
    return puzzle


def new_puzzle(
    rng: Optional[random.Random] = None,
    max_retries: Optional[int] = None,
    verbose: Optional[bool] = None,
) -> Puzzle:
    """
    Pick a random secret and build its puzzle. If the result is not uniquely
    solvable, retry with a fresh secret, up to `max_retries` extra attempts.
    """
    rng = rng or RNG
    if max_retries is None:
        max_retries = CONFIG.generator.max_retries

    for attempt in range(max_retries + 1):
        secret = random_code(rng)
        puzzle = build_puzzle(secret, rng=rng, verbose=verbose)
        if puzzle.is_unique:
            return puzzle
        print(f"WARNING: [generator] attempt {attempt + 1} failed; retrying with a new secret")

    raise PuzzleGenerationError(
        f"No uniquely solvable puzzle after {max_retries + 1} attempts"
    )


def generate_random_guesses(rng: Optional[random.Random] = None) -> List[GuessWithFeedback]:
    """
    Debugging aid: 3-5 random guesses with random feedback. The clues are
    NOT checked against any secret and usually contradict each other.
    """
    rng = rng or RNG
    guesses = []
    for _ in range(3 + rng.randrange(3)):
        guess = tuple(rng.choice(COLORS) for _ in range(CODE_LEN))
        exact = rng.randrange(3)
        partial = rng.randrange(CODE_LEN + 1 - exact)
        guesses.append(GuessWithFeedback(guess, Feedback(exact, partial)))
    return guesses
