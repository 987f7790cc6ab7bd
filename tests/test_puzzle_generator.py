import os
import random

import pytest

from mastermind.config import CONFIG
from mastermind.mastermind_env import (
    ALL_CODES,
    CODE_LEN,
    COLORS,
    compare,
    find_all_solutions,
    parse_code,
)
from mastermind.puzzle_generator import (
    Puzzle,
    PuzzleGenerationError,
    build_puzzle,
    find_best_guess,
    generate_optimal_guesses,
    generate_random_guesses,
    new_puzzle,
    verify_puzzle,
    worst_case_score,
)


@pytest.fixture
def low_ceiling(monkeypatch):
    monkeypatch.setattr(CONFIG.generator, "max_guesses", 1)


def test_worst_case_score_knuth_opening():
    # 1122-style opening: the largest bucket holds 256 codes
    assert worst_case_score(parse_code("RRGG"), ALL_CODES) == 1296 - 256


def test_worst_case_score_degenerate_sets():
    guess = parse_code("RGBY")
    assert worst_case_score(guess, []) == 0
    assert worst_case_score(guess, [parse_code("OOOO")]) == 0


def test_worst_case_score_of_a_repeated_guess_is_zero():
    secret = parse_code("BYOP")
    guess = parse_code("RRGB")
    remaining = [c for c in ALL_CODES if compare(guess, c) == compare(guess, secret)]
    assert worst_case_score(guess, remaining) == 0


def test_find_best_guess_prefers_higher_score():
    remaining = [parse_code("RRRR"), parse_code("GGGG"), parse_code("BBBB")]
    splitter = parse_code("RGOO")
    useless = parse_code("YYYY")
    for seed in range(20):
        assert find_best_guess(remaining, [useless, splitter], random.Random(seed)) == splitter


def test_find_best_guess_breaks_ties_randomly():
    a, b, c = parse_code("RRRR"), parse_code("GGGG"), parse_code("BBBB")
    remaining = [a, b, c]
    picks = {find_best_guess(remaining, [a, b, c], random.Random(seed)) for seed in range(200)}
    assert picks == {a, b, c}


def test_find_best_guess_empty_pool():
    with pytest.raises(ValueError):
        find_best_guess([parse_code("RRRR")], [], random.Random(0))


@pytest.mark.parametrize("secret_text,seed", [
    ("RGBY", 1),
    ("PPPP", 2),
    ("RRGG", 3),
    ("OYOY", 4),
])
def test_generated_trail_singles_out_secret(secret_text, seed):
    secret = parse_code(secret_text)
    trail = generate_optimal_guesses(secret, rng=random.Random(seed))
    assert 1 <= len(trail) <= CONFIG.generator.max_guesses
    assert find_all_solutions(trail) == [secret]
    assert verify_puzzle(secret, trail)
    for guess, feedback in trail:
        assert guess != secret
        assert feedback == compare(guess, secret)


def test_first_guess_narrows_the_candidates():
    secret = parse_code("RGBY")
    trail = generate_optimal_guesses(secret, rng=random.Random(11))
    assert len(find_all_solutions(trail[:1])) < len(ALL_CODES)


def test_same_secret_gives_different_trails():
    secret = parse_code("GBOP")
    first_guesses = {
        generate_optimal_guesses(secret, rng=random.Random(seed))[0].guess
        for seed in range(5)
    }
    assert len(first_guesses) > 1


def test_same_seed_is_reproducible():
    secret = parse_code("YYRB")
    a = generate_optimal_guesses(secret, rng=random.Random(99))
    b = generate_optimal_guesses(secret, rng=random.Random(99))
    assert a == b


def test_verbose_generation_logs_steps(capsys):
    generate_optimal_guesses(parse_code("RGBY"), rng=random.Random(3), verbose=True)
    out = capsys.readouterr().out
    assert "[generator] secret=RGBY" in out
    assert "(random)" in out
    assert "(minimax)" in out


def test_verify_puzzle_rejects_incomplete_trail():
    secret = parse_code("RGBY")
    guess = parse_code("RRGG")
    assert not verify_puzzle(secret, [])
    assert not verify_puzzle(secret, [(guess, compare(guess, secret))])


def test_build_puzzle_returns_unique_puzzle():
    puzzle = build_puzzle(parse_code("BOYR"), rng=random.Random(8))
    assert isinstance(puzzle, Puzzle)
    assert puzzle.is_unique
    assert puzzle.solution_count == 1
    assert puzzle.secret == ("B", "O", "Y", "R")


def test_ceiling_stops_generation_and_is_reported(low_ceiling, capsys):
    # No single guess can isolate a code with four distinct colours
    secret = parse_code("RGBY")
    puzzle = build_puzzle(secret, rng=random.Random(0))
    assert len(puzzle.guesses) == 1
    assert not puzzle.is_unique
    assert puzzle.solution_count > 1
    out = capsys.readouterr().out
    assert "ceiling" in out
    assert "does not have a unique solution" in out


def test_new_puzzle_gives_up_after_retries(low_ceiling):
    with pytest.raises(PuzzleGenerationError):
        new_puzzle(rng=random.Random(4), max_retries=1)


def test_new_puzzle_is_unique():
    puzzle = new_puzzle(rng=random.Random(21))
    assert puzzle.is_unique
    assert find_all_solutions(puzzle.guesses) == [puzzle.secret]


def test_generate_random_guesses_shape():
    for seed in range(10):
        guesses = generate_random_guesses(random.Random(seed))
        assert 3 <= len(guesses) <= 5
        for guess, feedback in guesses:
            assert len(guess) == CODE_LEN
            assert all(c in COLORS for c in guess)
            assert 0 <= feedback.exact <= 2
            assert feedback.exact + feedback.partial <= CODE_LEN


@pytest.mark.slow
@pytest.mark.skipif(
    not os.environ.get("MASTERMIND_EXHAUSTIVE"),
    reason="set MASTERMIND_EXHAUSTIVE=1 to generate a puzzle for every secret",
)
def test_every_secret_gets_a_unique_trail_within_the_ceiling():
    rng = random.Random(2024)
    longest = 0
    for secret in ALL_CODES:
        trail = generate_optimal_guesses(secret, rng=rng)
        assert find_all_solutions(trail) == [secret]
        longest = max(longest, len(trail))
    assert 1 <= longest <= 11
