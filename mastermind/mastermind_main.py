#!/usr/bin/env python3
"""
Terminal front end for one-turn Mastermind.

Usage:
    mastermind play [--puzzle CODE] [--seed N]
    mastermind generate [--secret RGBY] [--seed N] [--verbose]
    mastermind decode CODE
"""

import argparse
import random
import sys

from mastermind.config import RNG
from mastermind.game_state import (
    can_submit,
    game_from_puzzle,
    new_game,
    render_board,
    set_input_color,
    share_code,
    submit_guess,
)
from mastermind.mastermind_env import (
    COLOR_NAMES,
    format_code,
    format_feedback,
    parse_code,
    random_code,
)
from mastermind.puzzle_codec import (
    PuzzleDecodeError,
    deserialize_puzzle,
    serialize_puzzle,
    try_deserialize_puzzle,
)
from mastermind.puzzle_generator import build_puzzle


def _rng_from_args(args):
    return random.Random(args.seed) if args.seed is not None else RNG


def run_play(args, input_fn=input):
    rng = _rng_from_args(args)
    state = None
    if args.puzzle:
        puzzle = try_deserialize_puzzle(args.puzzle)
        if puzzle is not None:
            state = game_from_puzzle(puzzle)
        else:
            print("[main] Could not load the shared puzzle; starting a fresh one.")
    if state is None:
        state = new_game(rng=rng)

    print("=== One-Turn Mastermind ===")
    print("Colours: " + ", ".join(f"{c}={name}" for c, name in COLOR_NAMES.items()))
    print("Feedback: X = right colour & position, o = right colour, wrong position.\n")
    print(render_board(state))

    while not state.game_ended:
        text = input_fn("\nYour one guess (e.g. RGBY): ").strip()
        try:
            code = parse_code(text)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        for i, color in enumerate(code):
            set_input_color(state, i, color)
        if can_submit(state):
            submit_guess(state)

    print()
    print(render_board(state))
    print(f"\nShare this puzzle: {share_code(state)}")
    return 0


def run_generate(args):
    rng = _rng_from_args(args)
    if args.secret:
        try:
            secret = parse_code(args.secret)
        except ValueError as e:
            print(f"Error: {e}")
            return 2
    else:
        secret = random_code(rng)

    puzzle = build_puzzle(secret, rng=rng, verbose=args.verbose)
    print(f"Secret: {format_code(puzzle.secret)}")
    for i, (guess, feedback) in enumerate(puzzle.guesses, start=1):
        print(f"{i:>2}. {format_code(guess)}  {format_feedback(feedback)}")
    print(f"Unique solution: {'yes' if puzzle.is_unique else 'NO'} ({puzzle.solution_count})")
    print(f"Share code: {serialize_puzzle(puzzle.secret, puzzle.guesses)}")
    return 0 if puzzle.is_unique else 1


def run_decode(args):
    try:
        puzzle = deserialize_puzzle(args.code)
    except PuzzleDecodeError as e:
        print(f"Error: {e}")
        return 2
    print(f"Secret: {format_code(puzzle.secret)}")
    for i, (guess, feedback) in enumerate(puzzle.guesses, start=1):
        print(f"{i:>2}. {format_code(guess)}  {format_feedback(feedback)}")
    print(f"Codes consistent with the clues: {puzzle.solution_count}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mastermind",
        description="One-turn Mastermind: deduce the secret from pre-generated clues.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="Play one puzzle in the terminal.")
    p_play.add_argument("--puzzle", type=str, default=None, help="Share code to replay.")
    p_play.add_argument("--seed", type=int, default=None, help="Random seed.")
    p_play.set_defaults(func=run_play)

    p_gen = sub.add_parser("generate", help="Generate a puzzle and print its clues.")
    p_gen.add_argument("--secret", type=str, default=None, help="Secret code, e.g. RGBY.")
    p_gen.add_argument("--seed", type=int, default=None, help="Random seed.")
    p_gen.add_argument("--verbose", action="store_true", help="Print every generator step.")
    p_gen.set_defaults(func=run_generate)

    p_dec = sub.add_parser("decode", help="Show the puzzle behind a share code.")
    p_dec.add_argument("code", type=str)
    p_dec.set_defaults(func=run_decode)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
