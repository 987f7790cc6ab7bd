#!/usr/bin/env python3
"""
puzzle_codec.py

Compact, URL-safe share codes for puzzles.

Only the secret and the guesses are stored; feedback is recomputed from
(guess, secret) when decoding. Layout of the text before base64:

    <version><secret: 4 digits><guess count: 1 hex digit><4 digits per guess>

Each digit is the index of a colour in COLORS. The text is then base64
encoded with the URL-safe alphabet and the '=' padding stripped.
"""

from __future__ import annotations

import base64
from typing import Iterable, Optional, Sequence, Union

from mastermind.config import CONFIG
from mastermind.mastermind_env import (
    CODE_LEN,
    COLORS,
    Code,
    GuessWithFeedback,
    compare,
    find_all_solutions,
    format_code,
)
from mastermind.puzzle_generator import Puzzle

HEADER_LEN = 1 + CODE_LEN + 1  # version + secret + guess count
MAX_GUESSES = 0xF
DECIMAL_DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdef"

COLOR_TO_INDEX = {color: i for i, color in enumerate(COLORS)}


class PuzzleDecodeError(ValueError):
    """The share code is malformed; no puzzle can be built from it."""


def _encode_code(code: Iterable[str]) -> str:
    try:
        return "".join(str(COLOR_TO_INDEX[color]) for color in code)
    except KeyError as e:
        raise ValueError(f"Unknown colour {e.args[0]!r} in code") from None


def _decode_code(digits: str) -> Code:
    code = []
    for ch in digits:
        idx = int(ch)
        if idx >= len(COLORS):
            raise PuzzleDecodeError(f"Colour index {idx} out of range")
        code.append(COLORS[idx])
    return tuple(code)


def serialize_puzzle(
    secret: Code,
    guesses: Sequence[Union[Code, GuessWithFeedback]],
    verbose: Optional[bool] = None,
) -> str:
    if verbose is None:
        verbose = CONFIG.generator.debug
    if len(guesses) > MAX_GUESSES:
        raise ValueError(f"At most {MAX_GUESSES} guesses fit in a share code, got {len(guesses)}")
    if len(secret) != CODE_LEN:
        raise ValueError(f"Secret must have {CODE_LEN} colours")

    raw = str(CONFIG.codec.version)
    raw += _encode_code(secret)
    raw += format(len(guesses), "x")
    for entry in guesses:
        guess = entry.guess if isinstance(entry, GuessWithFeedback) else entry
        if len(guess) != CODE_LEN:
            raise ValueError(f"Guess must have {CODE_LEN} colours")
        raw += _encode_code(guess)

    if verbose:
        print(f"[codec] encoded string: {raw}")
    return base64.urlsafe_b64encode(raw.encode("ascii")).decode("ascii").rstrip("=")


def deserialize_puzzle(serialized: str, verbose: Optional[bool] = None) -> Puzzle:
    """
    Rebuild a puzzle from a share code, recomputing every feedback.

    Raises PuzzleDecodeError on malformed input. A puzzle whose clues leave
    more than one possible code is still returned (the decoded secret is
    authoritative) but a warning is printed and solution_count says so.
    """
    if verbose is None:
        verbose = CONFIG.generator.debug

    text = serialized.strip()
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("ascii")
    except ValueError as e:  # binascii.Error and UnicodeError included
        raise PuzzleDecodeError(f"Not a valid share code: {e}") from None

    if verbose:
        print(f"[codec] decoded string: {raw}")

    if len(raw) < HEADER_LEN:
        raise PuzzleDecodeError(f"Share code too short ({len(raw)} chars)")
    if raw[0] != str(CONFIG.codec.version):
        raise PuzzleDecodeError(f"Unsupported share code version {raw[0]!r}")
    count_char = raw[1 + CODE_LEN]
    body = raw[1:1 + CODE_LEN] + raw[HEADER_LEN:]
    if count_char not in HEX_DIGITS or any(ch not in DECIMAL_DIGITS for ch in body):
        raise PuzzleDecodeError("Share code contains unexpected characters")

    num_guesses = int(count_char, 16)
    expected = HEADER_LEN + num_guesses * CODE_LEN
    if len(raw) != expected:
        raise PuzzleDecodeError(
            f"Share code length {len(raw)} does not match {num_guesses} guesses "
            f"(expected {expected})"
        )

    secret = _decode_code(raw[1:1 + CODE_LEN])
    guesses = []
    pos = HEADER_LEN
    for _ in range(num_guesses):
        guess = _decode_code(raw[pos:pos + CODE_LEN])
        pos += CODE_LEN
        guesses.append(GuessWithFeedback(guess, compare(guess, secret)))

    solutions = find_all_solutions(guesses)
    if len(solutions) > 1:
        print(
            f"WARNING: [codec] shared puzzle is ambiguous: {len(solutions)} codes fit the "
            f"clues; using decoded secret {format_code(secret)}"
        )
    return Puzzle(secret=secret, guesses=guesses, solution_count=len(solutions))


def try_deserialize_puzzle(serialized: str, verbose: Optional[bool] = None) -> Optional[Puzzle]:
    """deserialize_puzzle() that returns None instead of raising."""
    try:
        return deserialize_puzzle(serialized, verbose=verbose)
    except PuzzleDecodeError as e:
        print(f"WARNING: [codec] failed to decode puzzle: {e}")
        return None
