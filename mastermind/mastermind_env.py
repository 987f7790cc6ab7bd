#!/usr/bin/env python3
import random
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

# =========================
# Mastermind environment: codes, feedback, solution filtering
# =========================

COLORS = ("R", "G", "B", "Y", "O", "P")
COLOR_NAMES = {
    "R": "Red",
    "G": "Green",
    "B": "Blue",
    "Y": "Yellow",
    "O": "Orange",
    "P": "Purple",
}
CODE_LEN = 4

Code = Tuple[str, str, str, str]


class Feedback(NamedTuple):
    exact: int    # right colour, right position
    partial: int  # right colour, wrong position


class GuessWithFeedback(NamedTuple):
    guess: Code
    feedback: Feedback


def compare(a: Code, b: Code) -> Feedback:
    """
    Score code `a` against code `b` with standard Mastermind rules.

    Positions that match exactly are counted first; the leftover colours on
    both sides are then matched as multisets, so a single peg is never
    counted twice.
    """
    exact = 0
    a_left: Dict[str, int] = {}
    b_left: Dict[str, int] = {}
    for x, y in zip(a, b):
        if x == y:
            exact += 1
        else:
            a_left[x] = a_left.get(x, 0) + 1
            b_left[y] = b_left.get(y, 0) + 1
    partial = 0
    for color, count in a_left.items():
        partial += min(count, b_left.get(color, 0))
    return Feedback(exact, partial)


def filter_consistent(candidates: Iterable[Code], guess: Code, feedback: Feedback) -> List[Code]:
    """Keep only candidates that would produce the same feedback for `guess`."""
    return [c for c in candidates if compare(guess, c) == feedback]


def generate_all_codes() -> List[Code]:
    codes = []
    for c1 in COLORS:
        for c2 in COLORS:
            for c3 in COLORS:
                for c4 in COLORS:
                    codes.append((c1, c2, c3, c4))
    return codes


ALL_CODES: Tuple[Code, ...] = tuple(generate_all_codes())


def generate_all_feedback() -> List[Feedback]:
    # (3, 1) is listed but can never occur
    return [
        Feedback(exact, partial)
        for exact in range(CODE_LEN + 1)
        for partial in range(CODE_LEN + 1 - exact)
    ]


def find_all_solutions(trail: Iterable[GuessWithFeedback]) -> List[Code]:
    """Replay a guess/feedback trail from the full code space."""
    solutions = list(ALL_CODES)
    for guess, feedback in trail:
        solutions = filter_consistent(solutions, guess, feedback)
    return solutions


def random_code(rng: Optional[random.Random] = None) -> Code:
    rng = rng or random
    return rng.choice(ALL_CODES)


def parse_code(text: str) -> Code:
    """
    Parse a code typed by a human: "RGBY", "r g b y" and "R,G,B,Y" all work.
    Raises ValueError on a wrong length or unknown colour.
    """
    symbols = [ch for ch in text.upper() if not ch.isspace() and ch != ","]
    if len(symbols) != CODE_LEN:
        raise ValueError(f"A code needs exactly {CODE_LEN} colours, got {len(symbols)}: {text!r}")
    for ch in symbols:
        if ch not in COLORS:
            raise ValueError(f"Unknown colour {ch!r}; choose from {''.join(COLORS)}")
    return tuple(symbols)


def format_code(code: Iterable[Optional[str]]) -> str:
    return "".join(ch if ch else "." for ch in code)


def format_feedback(feedback: Feedback) -> str:
    """'X' per exact peg, 'o' per partial peg, '-' for the empty holes."""
    empty = CODE_LEN - feedback.exact - feedback.partial
    return "X" * feedback.exact + "o" * feedback.partial + "-" * empty
