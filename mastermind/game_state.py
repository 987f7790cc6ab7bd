#!/usr/bin/env python3
"""
game_state.py

The one-turn game played on top of a generated puzzle: the board shows the
trail of clues, the player picks four colours, submits once, and learns
whether they found the secret.

All state lives in GameState; it is only changed through the transition
functions below.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from mastermind.mastermind_env import (
    CODE_LEN,
    COLORS,
    Code,
    Feedback,
    GuessWithFeedback,
    compare,
    format_code,
    format_feedback,
)
from mastermind.puzzle_codec import serialize_puzzle
from mastermind.puzzle_generator import Puzzle, new_puzzle


@dataclass
class GameState:
    secret: Code
    past_guesses: List[GuessWithFeedback]
    input_colors: List[Optional[str]] = field(default_factory=lambda: ["R"] * CODE_LEN)
    player_guess: Optional[Code] = None
    game_ended: bool = False
    player_won: bool = False
    solution_count: int = 1


def game_from_puzzle(puzzle: Puzzle) -> GameState:
    return GameState(
        secret=puzzle.secret,
        past_guesses=list(puzzle.guesses),
        solution_count=puzzle.solution_count,
    )


def new_game(rng: Optional[random.Random] = None) -> GameState:
    return game_from_puzzle(new_puzzle(rng=rng))


def set_input_color(state: GameState, index: int, color: Optional[str]) -> None:
    """Set (or blank, with color=None) one of the player's input slots."""
    if state.game_ended:
        return
    if not 0 <= index < CODE_LEN:
        raise ValueError(f"Slot index must be 0..{CODE_LEN - 1}, got {index}")
    if color is not None:
        color = color.upper()
        if color not in COLORS:
            raise ValueError(f"Unknown colour {color!r}; choose from {''.join(COLORS)}")
    state.input_colors[index] = color


def can_submit(state: GameState) -> bool:
    return not state.game_ended and all(c is not None for c in state.input_colors)


def submit_guess(state: GameState) -> Feedback:
    """Lock in the player's single guess and end the game."""
    if not can_submit(state):
        raise ValueError("Cannot submit: game already ended or a slot is blank")
    state.player_guess = tuple(state.input_colors)
    state.game_ended = True
    state.player_won = state.player_guess == tuple(state.secret)
    return compare(state.player_guess, state.secret)


def share_code(state: GameState) -> str:
    return serialize_puzzle(state.secret, state.past_guesses)


def render_board(state: GameState) -> str:
    """Plain-text board: clue rows, the player's row and the result."""
    lines = []
    for i, (guess, feedback) in enumerate(state.past_guesses, start=1):
        lines.append(f"{i:>2}. {format_code(guess)}  {format_feedback(feedback)}")

    if state.player_guess is not None:
        fb = compare(state.player_guess, state.secret)
        row = f"  > {format_code(state.player_guess)}  {format_feedback(fb)}"
        if not state.player_won:
            row += f"   Secret: {format_code(state.secret)}"
        lines.append(row)
    else:
        lines.append(f"  ? {format_code(state.input_colors)}")

    if state.game_ended:
        lines.append("Correct!" if state.player_won else "Incorrect! The secret is shown above.")
    if state.solution_count > 1:
        lines.append(
            f"Warning: these clues allow {state.solution_count} different codes."
        )
    return "\n".join(lines)
