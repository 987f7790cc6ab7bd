"""One-turn Mastermind: puzzles whose clues single out the secret."""
