#!/usr/bin/env python3
"""
config.py

Settings for the one-turn Mastermind puzzle generator.

- Defaults live in the dataclasses below.
- Any section can be overridden from a JSON file (mastermind_config.json in
  the working directory, or the path in $MASTERMIND_CONFIG), e.g.

    {"generator": {"random_seed": 7, "debug": true}}
"""

from __future__ import annotations

import json
import os
import random
from dataclasses import dataclass, asdict, field
from typing import Optional

CONFIG_PATH = os.getenv("MASTERMIND_CONFIG", "mastermind_config.json")


@dataclass
class GeneratorConfig:
    # Safety ceiling on the trail length; never reached for a 4x6 code space
    max_guesses: int = 11
    # Fresh secrets tried by new_puzzle() before giving up
    max_retries: int = 3
    # None -> seeded from system entropy, so every run gives new puzzles
    random_seed: Optional[int] = None
    debug: bool = False


@dataclass
class CodecConfig:
    version: int = 1


@dataclass
class BenchmarkConfig:
    games: int = 100
    parallel_eval: bool = True
    processes: Optional[int] = None


@dataclass
class Config:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)

    @classmethod
    def load(cls, path: str = CONFIG_PATH) -> "Config":
        """
        Load config from JSON, falling back to dataclass defaults for any
        missing fields or if the file doesn't exist.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return cls()

        def merged(dcls, key):
            default_dict = asdict(dcls())
            override = data.get(key, {})
            unknown = set(override) - set(default_dict)
            if unknown:
                raise ValueError(
                    f"Unknown setting(s) in [{key}] of {path}: {sorted(unknown)}"
                )
            default_dict.update(override)
            return dcls(**default_dict)

        return cls(
            generator=merged(GeneratorConfig, "generator"),
            codec=merged(CodecConfig, "codec"),
            benchmark=merged(BenchmarkConfig, "benchmark"),
        )


CONFIG = Config.load()

# Shared random source for secrets, first guesses and tie-breaks.
RNG = random.Random(CONFIG.generator.random_seed)
