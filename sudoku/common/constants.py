# -*- coding: utf-8 -*-
"""Constants."""
from enum import Enum, EnumMeta
from typing import Tuple

# env var names
SAVE_DIR_ENV_VAR = "SUDOKU_SAVE_DIR"  # where saved games live
LOG_DIR_ENV_VAR = "SUDOKU_LOG_DIR"  # log dir
LOG_LEVEL_ENV_VAR = "SUDOKU_LOG_LEVEL"  # global log level
SLOW_TESTS_ENV_VAR = "SUDOKU_SLOW_TESTS"

# constants

SUPPORTED_SIZES = (4, 9, 16, 25)
DEFAULT_SIZE = 9
DEFAULT_SAVE_DIR = "~/.sudoku/saves"

# one character per cell in a serialized row, value 10 is "A", 25 is "P"
CELL_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

CUSTOM_DIFFICULTY = "custom"


# enumerate types


class CaseInsensitiveEnumMeta(EnumMeta):
    name_aliases = {}

    def __getitem__(cls, name):
        name = cls.name_aliases.get(name.lower(), name)
        return super().__getitem__(name.upper())

    def __getattr__(cls, name):
        if not name.startswith("_"):
            return cls[name.upper()]
        return super().__getattr__(name)

    def __call__(cls, value, *args, **kwargs):
        value = cls.name_aliases.get(value.lower(), value)
        return super().__call__(value.capitalize(), *args, **kwargs)


class CaseInsensitiveEnum(Enum, metaclass=CaseInsensitiveEnumMeta):
    pass


class DifficultyEnumMeta(CaseInsensitiveEnumMeta):
    name_aliases = {
        "normal": "medium",
        "expert": "extreme",
    }


class Difficulty(CaseInsensitiveEnum, metaclass=DifficultyEnumMeta):
    """Puzzle difficulty. The value is the label stored in saved games."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXTREME = "Extreme"
    IMPOSSIBLE = "Impossible"

    @property
    def blank_range(self) -> Tuple[float, float]:
        """Fraction of cells left blank, as (min, max)."""
        return BLANK_FRACTIONS[self]

    @classmethod
    def from_index(cls, index: int) -> "Difficulty":
        return list(cls)[index]


BLANK_FRACTIONS = {
    Difficulty.EASY: (0.40, 0.45),
    Difficulty.MEDIUM: (0.50, 0.55),
    Difficulty.HARD: (0.60, 0.65),
    Difficulty.EXTREME: (0.70, 0.75),
    Difficulty.IMPOSSIBLE: (0.80, 0.85),
}


class RemovalPolicy(CaseInsensitiveEnum):
    """How a cell removal is verified while punching a puzzle."""

    UNCHECKED = "Unchecked"  # commit every removal
    SOLVABLE = "Solvable"  # re-solve a copy before committing
    UNIQUE = "Unique"  # keep exactly one solution
