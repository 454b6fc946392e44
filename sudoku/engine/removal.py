"""Policies deciding whether a cell may be cleared while punching a puzzle."""
from abc import ABC, abstractmethod

from sudoku.engine.checker import Grid
from sudoku.utils.registry import Registry

REMOVAL_POLICIES: Registry = Registry(
    "removal_policies",
    default_mapping={
        "unchecked": "sudoku.engine.removal.UncheckedRemoval",
        "solvable": "sudoku.engine.removal.SolvableRemoval",
        "unique": "sudoku.engine.removal.UniqueRemoval",
    },
)


class RemovalPolicyFn(ABC):
    """Base class of removal policies.

    `accept` is called right after (row, col) has been cleared on `board`;
    returning False makes the generator restore the cell.
    """

    _name = "removal_policy"

    def __init__(self, generator):
        self.generator = generator

    @abstractmethod
    def accept(self, board: Grid, row: int, col: int) -> bool:
        """Whether the removal at (row, col) is kept."""


class UncheckedRemoval(RemovalPolicyFn):
    """Keep every removal."""

    def accept(self, board: Grid, row: int, col: int) -> bool:
        return True


class SolvableRemoval(RemovalPolicyFn):
    """Keep a removal when a copy of the board can still be solved."""

    def accept(self, board: Grid, row: int, col: int) -> bool:
        copy = [r[:] for r in board]
        return self.generator.solve(copy, max_steps=self.generator.search_budget)


class UniqueRemoval(RemovalPolicyFn):
    """Keep a removal only while the puzzle has exactly one solution.

    Clearing more cells never removes solutions, so a rejected cell stays
    rejected for the rest of the puzzle.
    """

    def accept(self, board: Grid, row: int, col: int) -> bool:
        return self.generator.count_solutions(board, limit=2) == 1
