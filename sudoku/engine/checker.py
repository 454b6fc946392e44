"""Constraint checks shared by generation and move validation.

All functions are pure: they read the grid and never modify it. A grid is a
list of N rows of N integers, 0 meaning an empty cell, where N is a perfect
square and every aligned sqrt(N) x sqrt(N) box must hold each value once.
"""
import math
from typing import List, Sequence, Set

Grid = List[List[int]]


class InvalidSizeError(ValueError):
    """Raised when a board size is not a positive perfect square."""


def subgrid_size(size: int) -> int:
    """Return the box width of a board of `size`, checking that it is a perfect square."""
    if not isinstance(size, int) or size <= 0:
        raise InvalidSizeError(f"Invalid size: {size!r}")
    block = math.isqrt(size)
    if block * block != size:
        raise InvalidSizeError(f"Invalid size: {size} is not a perfect square")
    return block


def is_valid(board: Sequence[Sequence[int]], row: int, col: int, value: int) -> bool:
    """
    Check whether `value` can be placed at (row, col).

    The cell is assumed to be empty: the value must not appear anywhere in
    the row, the column or the box containing the cell.

    Args:
        board (list[list[int]]): Current board state.
        row (int): Row index.
        col (int): Column index.
        value (int): Value to place.

    Returns:
        bool: True if valid, False otherwise.
    """
    size = len(board)
    if value in board[row]:
        return False

    for i in range(size):
        if board[i][col] == value:
            return False

    block = math.isqrt(size)
    br = (row // block) * block
    bc = (col // block) * block
    for i in range(br, br + block):
        for j in range(bc, bc + block):
            if board[i][j] == value:
                return False

    return True


def get_valid_values(board: Sequence[Sequence[int]], row: int, col: int) -> Set[int]:
    """
    Values that do not conflict with the row, column or box of (row, col).

    The cell's own value counts as a conflict, so a filled cell of a solved
    board has no valid values.
    """
    size = len(board)
    block = math.isqrt(size)
    seen = set(board[row])
    seen.update(board[i][col] for i in range(size))
    br = (row // block) * block
    bc = (col // block) * block
    for i in range(br, br + block):
        seen.update(board[i][bc : bc + block])
    return set(range(1, size + 1)) - seen


def is_board_filled(board: Sequence[Sequence[int]]) -> bool:
    return all(cell != 0 for row in board for cell in row)


def is_grid_valid(board: Sequence[Sequence[int]]) -> bool:
    """
    Check that no row, column or box holds a non-zero value twice.

    Incomplete boards are allowed (zeros are treated as empty cells).
    """
    size = len(board)
    block = math.isqrt(size)

    # Check rows
    for row in board:
        nums = [v for v in row if v != 0]
        if len(nums) != len(set(nums)):
            return False

    # Check columns
    for c in range(size):
        nums = [board[r][c] for r in range(size) if board[r][c] != 0]
        if len(nums) != len(set(nums)):
            return False

    # Check sub-grids
    for br in range(0, size, block):
        for bc in range(0, size, block):
            nums = []
            for r in range(br, br + block):
                for c in range(bc, bc + block):
                    v = board[r][c]
                    if v != 0:
                        nums.append(v)
            if len(nums) != len(set(nums)):
                return False

    return True


def is_solved(board: Sequence[Sequence[int]]) -> bool:
    """A board is solved when it is filled, in range and conflict free."""
    size = len(board)
    if any(len(row) != size for row in board):
        return False
    if any(not 1 <= cell <= size for row in board for cell in row):
        return False
    return is_grid_valid(board)
