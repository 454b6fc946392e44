# -*- coding: utf-8 -*-
"""Puzzle engine: constraint checks, generation and move history."""
from sudoku.engine.board import Board, decode_board, encode_board
from sudoku.engine.checker import (
    InvalidSizeError,
    get_valid_values,
    is_board_filled,
    is_grid_valid,
    is_solved,
    is_valid,
)
from sudoku.engine.generator import BoardGenerator, GenerationError
from sudoku.engine.history import HistoryTree, HistoryTreeNode
from sudoku.engine.removal import REMOVAL_POLICIES, RemovalPolicyFn

__all__ = [
    "Board",
    "BoardGenerator",
    "GenerationError",
    "HistoryTree",
    "HistoryTreeNode",
    "InvalidSizeError",
    "REMOVAL_POLICIES",
    "RemovalPolicyFn",
    "decode_board",
    "encode_board",
    "get_valid_values",
    "is_board_filled",
    "is_grid_valid",
    "is_solved",
    "is_valid",
]
