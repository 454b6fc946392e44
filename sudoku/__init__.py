"""Terminal Sudoku with a branching move history."""
__version__ = "1.0.0"
