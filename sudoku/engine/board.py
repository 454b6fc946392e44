"""A play session: the initial puzzle plus the history of moves made on it."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from sudoku.common.constants import CELL_ALPHABET, CUSTOM_DIFFICULTY, Difficulty
from sudoku.engine.checker import Grid
from sudoku.engine.generator import BoardGenerator
from sudoku.engine.history import HistoryTree


def encode_board(board: Grid) -> List[str]:
    """Encode each row as a string with one character per cell."""
    return ["".join(CELL_ALPHABET[value] for value in row) for row in board]


def decode_board(rows: List[str]) -> Grid:
    return [[CELL_ALPHABET.index(ch) for ch in row.upper()] for row in rows]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Board:
    """
    A Sudoku game in progress.

    The initial puzzle is kept as a read-only copy so that given cells can be
    told apart from the player's entries. Every move is stored as a new node
    of a `HistoryTree`. `move` does not check legality: callers validate with
    `BoardGenerator.get_valid_values` first.
    """

    def __init__(
        self,
        initial_board: Grid,
        generator: Optional[BoardGenerator] = None,
        difficulty: Union[Difficulty, str] = CUSTOM_DIFFICULTY,
        created_at: Optional[datetime] = None,
        solved_at: Optional[datetime] = None,
        history: Optional[HistoryTree[List[str]]] = None,
    ):
        self._initial_board = [row[:] for row in initial_board]
        self.generator = generator if generator is not None else BoardGenerator(len(initial_board))
        if isinstance(difficulty, Difficulty):
            difficulty = difficulty.value
        self.difficulty: str = difficulty
        self.history: HistoryTree[List[str]] = (
            history if history is not None else HistoryTree(encode_board(initial_board))
        )
        self.created_at = created_at or _now()
        self.solved_at = solved_at

    @property
    def id(self) -> str:
        """The history root id, also the name of the save file."""
        return self.history.root.id

    @property
    def size(self) -> int:
        return len(self._initial_board)

    @property
    def initial_board(self) -> Grid:
        return [row[:] for row in self._initial_board]

    @property
    def current_board(self) -> Grid:
        return decode_board(self.history.current)

    @property
    def solved(self) -> bool:
        return self.generator.is_board_filled(self.current_board)

    def is_given(self, row: int, col: int) -> bool:
        return self._initial_board[row][col] != 0

    def move(self, row: int, col: int, value: int) -> None:
        """Record `value` at (row, col) as a new history state. 0 clears the cell."""
        board = self.current_board
        board[row][col] = value
        self.history.add_child(encode_board(board))

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def mark_solved(self, now: Optional[datetime] = None) -> bool:
        """Set `solved_at` the first time the board is found solved."""
        if self.solved_at is None and self.solved:
            self.solved_at = now or _now()
            return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        """The saved-game structure."""
        return {
            "initialBoard": self.initial_board,
            "history": self.history.serialize(),
            "current": self.history.current_node.id,
            "difficulty": self.difficulty,
            "createdAt": self.created_at.isoformat(),
            "solvedAt": self.solved_at.isoformat() if self.solved_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], generator: Optional[BoardGenerator] = None) -> Board:
        """Rebuild a game saved with `to_dict`."""
        try:
            initial_board = data["initialBoard"]
            history = HistoryTree.deserialize(data["history"], current_id=data.get("current"))
            created_at = datetime.fromisoformat(data["createdAt"])
            solved_at = datetime.fromisoformat(data["solvedAt"]) if data.get("solvedAt") else None
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed saved game: {e}") from e
        return cls(
            initial_board,
            generator=generator,
            difficulty=data.get("difficulty", CUSTOM_DIFFICULTY),
            created_at=created_at,
            solved_at=solved_at,
            history=history,
        )
