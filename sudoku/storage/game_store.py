"""JSON file store for saved games."""
import json
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sudoku.engine.board import Board
from sudoku.engine.generator import BoardGenerator
from sudoku.storage import json_codec
from sudoku.utils.log import get_logger


@dataclass
class GameSummary:
    """What the resume menu shows for a saved game."""

    id: str
    difficulty: str
    size: int
    created_at: datetime
    solved_at: Optional[datetime]
    path: str

    @property
    def solved(self) -> bool:
        return self.solved_at is not None


class GameStore:
    """One `<game id>.json` file per game under `save_dir`.

    A missing directory means no saved games; it is created on first use.
    """

    def __init__(self, save_dir: str):
        self.save_dir = os.path.abspath(os.path.expanduser(save_dir))
        self.logger = get_logger(__name__)

    def _ensure_dir(self) -> None:
        if not os.path.isdir(self.save_dir):
            self.logger.info(f"Creating save directory {self.save_dir}")
            os.makedirs(self.save_dir, exist_ok=True)

    def path_of(self, game_id: str) -> str:
        return os.path.join(self.save_dir, f"{game_id}.json")

    def save(self, board: Board) -> str:
        """Write the game and return the file path."""
        self._ensure_dir()
        path = self.path_of(board.id)
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json_codec.dump(board.to_dict(), f)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        self.logger.debug(f"Saved game {board.id} to {path}")
        return path

    def _read(self, path: str) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json_codec.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed saved game {path}: {e}") from e

    def load(self, game_id: str, generator: Optional[BoardGenerator] = None) -> Board:
        """Load a saved game. Raises FileNotFoundError for an unknown id."""
        path = self.path_of(game_id)
        if not os.path.isfile(path):
            raise FileNotFoundError(f"No saved game with id {game_id} in {self.save_dir}")
        return Board.from_dict(self._read(path), generator=generator)

    def delete(self, game_id: str) -> None:
        os.remove(self.path_of(game_id))

    def list_games(self) -> List[GameSummary]:
        """Summaries of every readable saved game, newest first."""
        self._ensure_dir()
        games = []
        for filename in os.listdir(self.save_dir):
            if not filename.endswith(".json"):
                continue
            path = os.path.join(self.save_dir, filename)
            try:
                data = self._read(path)
                summary = GameSummary(
                    id=data["history"]["_id"],
                    difficulty=data.get("difficulty", "custom"),
                    size=len(data["initialBoard"]),
                    created_at=datetime.fromisoformat(data["createdAt"]),
                    solved_at=(
                        datetime.fromisoformat(data["solvedAt"]) if data.get("solvedAt") else None
                    ),
                    path=path,
                )
            except (ValueError, KeyError, TypeError) as e:
                self.logger.warning(f"Skipping unreadable saved game {path}: {e}")
                continue
            games.append(summary)
        games.sort(key=lambda game: game.created_at, reverse=True)
        return games
