from sudoku.storage.game_store import GameStore, GameSummary

__all__ = ["GameStore", "GameSummary"]
