import math
import random
from typing import List, Optional, Union

from sudoku.common.config import GeneratorConfig
from sudoku.common.constants import Difficulty
from sudoku.engine.checker import (
    Grid,
    get_valid_values,
    is_board_filled,
    is_solved,
    subgrid_size,
)
from sudoku.engine.removal import REMOVAL_POLICIES, RemovalPolicyFn
from sudoku.utils.log import get_logger


class GenerationError(RuntimeError):
    """Raised when a solved board could not be produced."""


def fill_diagonals(board: Grid, rng: random.Random) -> None:
    """
    Fill the boxes on the main diagonal with independent random permutations.

    Those boxes share no row, column or box with each other, so any filling
    is consistent; it only narrows the search that completes the board.
    """
    size = len(board)
    block = subgrid_size(size)
    for start in range(0, size, block):
        values = list(range(1, size + 1))
        rng.shuffle(values)
        for i in range(block):
            for j in range(block):
                board[start + i][start + j] = values[i * block + j]


class BoardGenerator:
    """
    Sudoku board generator using randomized backtracking.

    Features:
    - Supports any perfect-square size (4x4, 9x9, 16x16, 25x25)
    - Seeds the diagonal boxes, then completes the board depth first
    - Races parallel workers to complete large boards
    - Removes cells by difficulty or by an explicit count to create a puzzle
    """

    def __init__(
        self,
        size: int = 9,
        config: Optional[GeneratorConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the generator.

        Args:
            size (int): Size of the Sudoku board (must be a perfect square).
            config (GeneratorConfig): Generation settings. Defaults are used when omitted.
            seed (int): Seed for the private random number generator, overrides `config.seed`.
        """
        self.block = subgrid_size(size)
        self.size = size
        self.config = config if config is not None else GeneratorConfig(size=size)
        self.rng = random.Random(seed if seed is not None else self.config.seed)
        self.logger = get_logger(__name__)
        self.board: Grid = self.empty_board()
        self._solution: Optional[Grid] = None
        policy_cls = REMOVAL_POLICIES.get(self.config.removal_policy.lower())
        self.removal_policy: RemovalPolicyFn = policy_cls(self)

    @property
    def solution(self) -> Optional[Grid]:
        """The last generated solved board (a copy), or None before `generate`."""
        if self._solution is None:
            return None
        return [row[:] for row in self._solution]

    @property
    def search_budget(self) -> Optional[int]:
        """Search steps allowed per attempt, None when unlimited."""
        steps = self.config.max_search_steps
        if steps is None:
            return 50 * self.size**3 if self.size > 9 else None
        return steps or None

    def empty_board(self) -> Grid:
        return [[0 for _ in range(self.size)] for _ in range(self.size)]

    def generate(self) -> Grid:
        """
        Generate a fully solved board.

        Returns:
            list[list[int]]: A copy of the solved board, also kept as `solution`.
        """
        num_workers = self.config.num_workers
        if self.size > self.config.parallel_threshold and num_workers != 1:
            from sudoku.engine.parallel import race_complete_board

            board = race_complete_board(
                self.size,
                num_workers=num_workers,
                max_search_steps=self.search_budget,
                seed=self.rng.getrandbits(32),
            )
        else:
            board = self._generate_sequential()

        if not is_solved(board):
            raise GenerationError("Generated board violates the Sudoku constraints")

        self.board = board
        self._solution = [row[:] for row in board]
        return [row[:] for row in board]

    def _generate_sequential(self) -> Grid:
        attempt = 0
        budget = self.search_budget
        while True:
            attempt += 1
            board = self.empty_board()
            fill_diagonals(board, self.rng)
            if self.solve(board, max_steps=budget):
                self.logger.debug(
                    f"Generated {self.size}x{self.size} board in {attempt} attempt(s)"
                )
                return board
            self.logger.debug(
                f"Attempt {attempt} exceeded {budget} search steps, reseeding the diagonals"
            )

    def fill_diagonals(self, board: Grid) -> None:
        fill_diagonals(board, self.rng)

    def solve(self, board: Grid, max_steps: Optional[int] = None, shuffle: bool = True) -> bool:
        """
        Complete `board` in place by depth-first search.

        Empty cells are visited in row-major order; each frame of the explicit
        stack holds the candidates not yet tried for its cell. On failure every
        cell that was empty is reset to 0.

        Args:
            board (list[list[int]]): Board to complete.
            max_steps (int): Give up after this many placements. None means no limit.
            shuffle (bool): Try candidates in random order.

        Returns:
            bool: True if the board was completed.
        """
        empties = [(r, c) for r in range(self.size) for c in range(self.size) if board[r][c] == 0]
        if not empties:
            return is_solved(board)

        stack: List[List[int]] = [self._candidates(board, *empties[0], shuffle)]
        steps = 0
        while stack:
            r, c = empties[len(stack) - 1]
            candidates = stack[-1]
            if not candidates:
                board[r][c] = 0
                stack.pop()
                continue

            board[r][c] = candidates.pop()
            steps += 1
            if max_steps is not None and steps > max_steps:
                for er, ec in empties:
                    board[er][ec] = 0
                return False
            if len(stack) == len(empties):
                return True
            stack.append(self._candidates(board, *empties[len(stack)], shuffle))

        return False

    def count_solutions(self, board: Grid, limit: int = 2) -> int:
        """Count solutions of `board` up to `limit`. The board is not modified."""
        work = [row[:] for row in board]
        empties = [(r, c) for r in range(self.size) for c in range(self.size) if work[r][c] == 0]
        if not empties:
            return 1 if is_solved(work) else 0

        count = 0
        stack: List[List[int]] = [self._candidates(work, *empties[0], False)]
        while stack:
            r, c = empties[len(stack) - 1]
            candidates = stack[-1]
            if not candidates:
                work[r][c] = 0
                stack.pop()
                continue

            work[r][c] = candidates.pop()
            if len(stack) == len(empties):
                count += 1
                if count >= limit:
                    break
                continue
            stack.append(self._candidates(work, *empties[len(stack)], False))

        return count

    def _candidates(self, board: Grid, row: int, col: int, shuffle: bool) -> List[int]:
        values = sorted(get_valid_values(board, row, col), reverse=True)
        if shuffle:
            self.rng.shuffle(values)
        return values

    def get_valid_values(self, board: Grid, row: int, col: int) -> List[int]:
        """Legal values for (row, col), ascending."""
        return sorted(get_valid_values(board, row, col))

    def is_board_filled(self, board: Grid) -> bool:
        return is_board_filled(board)

    def get_blanks(self, difficulty: Difficulty) -> int:
        """Draw a blank-cell count within the difficulty's fraction range."""
        low, high = difficulty.blank_range
        total = self.size * self.size
        lower = math.ceil(round(low * total, 9))
        upper = max(lower, math.floor(round(high * total, 9)))
        return self.rng.randint(lower, upper)

    def generate_puzzle(self, difficulty: Union[Difficulty, str, int] = Difficulty.MEDIUM) -> Grid:
        """
        Generate a puzzle by removing cells from the solved board.

        Args:
            difficulty (Difficulty | str | int): A difficulty, its name, or an
                explicit number of cells to clear.

        Returns:
            list[list[int]]: The puzzle, zeros marking empty cells.
        """
        if isinstance(difficulty, int) and not isinstance(difficulty, bool):
            return self.generate_custom_puzzle(difficulty)
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty(difficulty)
        blanks = self.get_blanks(difficulty)
        self.logger.info(
            f"Generating {difficulty.value} {self.size}x{self.size} puzzle with {blanks} blanks"
        )
        return self._remove_cells(blanks, self.removal_policy)

    def generate_custom_puzzle(self, count: int) -> Grid:
        """Generate a puzzle with exactly `count` empty cells, without verification."""
        if not 1 <= count <= self.size * self.size:
            raise ValueError(
                f"Number of blanks must be between 1 and {self.size * self.size}, got {count}"
            )
        return self._remove_cells(count, REMOVAL_POLICIES.get("unchecked")(self))

    def _remove_cells(self, count: int, policy: RemovalPolicyFn) -> Grid:
        """
        Clear up to `count` cells of a copy of the solution.

        Cells are visited in random order; a removal the policy rejects is
        undone and that cell is not tried again.
        """
        if self._solution is None:
            self.generate()
        board = [row[:] for row in self._solution]

        cells = [(r, c) for r in range(self.size) for c in range(self.size)]
        self.rng.shuffle(cells)

        removed = 0
        for r, c in cells:
            if removed >= count:
                break
            value = board[r][c]
            board[r][c] = 0
            if policy.accept(board, r, c):
                removed += 1
            else:
                board[r][c] = value

        if removed < count:
            self.logger.warning(
                f"Only {removed} of {count} cells could be removed under the "
                f"`{policy._name}` policy"
            )
        return board
