"""Interactive prompt loop for playing one game."""
from typing import Callable, List, Optional, Sequence

from sudoku.cli.commands import Command, CommandError, cell_label, parse_command
from sudoku.cli.table import Colors, horizontal_divider, paint, render_board
from sudoku.common.config import Config
from sudoku.common.constants import CUSTOM_DIFFICULTY, SUPPORTED_SIZES, Difficulty
from sudoku.engine.board import Board
from sudoku.engine.generator import BoardGenerator, GenerationError
from sudoku.storage.game_store import GameStore
from sudoku.utils.log import get_logger

logger = get_logger(__name__)

HELP_TEXT = """\
Commands:
  1A 5        place 5 at row 1, column A
  clear 1A    empty a cell you filled
  hint 1A     show the numbers that fit at 1A
  undo, redo  step through your moves
  tree        show every branch of your move history
  goto <id>   jump to a position listed by `tree`
  save        save the game
  quit        save and leave"""


def choose(
    title: str,
    options: Sequence[str],
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> int:
    """Show a numbered menu until a valid option is picked. Returns its index."""
    output(title)
    for index, option in enumerate(options, start=1):
        output(f"  {index}. {option}")
    while True:
        answer = input_fn("> ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        lowered = [option.lower() for option in options]
        if answer.lower() in lowered:
            return lowered.index(answer.lower())
        output(f"Please enter a number between 1 and {len(options)}.")


def ask_int(
    prompt: str,
    low: int,
    high: int,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> int:
    while True:
        answer = input_fn(prompt).strip()
        if answer.isdigit() and low <= int(answer) <= high:
            return int(answer)
        output(f"Please enter a number between {low} and {high}.")


def new_board(
    config: Config,
    difficulty: Optional[str] = None,
    blanks: Optional[int] = None,
) -> Board:
    """Generate a puzzle for `config.generator` and wrap it in a Board."""
    generator = BoardGenerator(config.generator.size, config=config.generator)
    if blanks is not None:
        puzzle = generator.generate_custom_puzzle(blanks)
        label = CUSTOM_DIFFICULTY
    else:
        level = Difficulty(difficulty or config.generator.difficulty)
        puzzle = generator.generate_puzzle(level)
        label = level.value
    return Board(puzzle, generator=generator, difficulty=label)


def new_board_interactive(
    config: Config,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> Optional[Board]:
    """Ask for size and difficulty, then generate. Returns None if the player gives up."""
    size_index = choose(
        "Choose a board size:",
        [f"{size}x{size}" for size in SUPPORTED_SIZES],
        input_fn,
        output,
    )
    config.generator.size = SUPPORTED_SIZES[size_index]
    size = config.generator.size

    options = [level.value for level in Difficulty] + ["Custom"]
    level_index = choose("Choose a difficulty:", options, input_fn, output)
    blanks = None
    difficulty = None
    if level_index == len(options) - 1:
        blanks = ask_int(
            f"How many empty cells (1-{size * size})? ", 1, size * size, input_fn, output
        )
    else:
        difficulty = Difficulty.from_index(level_index).value

    while True:
        output(f"Generating {size}x{size} board...")
        try:
            return new_board(config, difficulty=difficulty, blanks=blanks)
        except GenerationError as e:
            logger.error(f"Board generation failed: {e}")
            output(paint(f"Board generation failed: {e}", Colors.RED, config.display.color))
            if input_fn("Try again? [y/N] ").strip().lower() not in ("y", "yes"):
                return None


class Game:
    """Runs the prompt loop for one board."""

    def __init__(
        self,
        board: Board,
        store: Optional[GameStore] = None,
        color: bool = True,
        autosave: bool = True,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ):
        self.board = board
        self.store = store
        self.color = color
        self.autosave = autosave
        self.input_fn = input_fn
        self.output = output

    def _say(self, message: str, color: str = Colors.DIM) -> None:
        self.output(paint(message, color, self.color))

    def _save(self) -> None:
        if self.store is not None:
            path = self.store.save(self.board)
            logger.debug(f"Game saved to {path}")

    def run(self) -> Board:
        """Prompt for commands until the player quits or solves the board."""
        self._say(f"Game {self.board.id[:8]} ({self.board.difficulty}). Type `help` for commands.")
        while True:
            self.output(render_board(self.board, color=self.color))
            if self.board.solved:
                self._finish()
                return self.board
            try:
                line = self.input_fn("> ")
            except (EOFError, KeyboardInterrupt):
                line = "quit"
            try:
                command = parse_command(line, self.board.size)
            except CommandError as e:
                self._say(str(e), Colors.RED)
                continue
            if not self.handle(command):
                return self.board

    def _finish(self) -> None:
        if self.board.mark_solved():
            self._save()
        self._say("Congratulations! You won!", Colors.GREEN)
        self.output(horizontal_divider(self.board.size))

    def handle(self, command: Command) -> bool:
        """Apply one command. Returns False when the game loop should stop."""
        action = command.action
        if action == "quit":
            self._save()
            if self.store is not None:
                self._say(f"Saved. Resume with `sudoku resume {self.board.id}`.")
            return False
        if action == "help":
            self.output(HELP_TEXT)
        elif action == "save":
            if self.store is None:
                self._say("Saving is disabled.", Colors.YELLOW)
            else:
                self._save()
                self._say(f"Saved game {self.board.id}.")
        elif action == "undo":
            if self.board.undo():
                self._say("Undone.")
            else:
                self._say("Cannot undo any further.", Colors.YELLOW)
        elif action == "redo":
            if self.board.redo():
                self._say("Redone.")
            else:
                self._say("Cannot redo any further.", Colors.YELLOW)
        elif action == "tree":
            self.output("\n".join(self.describe_history()))
        elif action == "goto":
            self.goto(command.arg)
        elif action == "hint":
            self.hint(command.row, command.col)
        elif action == "clear":
            self.place(command.row, command.col, 0)
        elif action == "move":
            self.place(command.row, command.col, command.value)
        return True

    def allowed_values(self, row: int, col: int) -> List[int]:
        """Values that fit at (row, col), ignoring what the player put there."""
        grid = self.board.current_board
        grid[row][col] = 0
        return self.board.generator.get_valid_values(grid, row, col)

    def hint(self, row: int, col: int) -> None:
        label = cell_label(row, col)
        if self.board.is_given(row, col):
            self._say(f"{label} is a given cell.", Colors.YELLOW)
            return
        values = self.allowed_values(row, col)
        if values:
            self._say(f"{label} can be: {', '.join(str(v) for v in values)}")
        else:
            self._say(f"Nothing fits at {label}, an earlier move must be wrong.", Colors.YELLOW)

    def place(self, row: int, col: int, value: int) -> bool:
        label = cell_label(row, col)
        if self.board.is_given(row, col):
            self._say("That is a generated value, it cannot be changed. Try again.", Colors.RED)
            return False
        current = self.board.current_board[row][col]
        if value == current:
            self._say(f"{label} already holds that.", Colors.YELLOW)
            return False
        if value != 0 and value not in self.allowed_values(row, col):
            self._say("That is an invalid move. Try again.", Colors.RED)
            return False

        self.board.move(row, col, value)
        if value:
            self._say(f"Played {value} at {label}.")
        else:
            self._say(f"Cleared {label}.")
        if self.autosave:
            self._save()
        return True

    def goto(self, prefix: Optional[str]) -> bool:
        matches = self.board.history.find(prefix or "")
        if len(matches) != 1:
            reason = "No" if not matches else "More than one"
            self._say(f"{reason} history position matches `{prefix}`.", Colors.YELLOW)
            return False
        self.board.history.goto(matches[0].id)
        self._say(f"Moved to position {matches[0].id[:8]}.")
        return True

    def describe_history(self) -> List[str]:
        """One line per history node, indented by depth, `*` marking the current one."""
        lines = []
        current_id = self.board.history.current_node.id
        initial_filled = sum(1 for row in self.board.initial_board for v in row if v)
        for depth, node in self.board.history.walk():
            filled = sum(1 for row in node.value for ch in row if ch != "0") - initial_filled
            marker = "*" if node.id == current_id else " "
            lines.append(f"{marker} {'  ' * depth}{node.id[:8]}  ({filled} filled)")
        return lines
