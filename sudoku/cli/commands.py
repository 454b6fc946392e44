"""Parse what the player types at the game prompt."""
import re
from dataclasses import dataclass
from typing import Optional, Tuple

_CELL_PATTERN = re.compile(r"^(?:(\d{1,2})([A-Za-z])|([A-Za-z])(\d{1,2}))$")

_KEYWORDS = {
    "undo": "undo",
    "u": "undo",
    "redo": "redo",
    "r": "redo",
    "tree": "tree",
    "history": "tree",
    "save": "save",
    "help": "help",
    "?": "help",
    "quit": "quit",
    "exit": "quit",
    "q": "quit",
}


class CommandError(ValueError):
    """Input that cannot be turned into a command. The message is shown to the player."""


@dataclass
class Command:
    action: str  # move, clear, hint, goto or one of the keyword actions
    row: Optional[int] = None  # 0-based
    col: Optional[int] = None  # 0-based
    value: Optional[int] = None
    arg: Optional[str] = None


def column_label(col: int) -> str:
    return chr(ord("A") + col)


def cell_label(row: int, col: int) -> str:
    """Name of a cell as the player types it, e.g. `1A`."""
    return f"{row + 1}{column_label(col)}"


def parse_cell(text: str, size: int) -> Tuple[int, int]:
    """Parse `1A` or `A1` into 0-based (row, col)."""
    match = _CELL_PATTERN.match(text.strip())
    if match is None:
        raise CommandError("Invalid coordinates supplied. Try again.")
    row_text = match.group(1) or match.group(4)
    col_text = match.group(2) or match.group(3)
    row = int(row_text) - 1
    col = ord(col_text.upper()) - ord("A")
    if not 0 <= row < size:
        raise CommandError(f"Row must be between 1 and {size}. Try again.")
    if not 0 <= col < size:
        raise CommandError(
            f"Column must be between A and {column_label(size - 1)}. Try again."
        )
    return row, col


def parse_value(text: str, size: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise CommandError("Invalid number received. Try again.")
    if not 1 <= value <= size:
        raise CommandError(f"Number must be between 1 and {size}. Try again.")
    return value


def parse_command(line: str, size: int) -> Command:
    """
    Turn a line of input into a `Command`.

    Accepted forms:
        1A 5        place 5 at row 1, column A (A1 5 also works)
        clear 1A    empty a cell entered earlier
        hint 1A     list the values that fit at 1A
        goto <id>   jump to a history node by id prefix
        undo, redo, tree, save, help, quit
    """
    parts = line.strip().split()
    if not parts:
        raise CommandError("Coordinate and number not recognized. Try again.")

    keyword = parts[0].lower()
    if keyword in _KEYWORDS and len(parts) == 1:
        return Command(action=_KEYWORDS[keyword])
    if keyword in ("clear", "hint") and len(parts) == 2:
        row, col = parse_cell(parts[1], size)
        return Command(action=keyword, row=row, col=col)
    if keyword == "goto" and len(parts) == 2:
        return Command(action="goto", arg=parts[1].lower())

    if len(parts) != 2:
        raise CommandError("Coordinate and number not recognized. Try again.")
    row, col = parse_cell(parts[0], size)
    value = parse_value(parts[1], size)
    return Command(action="move", row=row, col=col, value=value)
