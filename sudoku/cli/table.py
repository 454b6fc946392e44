"""Box-drawing rendering of a board for the terminal."""
from typing import Callable, List, Optional

from sudoku.cli.commands import column_label
from sudoku.engine.board import Board
from sudoku.engine.checker import Grid, subgrid_size


class Colors:
    RESET = "\033[0m"
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    DIM = "\033[2m"


def paint(text: str, color: str, enabled: bool = True) -> str:
    if not enabled or not color:
        return text
    return f"{color}{text}{Colors.RESET}"


def _cell_width(size: int) -> int:
    return 3 if size <= 9 else 4


def _border(
    left: str,
    middle: str,
    right: str,
    size: int,
    color: bool,
    major: Callable[[int], bool],
    line_color: str = Colors.WHITE,
) -> str:
    """A horizontal border; `major(i)` tells whether the junction before column i is a box edge."""
    segment = "─" * _cell_width(size)
    parts = [paint(left, Colors.WHITE, color)]
    for col in range(size):
        if col > 0:
            parts.append(paint(middle, Colors.WHITE if major(col) else Colors.GRAY, color))
        parts.append(paint(segment, line_color, color))
    parts.append(paint(right, Colors.WHITE, color))
    return "".join(parts)


def render_grid(
    grid: Grid,
    initial: Optional[Grid] = None,
    color: bool = True,
) -> str:
    """
    Render a grid as a table with column letters and row numbers.

    Box edges are drawn brighter than the lines inside a box. Cells that are
    empty in `initial` (the player's entries) are highlighted.

    Args:
        grid (list[list[int]]): The board to draw.
        initial (list[list[int]]): The original puzzle, used to tell givens apart.
        color (bool): Emit ANSI colors.

    Returns:
        str: The table, one line per row plus borders.
    """
    size = len(grid)
    block = subgrid_size(size)
    width = _cell_width(size)
    label_width = len(str(size))
    pad = " " * (label_width + 1)

    def is_major(index: int) -> bool:
        return index % block == 0

    lines: List[str] = []
    letters = " ".join(column_label(col).center(width) for col in range(size))
    lines.append(f"{pad} {letters}")
    lines.append(pad + _border("┌", "┬", "┐", size, color, lambda i: True))

    for row in range(size):
        if row > 0:
            row_major = is_major(row)
            separator = _border(
                "├",
                "┼",
                "┤",
                size,
                color,
                lambda i: row_major or is_major(i),
                line_color=Colors.WHITE if row_major else Colors.GRAY,
            )
            lines.append(pad + separator)

        cells = [paint("│", Colors.WHITE, color)]
        for col in range(size):
            value = grid[row][col]
            text = (str(value) if value else "").center(width)
            if value and initial is not None and initial[row][col] == 0:
                text = paint(text, Colors.BLUE, color)
            cells.append(text)
            edge = col == size - 1 or is_major(col + 1)
            cells.append(paint("│", Colors.WHITE if edge else Colors.GRAY, color))
        lines.append(f"{str(row + 1).rjust(label_width)} " + "".join(cells))

    lines.append(pad + _border("└", "┴", "┘", size, color, lambda i: True))
    return "\n".join(lines)


def render_board(board: Board, color: bool = True) -> str:
    return render_grid(board.current_board, board.initial_board, color=color)


def horizontal_divider(size: int = 9) -> str:
    return "─" * (len(str(size)) + 1 + (_cell_width(size) + 1) * size + 1)
