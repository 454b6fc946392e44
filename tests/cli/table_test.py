import re

import pytest

from sudoku.cli.table import Colors, horizontal_divider, paint, render_board, render_grid
from sudoku.engine.board import Board

ANSI = re.compile(r"\033\[[0-9;]*m")

PUZZLE = [
    [0, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 0],
]


def strip_ansi(text):
    return ANSI.sub("", text)


def test_paint():
    assert paint("x", Colors.RED) == f"{Colors.RED}x{Colors.RESET}"
    assert paint("x", Colors.RED, enabled=False) == "x"


@pytest.mark.parametrize("size", [4, 9, 16, 25])
def test_line_count(size):
    grid = [[0] * size for _ in range(size)]
    lines = render_grid(grid, color=False).split("\n")
    assert len(lines) == 2 * size + 2


def test_plain_4x4_layout():
    lines = render_grid(PUZZLE, color=False).split("\n")
    assert lines[0].split() == ["A", "B", "C", "D"]
    assert lines[1].lstrip().startswith("┌")
    assert lines[2].startswith("1 │")
    assert " 2 " in lines[2] and "│" in lines[2]
    assert lines[-1].lstrip().startswith("└")
    # all rows are equally wide
    assert len({len(line) for line in lines[1:]}) == 1


def test_no_color_means_no_escape_codes():
    assert "\033[" not in render_grid(PUZZLE, color=False)


def test_colored_output_strips_to_plain():
    assert strip_ansi(render_grid(PUZZLE, PUZZLE, color=True)) == render_grid(
        PUZZLE, PUZZLE, color=False
    )


def test_player_entries_are_highlighted():
    board = Board(PUZZLE)
    board.move(0, 0, 1)
    rendered = render_board(board, color=True)
    assert f"{Colors.BLUE} 1 {Colors.RESET}" in rendered
    assert strip_ansi(rendered).split("\n")[2].startswith("1 │ 1 ")


def test_two_digit_values_fit():
    grid = [[(r + c) % 16 + 1 for c in range(16)] for r in range(16)]
    lines = render_grid(grid, color=False).split("\n")
    assert "16" in lines[2]
    assert lines[-1].startswith("   └")
    assert len({len(line) for line in lines[1:]}) == 1


def test_divider_matches_width():
    for size in (4, 9, 16):
        grid = [[0] * size for _ in range(size)]
        width = len(render_grid(grid, color=False).split("\n")[1])
        assert len(horizontal_divider(size)) == width
