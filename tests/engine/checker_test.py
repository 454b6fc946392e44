import pytest

from sudoku.engine.checker import (
    InvalidSizeError,
    get_valid_values,
    is_board_filled,
    is_grid_valid,
    is_solved,
    is_valid,
    subgrid_size,
)

SOLVED_4X4 = [
    [1, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 1],
]

PUZZLE_9X9 = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]


# ---------- Sizes ----------


@pytest.mark.parametrize("size,block", [(1, 1), (4, 2), (9, 3), (16, 4), (25, 5)])
def test_subgrid_size_of_perfect_squares(size, block):
    assert subgrid_size(size) == block


@pytest.mark.parametrize("size", [0, -4, 2, 8, 10, 24])
def test_subgrid_size_rejects_other_sizes(size):
    with pytest.raises(InvalidSizeError):
        subgrid_size(size)


def test_invalid_size_is_a_value_error():
    assert issubclass(InvalidSizeError, ValueError)


# ---------- Valid values (4x4) ----------


def test_solved_board_has_no_valid_values_anywhere():
    for row in range(4):
        for col in range(4):
            assert get_valid_values(SOLVED_4X4, row, col) == set()


def test_single_blank_has_single_candidate():
    board = [row[:] for row in SOLVED_4X4]
    board[0][0] = 0

    assert get_valid_values(board, 0, 0) == {1}
    assert is_valid(board, 0, 0, 1)
    for value in (2, 3, 4):
        assert not is_valid(board, 0, 0, value)


def test_valid_values_do_not_modify_board():
    board = [row[:] for row in PUZZLE_9X9]
    get_valid_values(board, 0, 2)
    is_valid(board, 0, 2, 4)
    assert board == PUZZLE_9X9


# ---------- Valid values (9x9) ----------


def test_valid_values_exclude_row_column_and_box():
    # row 0 has 5,3,7; column 2 has 8; box 0 has 5,3,6,9,8
    assert get_valid_values(PUZZLE_9X9, 0, 2) == {1, 2, 4}


def test_is_valid_detects_each_conflict():
    assert not is_valid(PUZZLE_9X9, 0, 2, 7)  # row
    assert not is_valid(PUZZLE_9X9, 0, 2, 8)  # column
    assert not is_valid(PUZZLE_9X9, 0, 2, 6)  # box
    assert is_valid(PUZZLE_9X9, 0, 2, 4)


def test_is_valid_matches_valid_values():
    for row in range(9):
        for col in range(9):
            if PUZZLE_9X9[row][col] != 0:
                continue
            expected = {v for v in range(1, 10) if is_valid(PUZZLE_9X9, row, col, v)}
            assert get_valid_values(PUZZLE_9X9, row, col) == expected


# ---------- Whole board checks ----------


def test_board_filled():
    assert is_board_filled(SOLVED_4X4)
    assert not is_board_filled(PUZZLE_9X9)


def test_grid_valid_allows_incomplete_board():
    assert is_grid_valid(PUZZLE_9X9)
    assert not is_solved(PUZZLE_9X9)


def test_grid_valid_detects_row_violation():
    board = [[1, 1, 0, 0]] + [[0] * 4 for _ in range(3)]
    assert not is_grid_valid(board)


def test_grid_valid_detects_column_violation():
    board = [[5] + [0] * 8, [5] + [0] * 8] + [[0] * 9 for _ in range(7)]
    assert not is_grid_valid(board)


def test_grid_valid_detects_block_violation():
    board = [
        [1, 2, 0, 0],
        [3, 1, 0, 0],  # duplicate "1" in top-left 2x2 block
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    assert not is_grid_valid(board)


def test_is_solved():
    assert is_solved(SOLVED_4X4)
    out_of_range = [row[:] for row in SOLVED_4X4]
    out_of_range[0][0] = 5
    assert not is_solved(out_of_range)
    swapped = [row[:] for row in SOLVED_4X4]
    swapped[0][0], swapped[0][1] = swapped[0][1], swapped[0][0]
    assert not is_solved(swapped)
