import pytest

from sudoku.common.constants import CELL_ALPHABET, Difficulty, RemovalPolicy


@pytest.mark.parametrize(
    "name,level",
    [
        ("easy", Difficulty.EASY),
        ("MEDIUM", Difficulty.MEDIUM),
        ("normal", Difficulty.MEDIUM),
        ("Hard", Difficulty.HARD),
        ("expert", Difficulty.EXTREME),
        ("impossible", Difficulty.IMPOSSIBLE),
    ],
)
def test_difficulty_lookup(name, level):
    assert Difficulty(name) is level
    assert Difficulty[name] is level


def test_unknown_difficulty():
    with pytest.raises(ValueError):
        Difficulty("trivial")
    with pytest.raises(KeyError):
        Difficulty["trivial"]


def test_difficulty_order_and_ranges():
    assert [level.value for level in Difficulty] == [
        "Easy",
        "Medium",
        "Hard",
        "Extreme",
        "Impossible",
    ]
    assert Difficulty.from_index(0) is Difficulty.EASY
    assert Difficulty.from_index(4) is Difficulty.IMPOSSIBLE
    previous_high = 0.0
    for level in Difficulty:
        low, high = level.blank_range
        assert previous_high < low < high < 1
        previous_high = high
    assert Difficulty.HARD.blank_range == (0.60, 0.65)


def test_removal_policy_lookup():
    assert RemovalPolicy("unique") is RemovalPolicy.UNIQUE
    assert RemovalPolicy.solvable is RemovalPolicy.SOLVABLE


def test_cell_alphabet_covers_largest_board():
    assert CELL_ALPHABET[:10] == "0123456789"
    assert CELL_ALPHABET[25] == "P"
