import pytest

from backend.bingo.game.rules import COLUMNS, DIAGONALS, ROWS, WINNING_LINES, evaluate


def _marks(indices):
    marks = [False] * 25
    for i in indices:
        marks[i] = True
    return marks


def test_twelve_winning_lines():
    assert len(WINNING_LINES) == 12
    assert DIAGONALS == [(0, 6, 12, 18, 24), (4, 8, 12, 16, 20)]


@pytest.mark.parametrize("line", ROWS + COLUMNS + DIAGONALS)
def test_each_line_wins_regular(line):
    assert evaluate(_marks(line), "regular") is True


def test_no_line_no_win():
    # One gap per row and per column, positioned so both diagonals break too.
    almost = [i for i in range(25) if i % 5 != (2 * (i // 5)) % 5]
    assert 12 in almost
    assert len(almost) == 20
    assert evaluate(_marks(almost), "regular") is False


def test_only_free_space_marked():
    assert evaluate(_marks([12]), "regular") is False


def test_blackout_requires_every_cell():
    assert evaluate([True] * 25, "blackout") is True
    for missing in (0, 12, 24):
        marks = [True] * 25
        marks[missing] = False
        assert evaluate(marks, "blackout") is False


def test_line_is_not_enough_for_blackout():
    assert evaluate(_marks(ROWS[0]), "blackout") is False


def test_full_board_also_wins_regular():
    assert evaluate([True] * 25, "regular") is True


def test_rejects_bad_input():
    with pytest.raises(ValueError):
        evaluate([True] * 24, "regular")
    with pytest.raises(ValueError):
        evaluate([True] * 25, "turbo")
