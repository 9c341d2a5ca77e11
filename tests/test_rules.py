import itertools

import pytest

from models import EMPTY_BOARD, NO_RESULT
from rules import WIN_LINES, empty_cells, evaluate, is_full

X, O, _ = "X", "O", None


@pytest.mark.parametrize("line", WIN_LINES)
@pytest.mark.parametrize("symbol", ["X", "O"])
def test_completed_line_wins(line, symbol):
    board = [None] * 9
    for i in line:
        board[i] = symbol

    outcome = evaluate(board)

    assert outcome.winner == symbol
    assert outcome.line == line
    assert not outcome.is_draw
    assert outcome.is_terminal


def test_first_line_in_canonical_order_is_reported():
    # row 0 and column 0 both complete; rows come first
    board = [X, X, X,
             X, O, O,
             X, O, O]
    assert evaluate(board).line == (0, 1, 2)


def test_full_board_without_line_is_draw():
    board = [X, O, X,
             X, O, O,
             O, X, X]
    outcome = evaluate(board)
    assert outcome.is_draw
    assert outcome.winner is None
    assert outcome.line == ()
    assert outcome.result == "Tie"


def test_full_board_with_line_is_a_win_not_a_draw():
    board = [X, X, X,
             O, O, X,
             X, O, O]
    outcome = evaluate(board)
    assert outcome.winner == "X"
    assert not outcome.is_draw


def test_open_board_has_no_result():
    assert evaluate(EMPTY_BOARD) == NO_RESULT
    assert evaluate([X, O, _, _, X, _, _, _, O]) == NO_RESULT
    assert not NO_RESULT.is_terminal
    assert NO_RESULT.result is None


def test_evaluate_does_not_mutate_board():
    board = [X, X, _, O, O, _, _, _, _]
    before = list(board)
    evaluate(board)
    assert board == before


def test_evaluate_matches_brute_force_on_every_board():
    for board in itertools.product((None, "X", "O"), repeat=9):
        lines = [ln for ln in WIN_LINES
                 if board[ln[0]] is not None and board[ln[0]] == board[ln[1]] == board[ln[2]]]
        outcome = evaluate(board)

        assert not (outcome.winner is not None and outcome.is_draw)
        if lines:
            assert outcome.winner == board[lines[0][0]]
            assert outcome.line == lines[0]
        elif None not in board:
            assert outcome.is_draw
        else:
            assert outcome == NO_RESULT


def test_empty_cells_and_is_full():
    board = [X, _, O, _, _, X, O, _, X]
    assert empty_cells(board) == [1, 3, 4, 7]
    assert not is_full(board)
    assert empty_cells(EMPTY_BOARD) == list(range(9))
    assert is_full([X, O, X, X, O, O, O, X, X])
