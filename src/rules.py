# src/rules.py
"""
Outcome evaluation for the 3x3 board.

Boards are 9-cell sequences indexed row-major (index = row*3 + col).
Nothing here checks that a board is reachable; that is the engine's job.
"""
from __future__ import annotations
from typing import List, Sequence
from models import Cell, Outcome, NO_RESULT

# rows, then columns, then diagonals; the first match is reported
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def evaluate(board: Sequence[Cell]) -> Outcome:
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return Outcome(winner=board[a], line=(a, b, c))
    if is_full(board):
        return Outcome(is_draw=True)
    return NO_RESULT


def empty_cells(board: Sequence[Cell]) -> List[int]:
    return [i for i, v in enumerate(board) if v is None]


def is_full(board: Sequence[Cell]) -> bool:
    return all(v is not None for v in board)
