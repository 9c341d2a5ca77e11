# src/ai.py
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from models import Cell, SYMBOLS, other_symbol
from rules import evaluate

SCORE_WIN = 10
SCORE_LOSS = -10
SCORE_DRAW = 0


class CPU:
    """
    Perfect-play CPU: plain minimax over the whole 3x3 tree.
      - no pruning, no cache; the board is small enough
      - terminal scores are not depth-adjusted, so a quick win and a slow
        win look the same
      - ties between equal moves go to the lowest cell index
    """
    def __init__(self, piece: str = "O"):
        assert piece in SYMBOLS
        self.cpu_piece = piece
        self.opp_piece = other_symbol(piece)
        self.last_score: Optional[int] = None

    # ---- public ------------------------------------------------------------
    def choose_move(self, board: Sequence[Cell]) -> Optional[int]:
        assert any(v is None for v in board), "search started on a full board"
        score, move = best_move(board, self.cpu_piece, self.opp_piece)
        self.last_score = score
        return move


def best_move(board: Sequence[Cell], maximizing: str, minimizing: str) -> Tuple[int, Optional[int]]:
    """(score, move) for `maximizing` to play on a snapshot; the snapshot is not touched."""
    return minimax(list(board), True, maximizing, minimizing)


# ---- search ----------------------------------------------------------------

def minimax(squares: List[Cell], is_maximizing: bool, ai_piece: str, opp_piece: str) -> Tuple[int, Optional[int]]:
    # squares is mutated in place and restored before returning
    winner = evaluate(squares).winner
    if winner == ai_piece:
        return SCORE_WIN, None
    if winner == opp_piece:
        return SCORE_LOSS, None
    if None not in squares:
        return SCORE_DRAW, None

    best_move_idx: Optional[int] = None
    if is_maximizing:
        best_score = float("-inf")
        for i in range(len(squares)):
            if squares[i] is not None:
                continue
            squares[i] = ai_piece
            score, _ = minimax(squares, False, ai_piece, opp_piece)
            squares[i] = None
            if score > best_score:
                best_score, best_move_idx = score, i
    else:
        best_score = float("inf")
        for i in range(len(squares)):
            if squares[i] is not None:
                continue
            squares[i] = opp_piece
            score, _ = minimax(squares, True, ai_piece, opp_piece)
            squares[i] = None
            if score < best_score:
                best_score, best_move_idx = score, i
    return int(best_score), best_move_idx
