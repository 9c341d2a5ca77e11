# src/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, timezone

Cell = Optional[str]  # None, 'X' or 'O'
Board = Tuple[Cell, ...]

SYMBOLS = ("X", "O")
TIE = "Tie"
BOARD_CELLS = 9
EMPTY_BOARD: Board = (None,) * BOARD_CELLS


def other_symbol(symbol: str) -> str:
    return "O" if symbol == "X" else "X"


def utc_timestamp() -> str:
    # 2025-01-31T18:04:05.123Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Outcome:
    winner: Optional[str] = None
    line: Tuple[int, ...] = ()
    is_draw: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None or self.is_draw

    @property
    def result(self) -> Optional[str]:
        """'X', 'O', 'Tie' or None while the game is still running."""
        if self.winner is not None:
            return self.winner
        return TIE if self.is_draw else None


NO_RESULT = Outcome()


@dataclass
class GameState:
    history: List[Board] = field(default_factory=lambda: [EMPTY_BOARD])
    step: int = 0                 # ply pointer into history
    active: str = "X"
    per_move_seconds: float = 30.0
    remaining_seconds: float = 30.0
    outcome: Outcome = NO_RESULT

    @property
    def board(self) -> Board:
        return self.history[self.step]


@dataclass
class ResultEntry:
    result: str                   # 'X', 'O' or 'Tie'
    date: str = field(default_factory=utc_timestamp)

    @property
    def label(self) -> str:
        return TIE if self.result == TIE else f"Winner: {self.result}"

    def to_dict(self) -> Dict[str, str]:
        return {"date": self.date, "result": self.result}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultEntry":
        result = data["result"]
        if result not in SYMBOLS and result != TIE:
            raise ValueError(f"unknown result {result!r}")
        return cls(result=result, date=str(data["date"]))


@dataclass
class Scoreboard:
    wins: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in SYMBOLS})
    ties: int = 0

    def record(self, result: str) -> None:
        if result == TIE:
            self.ties += 1
        else:
            self.wins[result] = self.wins.get(result, 0) + 1

    def reset(self) -> None:
        self.wins = {s: 0 for s in SYMBOLS}
        self.ties = 0

    @property
    def total(self) -> int:
        return sum(self.wins.values()) + self.ties

    def percentages(self) -> Dict[str, int]:
        """Share of games per result in whole percent, half rounds up."""
        total = self.total
        counts = dict(self.wins)
        counts[TIE] = self.ties
        if not total:
            return {k: 0 for k in counts}
        return {k: int(v * 100 / total + 0.5) for k, v in counts.items()}

    @classmethod
    def from_entries(cls, entries: List[ResultEntry]) -> "Scoreboard":
        board = cls()
        for e in entries:
            board.record(e.result)
        return board
