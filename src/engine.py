# src/engine.py
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional
from models import GameState, Board, Outcome, BOARD_CELLS, SYMBOLS, other_symbol
from rules import evaluate
from ai import CPU


class Rejection(str, Enum):
    GAME_OVER = "game_over"
    OUT_OF_RANGE = "out_of_range"
    OCCUPIED = "occupied"
    WRONG_TURN = "wrong_turn"


@dataclass
class ScheduledTask:
    """Countdown bound to the ply it was armed for; fires at most once."""
    ply: int
    remaining: float
    armed: bool = True

    def advance(self, dt: float) -> bool:
        if not self.armed:
            return False
        self.remaining -= dt
        if self.remaining <= 0:
            self.remaining = 0.0
            self.armed = False
            return True
        return False

    def cancel(self) -> None:
        self.armed = False


class Engine:
    def __init__(self, human_symbol: str = "X", vs_ai: bool = True,
                 per_move_seconds: float = 30.0, ai_delay_seconds: float = 1.0,
                 cpu: Optional[CPU] = None):
        assert human_symbol in SYMBOLS
        self.human_symbol = human_symbol
        self.vs_ai = vs_ai
        # the AI takes whichever symbol the human left
        self.ai_symbol: Optional[str] = other_symbol(human_symbol) if vs_ai else None
        self.cpu = cpu if cpu is not None else (CPU(self.ai_symbol) if vs_ai else None)
        self.per_move_seconds = float(per_move_seconds)
        self.ai_delay_seconds = float(ai_delay_seconds)
        self._listeners: List[Callable[[Outcome], None]] = []
        self._turn_timer: Optional[ScheduledTask] = None
        self._ai_task: Optional[ScheduledTask] = None
        self.state = self._new_state()
        self._arm_for_ply()

    # ---- lifecycle ----
    def _new_state(self) -> GameState:
        return GameState(
            per_move_seconds=self.per_move_seconds,
            remaining_seconds=self.per_move_seconds,
        )

    def reset(self) -> None:
        self.state = self._new_state()
        self._arm_for_ply()

    def add_listener(self, callback: Callable[[Outcome], None]) -> None:
        self._listeners.append(callback)

    # ---- helpers ----
    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def ply(self) -> int:
        return self.state.step

    @property
    def active_symbol(self) -> str:
        return self.state.active

    @property
    def outcome(self) -> Outcome:
        return self.state.outcome

    @property
    def is_over(self) -> bool:
        return self.state.outcome.is_terminal

    def is_ai_turn(self) -> bool:
        return self.vs_ai and not self.is_over and self.state.active == self.ai_symbol

    def seconds_left(self) -> int:
        return int(math.ceil(self.state.remaining_seconds))

    # ---- scheduling ----
    def _arm_for_ply(self) -> None:
        # replacing the tasks cancels whatever was pending for the previous ply
        self._cancel_tasks()
        ply = self.state.step
        self.state.remaining_seconds = self.per_move_seconds
        self._turn_timer = ScheduledTask(ply, self.per_move_seconds)
        if self.is_ai_turn():
            self._ai_task = ScheduledTask(ply, self.ai_delay_seconds)

    def _cancel_tasks(self) -> None:
        for task in (self._turn_timer, self._ai_task):
            if task is not None:
                task.cancel()
        self._turn_timer = None
        self._ai_task = None

    def tick(self, dt: float) -> None:
        if self.is_over:
            return
        timer, ai_task = self._turn_timer, self._ai_task
        if ai_task is not None and ai_task.advance(dt):
            self.ai_turn(ai_task.ply)
        # an AI move above re-arms; the old timer must not fire on the new ply
        if timer is not None and timer is self._turn_timer and timer.advance(dt):
            self.on_timeout(timer.ply)
        if self._turn_timer is not None and self._turn_timer is timer:
            self.state.remaining_seconds = self._turn_timer.remaining

    # ---- moves ----
    def check_move(self, index: int) -> Optional[Rejection]:
        if self.is_over:
            return Rejection.GAME_OVER
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_CELLS:
            return Rejection.OUT_OF_RANGE
        if self.board[index] is not None:
            return Rejection.OCCUPIED
        if self.is_ai_turn():
            return Rejection.WRONG_TURN
        return None

    def apply_move(self, index: int) -> bool:
        if self.check_move(index) is not None:
            return False
        self._place(index)
        return True

    def _place(self, index: int) -> None:
        st = self.state
        squares = list(st.board)
        squares[index] = st.active
        st.history.append(tuple(squares))
        st.step += 1

        outcome = evaluate(st.history[st.step])
        if outcome.is_terminal:
            st.outcome = outcome
            self._cancel_tasks()
            for callback in list(self._listeners):
                callback(outcome)
            return

        st.active = other_symbol(st.active)
        self._arm_for_ply()

    def on_timeout(self, ply: Optional[int] = None) -> bool:
        """Skip the active side's turn: no mark, the ply advances, turn swaps."""
        st = self.state
        if self.is_over:
            return False
        if ply is not None and ply != st.step:
            return False
        if evaluate(st.board).is_terminal:
            return False
        st.history.append(st.board)
        st.step += 1
        st.active = other_symbol(st.active)
        self._arm_for_ply()
        return True

    def ai_turn(self, ply: Optional[int] = None) -> bool:
        if not self.vs_ai or self.cpu is None or self.is_over:
            return False
        st = self.state
        if ply is not None and ply != st.step:
            return False
        if st.active != self.ai_symbol:
            return False
        if evaluate(st.board).is_terminal:
            return False

        move = self.cpu.choose_move(st.board)
        if move is None or st.board[move] is not None:
            return False
        self._place(move)
        return True
