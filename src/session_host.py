# src/session_host.py
from __future__ import annotations
from typing import List, Optional
from models import Outcome, ResultEntry, Scoreboard
from engine import Engine
from storage import ResultLog


class SessionHost:
    """
    Owns the pieces that outlive a single game: the score tally and the
    result log. Each game is an Engine; the host listens for its end.
    """
    def __init__(self, result_log: ResultLog, per_move_seconds: float = 30.0,
                 ai_delay_seconds: float = 1.0):
        self.result_log = result_log
        self.scoreboard = Scoreboard()
        self.per_move_seconds = per_move_seconds
        self.ai_delay_seconds = ai_delay_seconds
        self.engine: Optional[Engine] = None

    # ---- lifecycle ----
    def new_session(self, human_symbol: str, vs_ai: bool) -> Engine:
        self.engine = Engine(
            human_symbol=human_symbol,
            vs_ai=vs_ai,
            per_move_seconds=self.per_move_seconds,
            ai_delay_seconds=self.ai_delay_seconds,
        )
        self.engine.add_listener(self._on_game_over)
        return self.engine

    def reset(self) -> None:
        """Restart the current game; scores and the log stay."""
        self._require_engine().reset()

    def reset_all(self) -> None:
        """Clear scores and the saved history, then restart the game."""
        self.scoreboard.reset()
        self.result_log.clear()
        if self.engine is not None:
            self.engine.reset()
        print("[SessionHost] Scores and history cleared")

    # ---- forwarding ----
    def apply_move(self, index: int) -> bool:
        return self._require_engine().apply_move(index)

    def tick(self, dt: float) -> None:
        if self.engine is not None:
            self.engine.tick(dt)

    def history(self) -> List[ResultEntry]:
        return self.result_log.read()

    # ---- events ----
    def _on_game_over(self, outcome: Outcome) -> None:
        result = outcome.result
        if result is None:
            return
        self.scoreboard.record(result)
        self.result_log.append(result)
        print(f"[SessionHost] Result logged: {result}")

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("no session started; call new_session() first")
        return self.engine
