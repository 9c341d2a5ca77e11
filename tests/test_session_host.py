import os

import pytest

from session_host import SessionHost
from storage import ResultLog

X_WINS = [0, 3, 1, 4, 2]
DRAW_MOVES = [0, 1, 2, 4, 3, 5, 7, 6, 8]


@pytest.fixture
def host(tmp_path):
    return SessionHost(ResultLog(os.fspath(tmp_path / "history.json")))


def play(host, moves):
    for index in moves:
        assert host.apply_move(index)


def test_win_updates_scores_and_log(host):
    host.new_session("X", vs_ai=False)
    play(host, X_WINS)

    assert host.scoreboard.wins == {"X": 1, "O": 0}
    assert host.scoreboard.ties == 0
    assert [e.result for e in host.history()] == ["X"]


def test_draw_is_logged_as_tie(host):
    host.new_session("X", vs_ai=False)
    play(host, DRAW_MOVES)

    assert host.scoreboard.ties == 1
    assert [e.result for e in host.history()] == ["Tie"]


def test_reset_keeps_scores_and_history(host):
    host.new_session("X", vs_ai=False)
    play(host, X_WINS)
    host.reset()

    assert not host.engine.is_over
    assert host.scoreboard.total == 1
    assert len(host.history()) == 1


def test_scores_carry_over_to_a_new_session(host):
    host.new_session("X", vs_ai=False)
    play(host, X_WINS)
    host.new_session("O", vs_ai=False)
    play(host, DRAW_MOVES)

    assert host.scoreboard.wins["X"] == 1
    assert host.scoreboard.ties == 1
    assert [e.result for e in host.history()] == ["X", "Tie"]


def test_reset_all_clears_scores_log_and_board(host):
    host.new_session("X", vs_ai=False)
    play(host, X_WINS)
    host.reset_all()

    assert host.scoreboard.total == 0
    assert host.history() == []
    assert not os.path.exists(host.result_log.path)
    assert host.engine.ply == 0


def test_ai_takes_the_symbol_the_human_left(host):
    engine = host.new_session("O", vs_ai=True)
    assert engine.ai_symbol == "X"
    assert engine.is_ai_turn()


def test_session_settings_come_from_the_host(tmp_path):
    host = SessionHost(ResultLog(os.fspath(tmp_path / "h.json")),
                       per_move_seconds=12, ai_delay_seconds=0.25)
    engine = host.new_session("X", vs_ai=True)
    assert engine.per_move_seconds == 12
    assert engine.ai_delay_seconds == 0.25


def test_tick_drives_the_current_session(host):
    host.new_session("X", vs_ai=False)
    host.tick(host.per_move_seconds)
    assert host.engine.ply == 1
    assert host.engine.active_symbol == "O"


def test_moves_need_a_session(host):
    with pytest.raises(RuntimeError):
        host.apply_move(0)
    host.tick(1.0)  # nothing to drive yet
