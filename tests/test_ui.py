import os

import pygame
import pytest

import storage
import theme_manager
from menu import Menu
from session_host import SessionHost
from storage import ResultLog
from ui import UI, history_window


@pytest.fixture
def screen_env(data_dir, tmp_path, monkeypatch):
    """Headless pygame with a fresh theme table and throwaway data files."""
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(theme_manager, "_theme_manager", None)
    yield
    pygame.quit()


@pytest.fixture
def host(data_dir):
    host = SessionHost(ResultLog())
    host.new_session("X", vs_ai=False)
    return host


def test_theme_switched_in_game_survives_the_trip_back_to_menu(screen_env, host):
    preferences = storage.load_preferences()
    Menu(preferences)

    ui = UI(host, preferences)
    ui._toggle_theme()
    ui._change_symbol()

    menu = Menu(preferences)
    assert menu.theme_manager.current_theme_name == "dark"
    assert menu.settings["theme"] == "dark"
    assert storage.load_preferences()["theme"] == "dark"


def test_reset_all_clears_everything_and_returns_to_menu(screen_env, host):
    for index in (0, 3, 1, 4, 2):
        host.apply_move(index)
    ui = UI(host, storage.load_preferences())

    ui._request_reset_all()
    ui._confirm_reset_all()

    assert host.scoreboard.total == 0
    assert host.history() == []
    assert ui._leave_to == "menu"
    assert ui._leave_requested


def test_history_scroll_stops_at_the_oldest_game(screen_env, host):
    for _ in range(9):
        host.result_log.append("Tie")
    ui = UI(host, storage.load_preferences())

    ui.scroll_history(100)
    assert ui._history_scroll == 3
    ui.scroll_history(-100)
    assert ui._history_scroll == 0


def test_history_window_reaches_every_entry():
    entries = list(range(10))

    assert history_window(entries) == [4, 5, 6, 7, 8, 9]
    assert history_window(entries, scroll=2) == [2, 3, 4, 5, 6, 7]
    assert history_window(entries, scroll=50) == [0, 1, 2, 3, 4, 5]
    assert history_window(entries, scroll=-1) == [4, 5, 6, 7, 8, 9]
    assert history_window([1, 2]) == [1, 2]


def test_remember_theme_updates_the_shared_preferences(data_dir):
    preferences = storage.load_preferences()
    storage.remember_theme(preferences, "dark")

    assert preferences["theme"] == "dark"
    assert storage.load_preferences()["theme"] == "dark"
    assert os.path.exists(storage.PREFERENCES_PATH)
