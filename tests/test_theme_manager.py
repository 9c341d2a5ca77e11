import json

import pytest

from theme_manager import DEFAULT_THEMES, ThemeConfig, ThemeManager


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "data" / "themes_config.json")


def test_starts_on_light_with_builtin_themes(config_path):
    tm = ThemeManager(config_path)

    assert tm.current_theme_name == "light"
    assert tm.get_current_theme() == DEFAULT_THEMES["light"]
    assert set(tm.get_all_themes()) == {"light", "dark"}


def test_toggle_switches_between_light_and_dark(config_path):
    tm = ThemeManager(config_path)

    assert tm.next_theme_id() == "dark"
    assert tm.toggle_theme() == "dark"
    assert tm.get_current_theme().name == "Dark"
    assert tm.toggle_theme() == "light"


def test_unknown_theme_is_rejected(config_path, capsys):
    tm = ThemeManager(config_path)

    assert not tm.set_current_theme("neon")
    assert tm.current_theme_name == "light"
    assert "not found" in capsys.readouterr().out


def test_builtin_tables_are_not_shared(config_path):
    tm = ThemeManager(config_path)
    tm.themes["light"].name = "Changed"

    assert DEFAULT_THEMES["light"].name == "Light"


def test_custom_theme_is_saved_and_joins_the_cycle(config_path):
    tm = ThemeManager(config_path)
    tm.save_custom_theme("ocean", ThemeConfig(name="Ocean", background_color=(230, 240, 250)))

    reloaded = ThemeManager(config_path)

    assert reloaded.get_theme("ocean").background_color == (230, 240, 250)
    assert reloaded.selectable_ids() == ["light", "dark", "ocean"]
    reloaded.set_current_theme("ocean")
    assert reloaded.toggle_theme() == "light"

    saved = json.loads(open(config_path, encoding="utf-8").read())
    assert list(saved) == ["ocean"]


def test_custom_file_can_override_a_builtin(config_path, tmp_path):
    (tmp_path / "data").mkdir()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump({"dark": {"text_color": [200, 200, 200]}}, f)

    tm = ThemeManager(config_path)

    assert tm.get_theme("dark").text_color == (200, 200, 200)
    assert tm.get_theme("dark").name == "Dark"
    assert tm.get_theme("dark").background_color == DEFAULT_THEMES["dark"].background_color


def test_unselectable_theme_is_skipped_by_toggle(config_path, tmp_path):
    (tmp_path / "data").mkdir()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump({"hidden": {"name": "Hidden", "selectable": False}}, f)

    tm = ThemeManager(config_path)

    assert "hidden" in tm.get_all_themes()
    assert tm.selectable_ids() == ["light", "dark"]


def test_malformed_custom_file_is_reported_and_ignored(config_path, tmp_path, capsys):
    (tmp_path / "data").mkdir()
    with open(config_path, "w", encoding="utf-8") as f:
        f.write("{broken")

    tm = ThemeManager(config_path)

    assert set(tm.get_all_themes()) == {"light", "dark"}
    assert "Error loading custom themes" in capsys.readouterr().out
