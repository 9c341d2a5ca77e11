# src/theme_manager.py
"""
Theme Manager - one theme table shared by the menu and the game screen.
Custom themes can be added through data/themes_config.json.
"""
from __future__ import annotations
import os
import json
from typing import Dict, Tuple, Optional, List
from dataclasses import dataclass, asdict

THEMES_CONFIG_PATH = "data/themes_config.json"

RGB = Tuple[int, int, int]


@dataclass
class ThemeConfig:
    name: str
    background_color: RGB
    text_color: RGB = (33, 37, 41)
    highlight_color: RGB = (212, 237, 218)
    border_color: RGB = (108, 117, 125)
    winner_border_color: RGB = (40, 167, 69)
    piece_x_color: RGB = (33, 37, 41)
    piece_o_color: RGB = (0, 123, 255)
    selectable: bool = True


DEFAULT_THEMES = {
    "light": ThemeConfig(
        name="Light",
        background_color=(248, 249, 250),
        text_color=(33, 37, 41),
        highlight_color=(212, 237, 218),
        border_color=(108, 117, 125),
        winner_border_color=(40, 167, 69),
        piece_x_color=(33, 37, 41),
        piece_o_color=(0, 123, 255),
    ),
    "dark": ThemeConfig(
        name="Dark",
        background_color=(33, 37, 41),
        text_color=(248, 249, 250),
        highlight_color=(21, 87, 36),
        border_color=(173, 181, 189),
        winner_border_color=(40, 167, 69),
        piece_x_color=(248, 249, 250),
        piece_o_color=(255, 193, 7),
    ),
}

_COLOR_FIELDS = ("background_color", "text_color", "highlight_color", "border_color",
                 "winner_border_color", "piece_x_color", "piece_o_color")


class ThemeManager:
    def __init__(self, config_path: str = THEMES_CONFIG_PATH):
        self.config_path = config_path
        self.themes: Dict[str, ThemeConfig] = {
            key: ThemeConfig(**asdict(theme)) for key, theme in DEFAULT_THEMES.items()
        }
        self._load_custom_themes()
        self.current_theme_name = "light"
        print(f"[ThemeManager] Initialized with {len(self.themes)} themes")

    def _load_custom_themes(self):
        """Load custom theme configurations from JSON"""
        if not os.path.exists(self.config_path):
            return
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            for theme_id, theme_data in data.items():
                existing = self.themes.get(theme_id) or DEFAULT_THEMES["light"]
                fields = asdict(existing)
                fields["name"] = theme_data.get("name", existing.name if theme_id in self.themes else theme_id)
                for key in _COLOR_FIELDS:
                    if key in theme_data:
                        fields[key] = tuple(theme_data[key])
                fields["selectable"] = bool(theme_data.get("selectable", existing.selectable))
                self.themes[theme_id] = ThemeConfig(**fields)
            print(f"[ThemeManager] Loaded {len(data)} custom themes")
        except (OSError, ValueError, AttributeError, TypeError) as e:
            print(f"[ThemeManager] Error loading custom themes: {e}")

    def save_custom_theme(self, theme_id: str, theme: ThemeConfig):
        """Save a custom theme to config"""
        self.themes[theme_id] = theme

        custom_themes = {}
        for tid, t in self.themes.items():
            if tid in DEFAULT_THEMES and t == DEFAULT_THEMES[tid]:
                continue
            entry = {key: list(getattr(t, key)) for key in _COLOR_FIELDS}
            entry["name"] = t.name
            entry["selectable"] = t.selectable
            custom_themes[tid] = entry

        os.makedirs(os.path.dirname(self.config_path) or ".", exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(custom_themes, f, indent=2)

    def get_theme(self, theme_id: str) -> Optional[ThemeConfig]:
        """Get theme by ID"""
        return self.themes.get(theme_id)

    def get_all_themes(self) -> Dict[str, ThemeConfig]:
        """Get all available themes"""
        return self.themes.copy()

    def selectable_ids(self) -> List[str]:
        return [tid for tid, t in self.themes.items() if t.selectable]

    def set_current_theme(self, theme_id: str) -> bool:
        """Set current active theme"""
        if theme_id in self.themes:
            self.current_theme_name = theme_id
            return True
        print(f"[ThemeManager] Warning: Theme '{theme_id}' not found!")
        return False

    def get_current_theme(self) -> ThemeConfig:
        """Get currently active theme"""
        return self.themes.get(self.current_theme_name, DEFAULT_THEMES["light"])

    def next_theme_id(self) -> str:
        ids = self.selectable_ids()
        if not ids:
            return self.current_theme_name
        if self.current_theme_name not in ids:
            return ids[0]
        return ids[(ids.index(self.current_theme_name) + 1) % len(ids)]

    def toggle_theme(self) -> str:
        """Switch to the next selectable theme (light <-> dark by default)"""
        theme_id = self.next_theme_id()
        self.set_current_theme(theme_id)
        return theme_id


# Singleton instance
_theme_manager = None


def get_theme_manager() -> ThemeManager:
    global _theme_manager
    if _theme_manager is None:
        _theme_manager = ThemeManager()
    return _theme_manager
