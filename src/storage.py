# src/storage.py
from __future__ import annotations
import os, json
from typing import Any, Dict, List, Optional
from models import ResultEntry

DATA_DIR = os.path.join("data")
RULES_PATH = os.path.join(DATA_DIR, "rules.json")
PREFERENCES_PATH = os.path.join(DATA_DIR, "preferences.json")
RESULT_LOG_PATH = os.path.join(DATA_DIR, "history.json")

DEFAULT_RULES = {
    "per_move_seconds": 30,
    "ai_delay_seconds": 1.0,
}

DEFAULT_PREFERENCES = {
    "theme": "light",
    "player_symbol": "X",
    "vs_ai": True,
}


def _safe_read_json(path: str, default: Any) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return default.copy()


def _safe_write_json(path: str, data: Any) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _positive_number(value: Any, fallback: float) -> float:
    if isinstance(value, bool):
        return fallback
    try:
        v = float(value)
    except (TypeError, ValueError):
        return fallback
    return v if v > 0 else fallback


def load_rules() -> Dict[str, Any]:
    if not os.path.exists(RULES_PATH):
        _safe_write_json(RULES_PATH, DEFAULT_RULES)
    rules = _safe_read_json(RULES_PATH, DEFAULT_RULES)
    if not isinstance(rules, dict):
        rules = DEFAULT_RULES.copy()
    rules["per_move_seconds"] = _positive_number(
        rules.get("per_move_seconds"), DEFAULT_RULES["per_move_seconds"])
    # a zero delay is allowed: the CPU then answers on the next frame
    delay = rules.get("ai_delay_seconds", DEFAULT_RULES["ai_delay_seconds"])
    rules["ai_delay_seconds"] = 0.0 if delay == 0 else _positive_number(
        delay, DEFAULT_RULES["ai_delay_seconds"])
    return rules


def load_preferences() -> Dict[str, Any]:
    """Load user preferences (theme, last symbol, AI toggle)"""
    if not os.path.exists(PREFERENCES_PATH):
        _safe_write_json(PREFERENCES_PATH, DEFAULT_PREFERENCES)
    prefs = _safe_read_json(PREFERENCES_PATH, DEFAULT_PREFERENCES)
    if not isinstance(prefs, dict):
        return DEFAULT_PREFERENCES.copy()
    merged = DEFAULT_PREFERENCES.copy()
    merged.update(prefs)
    return merged


def save_preferences(preferences: Dict[str, Any]) -> None:
    """Save user preferences"""
    _safe_write_json(PREFERENCES_PATH, preferences)


def remember_theme(preferences: Dict[str, Any], theme_id: str) -> None:
    # the caller's dict is the one handed back to the menu
    preferences["theme"] = theme_id
    save_preferences(preferences)


class ResultLog:
    """
    Append-only log of finished games, kept as a JSON array:
        [{"date": "2025-01-31T18:04:05.123Z", "result": "X"}, ...]
    """
    def __init__(self, path: Optional[str] = None):
        self.path = path or RESULT_LOG_PATH

    def read(self) -> List[ResultEntry]:
        raw = _safe_read_json(self.path, [])
        if not isinstance(raw, list):
            print(f"[Storage] Ignoring malformed result log: {self.path}")
            return []
        entries = []
        for item in raw:
            try:
                entries.append(ResultEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                # keep the rest of the log readable
                continue
        return entries

    def append(self, result: str) -> ResultEntry:
        entry = ResultEntry(result=result)
        entries = self.read()
        entries.append(entry)
        _safe_write_json(self.path, [e.to_dict() for e in entries])
        return entry

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
