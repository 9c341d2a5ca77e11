import os

import pytest

import storage


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point every storage path at a throwaway data/ directory."""
    root = tmp_path / "data"
    monkeypatch.setattr(storage, "DATA_DIR", os.fspath(root))
    monkeypatch.setattr(storage, "RULES_PATH", os.fspath(root / "rules.json"))
    monkeypatch.setattr(storage, "PREFERENCES_PATH", os.fspath(root / "preferences.json"))
    monkeypatch.setattr(storage, "RESULT_LOG_PATH", os.fspath(root / "history.json"))
    return root


class FirstEmptyCPU:
    """Stand-in CPU that plays the lowest free cell without searching."""

    def __init__(self):
        self.calls = 0

    def choose_move(self, board):
        self.calls += 1
        for i, v in enumerate(board):
            if v is None:
                return i
        return None


@pytest.fixture
def first_empty_cpu():
    return FirstEmptyCPU()
