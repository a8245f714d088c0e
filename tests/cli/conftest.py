"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~ at a scratch directory so ~/.windex is never the user's own."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in ("WINDEX__INDEX__ROOT", "WINDEX__INDEX__DB_PATH", "WINDEX__LOGGING__LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return home
