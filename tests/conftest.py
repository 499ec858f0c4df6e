from __future__ import annotations

from pathlib import Path

import pytest

from dottrack.config import Settings


@pytest.fixture
def fake_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("DOT_MANIFEST", raising=False)
    monkeypatch.delenv("DOT_STORE", raising=False)
    return home


@pytest.fixture
def store(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def settings(store: Path) -> Settings:
    return Settings(base_dir=store, manifest_path=store / ".dot.toml")
