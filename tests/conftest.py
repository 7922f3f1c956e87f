"""Pytest configuration and fixtures for taprun tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from taprun.config import GlobalConfig


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at a temp directory."""
    home = tmp_path / "taprun-home"
    monkeypatch.setenv("TAPRUN_CONFIG_HOME", str(home))
    return home


@pytest.fixture
def config(config_home: Path) -> GlobalConfig:
    return GlobalConfig.load()


@pytest.fixture
def make_tap(tmp_path: Path):
    """Create a tap repo; ``tasks_source`` becomes ``<tasks_dir>/__init__.py``."""

    def _make(name: str, tasks_source: str | None = None, tasks_dir: str = "tasks") -> Path:
        root = tmp_path / "taps" / name
        root.mkdir(parents=True, exist_ok=True)
        if tasks_source is not None:
            folder = root / tasks_dir
            folder.mkdir(parents=True, exist_ok=True)
            (folder / "__init__.py").write_text(tasks_source, encoding="utf-8")
        return root

    return _make


@pytest.fixture(autouse=True)
def _drop_tap_modules():
    """Forget tap task modules imported during a test."""
    yield
    for name in [n for n in sys.modules if n.startswith("taprun_tap_")]:
        sys.modules.pop(name, None)
