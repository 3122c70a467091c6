"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest

from combined_mcp_server.config import ValidatedSettings


# ---------------------------------------------------------------------------
# Environment fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove every configuration variable and run from an empty directory.

    Keeps a developer's shell or a stray ``.env`` from leaking into tests.
    """
    for name in ValidatedSettings.env_names():
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_env_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write ``KEY=VALUE`` text to a ``.env`` file under tmp_path."""

    def _write(text: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by `configure_logging`."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
