"""Pytest fixtures and configuration for goldfile tests."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from goldfile.core.config import UPDATE_ENV_VAR, GoldenConfig

pytest_plugins = ["pytester", "goldfile.pytest_plugin"]


class CapturedConsole:
    """A rich console writing into a string buffer."""

    def __init__(self, color: bool = False) -> None:
        self.buffer = StringIO()
        if color:
            self.console = Console(
                file=self.buffer, force_terminal=True, color_system="standard", width=120
            )
        else:
            self.console = Console(
                file=self.buffer, force_terminal=False, color_system=None, width=120
            )

    @property
    def text(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture(autouse=True)
def _clear_update_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's UPDATE_GOLDEN from leaking into the tests."""
    monkeypatch.delenv(UPDATE_ENV_VAR, raising=False)


@pytest.fixture
def captured() -> CapturedConsole:
    """Plain-text console capture."""
    return CapturedConsole()


@pytest.fixture
def captured_color() -> CapturedConsole:
    """ANSI-colored console capture."""
    return CapturedConsole(color=True)


@pytest.fixture
def golden_root(tmp_path: Path) -> Path:
    """Empty golden directory."""
    root = tmp_path / "golden"
    root.mkdir()
    return root


@pytest.fixture
def verify_config() -> GoldenConfig:
    """Configuration selecting verify mode."""
    return GoldenConfig(update=False)


@pytest.fixture
def update_config() -> GoldenConfig:
    """Configuration selecting update mode."""
    return GoldenConfig(update=True)
