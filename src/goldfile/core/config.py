"""Configuration classes for goldfile."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from rich.console import Console

UPDATE_ENV_VAR = "UPDATE_GOLDEN"
DEFAULT_WINDOW_SIZE = 1024


@dataclass
class GoldenConfig:
    """Configuration for a golden-file session.

    Attributes:
        update: Promote staged output to the golden root instead of verifying.
        window_size: Number of bytes read from each side per comparison window.
        color: Force ANSI colors on (True) or off (False). None lets rich
            detect whether the output is a terminal.
    """

    update: bool = False
    window_size: int = DEFAULT_WINDOW_SIZE
    color: bool | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.window_size <= 0:
            raise ValueError("window_size must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> GoldenConfig:
        """Create configuration from environment variables.

        Only ``UPDATE_GOLDEN`` is recognized: the value ``"1"`` selects update
        mode, anything else (or absence) selects verify mode.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            **overrides: Field values that take precedence over the environment.

        Returns:
            GoldenConfig instance.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {"update": env.get(UPDATE_ENV_VAR) == "1"}
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GoldenConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            GoldenConfig instance.
        """
        return cls(
            update=bool(data.get("update", False)),
            window_size=int(data.get("window_size", DEFAULT_WINDOW_SIZE)),
            color=data.get("color"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "update": self.update,
            "window_size": self.window_size,
            "color": self.color,
        }

    @property
    def mode(self) -> str:
        """Name of the finalize mode this configuration selects."""
        return "update" if self.update else "verify"

    def make_console(self) -> Console:
        """Build the console diff output is written to."""
        if self.color is None:
            return Console(highlight=False)
        if self.color:
            return Console(force_terminal=True, highlight=False)
        return Console(no_color=True, highlight=False)
