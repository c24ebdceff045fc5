"""goldfile - Golden-file testing for text and binary output.

goldfile captures the output a test produces, then either checks it
byte-for-byte against recorded golden files (printing a colorized diff on
mismatch) or, with ``UPDATE_GOLDEN=1``, records it as the new golden files.

Example:
    >>> import goldfile
    >>> with goldfile.GoldenSession("tests/golden") as session:
    ...     with session.file("output.txt.gz") as f:
    ...         f.write(b"hello\n")

With pytest, enable the plugin in ``conftest.py`` and use the ``golden``
fixture:
    >>> pytest_plugins = ["goldfile.pytest_plugin"]
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _resolve_version() -> str:
    """Resolve the installed package version."""
    try:
        return _pkg_version("goldfile")
    except PackageNotFoundError:
        # Source checkout without an installed distribution.
        return "0.0.0"


__version__ = _resolve_version()

from .core.config import GoldenConfig, UPDATE_ENV_VAR
from .core.diff import DiffReporter
from .core.errors import GoldenError, GoldenIOError, StagingError, VerificationMismatch
from .core.session import GoldenSession, SessionState
from .core.stage import ArtifactStage

from . import core

__all__ = [
    "__version__",
    "ArtifactStage",
    "DiffReporter",
    "GoldenConfig",
    "GoldenError",
    "GoldenIOError",
    "GoldenSession",
    "SessionState",
    "StagingError",
    "UPDATE_ENV_VAR",
    "VerificationMismatch",
    "core",
]
