"""Exceptions raised by goldfile."""

from __future__ import annotations

from pathlib import Path

from .config import UPDATE_ENV_VAR


class GoldenError(Exception):
    """Base class for all goldfile errors."""


class StagingError(GoldenError):
    """The staging directory or a staged file could not be created or removed."""


class GoldenIOError(GoldenError):
    """Opening, reading or copying a golden or staged file failed.

    Attributes:
        path: Relative path of the registered artifact that failed.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)


class VerificationMismatch(GoldenError, AssertionError):
    """Staged output differs from its golden reference.

    Derives from AssertionError so test runners report it as a failed
    assertion rather than an error.

    Attributes:
        path: Relative path of the mismatching artifact.
        differences: Number of differing regions in the first bad window.
    """

    def __init__(self, path: str | Path, differences: int) -> None:
        self.path = Path(path)
        self.differences = differences
        super().__init__(
            f"Found at least {differences} difference(s) in {self.path}! "
            f"Set {UPDATE_ENV_VAR}=1 to update golden files."
        )
