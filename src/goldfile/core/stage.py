"""Isolated staging area for candidate output files."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from types import TracebackType
from typing import IO, Any, BinaryIO

from .errors import StagingError
from .streams import open_writer

logger = logging.getLogger(__name__)

STAGE_PREFIX = "goldfile-"


def normalize_relative_path(relative_path: str | Path) -> Path:
    """Validate a caller-chosen artifact path.

    Args:
        relative_path: Path relative to the golden root.

    Returns:
        The path as a Path object.

    Raises:
        ValueError: If the path is empty, absolute, or climbs out of its root.
    """
    path = Path(relative_path)
    if path.is_absolute() or path.anchor:
        raise ValueError(f"Artifact path must be relative: {relative_path}")
    if not path.parts or path == Path("."):
        raise ValueError("Artifact path must not be empty")
    if ".." in path.parts:
        raise ValueError(f"Artifact path must stay inside its root: {relative_path}")
    return path


class ArtifactStage:
    """A temporary directory holding candidate output files.

    Every path handed to ``open_writer`` is recorded, in first-request order,
    so the owning session knows what to verify or promote.

    Example:
        >>> with ArtifactStage.create() as stage:
        ...     with stage.open_writer("out/result.txt") as f:
        ...         f.write(b"hello\\n")
        ...     stage.paths
        (PosixPath('out/result.txt'),)
    """

    def __init__(self) -> None:
        try:
            self._tmp = tempfile.TemporaryDirectory(prefix=STAGE_PREFIX)
        except OSError as e:
            raise StagingError(f"Could not create staging directory: {e}") from e
        self.root = Path(self._tmp.name)
        self._paths: list[Path] = []
        self._writers: dict[Path, list[IO[Any]]] = {}
        self._destroyed = False
        logger.debug(f"Created staging directory {self.root}")

    @classmethod
    def create(cls) -> ArtifactStage:
        """Allocate a new, uniquely named staging directory."""
        return cls()

    def __enter__(self) -> ArtifactStage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.destroy()

    @property
    def paths(self) -> tuple[Path, ...]:
        """Registered relative paths in request order."""
        return tuple(self._paths)

    @property
    def destroyed(self) -> bool:
        """Whether the staging directory has been removed."""
        return self._destroyed

    def staged_path(self, relative_path: str | Path) -> Path:
        """Location of a relative path inside the stage."""
        return self.root / normalize_relative_path(relative_path)

    def open_writer(self, relative_path: str | Path) -> BinaryIO:
        """Register a path and open a writer for it.

        Parent directories are created as needed. Requesting the same path
        again truncates the staged file but keeps a single registration.

        Args:
            relative_path: Artifact path relative to the golden root.

        Returns:
            Binary writer, gzip-compressing when the path ends in ``.gz``.

        Raises:
            StagingError: If the staged file cannot be created.
            RuntimeError: If the stage was already destroyed.
        """
        if self._destroyed:
            raise RuntimeError("Staging directory was already destroyed")
        path = normalize_relative_path(relative_path)
        target = self.root / path
        try:
            # Earlier writers for this path must not flush over the new content.
            self._close_path_writers(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            writer = open_writer(target)
        except OSError as e:
            raise StagingError(f"Could not create staged file {path}: {e}") from e

        if path not in self._paths:
            self._paths.append(path)
        self._writers[path] = [writer]
        logger.debug(f"Opened staged writer for {path}")
        return writer

    def adopt_writer(self, relative_path: str | Path, writer: IO[Any]) -> None:
        """Track a wrapper around the writer opened for ``relative_path``.

        Adopted writers are closed before the writers they wrap.
        """
        self._writers.setdefault(normalize_relative_path(relative_path), []).append(writer)

    def close_writers(self) -> None:
        """Flush and close writers the caller left open."""
        for path in list(self._writers):
            self._close_path_writers(path)

    def _close_path_writers(self, path: Path) -> None:
        for writer in reversed(self._writers.pop(path, [])):
            if not writer.closed:
                logger.debug(f"Closing writer left open for {path}")
                writer.close()

    def destroy(self) -> None:
        """Remove the staging directory and everything in it.

        Raises:
            StagingError: If the directory cannot be removed.
        """
        if self._destroyed:
            return
        self._destroyed = True
        try:
            self.close_writers()
            self._tmp.cleanup()
        except OSError as e:
            raise StagingError(f"Could not remove staging directory {self.root}: {e}") from e
        logger.debug(f"Removed staging directory {self.root}")
