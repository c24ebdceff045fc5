"""Golden-file session: stage output, then verify or update on exit."""

from __future__ import annotations

import io
import logging
from enum import Enum
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, TextIO

from rich.console import Console

from .config import GoldenConfig
from .diff import DiffReporter
from .errors import GoldenIOError, StagingError
from .stage import ArtifactStage, normalize_relative_path
from .streams import StreamPair
from .verify import verify_file

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle states of a GoldenSession."""

    ACTIVE = "active"
    FINALIZING = "finalizing"
    DONE = "done"


class GoldenSession:
    """Captures output files and checks them against golden references.

    Writers requested with ``file`` write into a private staging directory.
    When the session ends normally it either verifies every registered path
    against ``golden_root`` (default) or, in update mode, copies the staged
    files over the golden ones. If the session ends because an exception is
    propagating, neither happens and only the staging directory is removed.

    Example:
        >>> with GoldenSession("tests/golden") as session:
        ...     with session.text_file("report.txt") as f:
        ...         f.write(render_report())
    """

    def __init__(
        self,
        golden_root: str | Path,
        config: GoldenConfig | None = None,
        console: Console | None = None,
    ) -> None:
        """Create a session and its staging directory.

        Args:
            golden_root: Directory holding the golden reference files.
            config: Session configuration. Read from the environment if omitted.
            console: Console the diff is printed to. Built from the
                configuration if omitted.

        Raises:
            StagingError: If the staging directory cannot be created.
        """
        self._golden_root = Path(golden_root)
        self.config = config if config is not None else GoldenConfig.from_env()
        self.console = console if console is not None else self.config.make_console()
        self._stage = ArtifactStage.create()
        self._state = SessionState.ACTIVE

    def __enter__(self) -> GoldenSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            logger.debug("Session exited with an exception; skipping finalize")
            self._release(quiet=True)
        elif self._state is SessionState.ACTIVE:
            self.finish()

    @property
    def golden_root(self) -> Path:
        """Directory holding the golden reference files."""
        return self._golden_root

    @property
    def stage(self) -> ArtifactStage:
        """Staging area owned by this session."""
        return self._stage

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def registered_paths(self) -> tuple[Path, ...]:
        """Relative paths a writer was requested for, in request order."""
        return self._stage.paths

    def file(self, relative_path: str | Path) -> BinaryIO:
        """Open a binary writer for an output artifact.

        Args:
            relative_path: Path relative to the golden root. A ``.gz`` suffix
                selects gzip compression.

        Returns:
            Binary writer into the staging directory. Close it before the
            session ends.

        Raises:
            RuntimeError: If the session is no longer active.
            StagingError: If the staged file cannot be created.
        """
        if self._state is not SessionState.ACTIVE:
            raise RuntimeError(f"Cannot open writers on a {self._state.value} session")
        return self._stage.open_writer(relative_path)

    def text_file(self, relative_path: str | Path, encoding: str = "utf-8") -> TextIO:
        """Open a text writer for an output artifact.

        Newlines are written untranslated so golden files are byte-identical
        across platforms.
        """
        writer = io.TextIOWrapper(self.file(relative_path), encoding=encoding, newline="")
        self._stage.adopt_writer(relative_path, writer)
        return writer

    def golden_path(self, relative_path: str | Path) -> Path:
        """Location of an artifact's golden reference."""
        return self._golden_root / normalize_relative_path(relative_path)

    def finish(self) -> None:
        """Verify or update every registered path, then release the stage.

        Must be called at most once; ``with`` blocks call it on normal exit.

        Raises:
            RuntimeError: If the session was already finalized or discarded.
            VerificationMismatch: If an artifact differs from its golden file.
            GoldenIOError: If a golden or staged file cannot be opened or copied.
        """
        if self._state is not SessionState.ACTIVE:
            raise RuntimeError(f"Session is already {self._state.value}")
        self._state = SessionState.FINALIZING
        try:
            self._stage.close_writers()
            if self.config.update:
                self._update()
            else:
                self._verify()
        except BaseException:
            self._release(quiet=True)
            raise
        self._release(quiet=False)

    def discard(self) -> None:
        """Release the stage without verifying or updating anything."""
        if self._state is SessionState.DONE:
            return
        self._release(quiet=False)

    def _verify(self) -> None:
        """Compare every registered path with its golden counterpart.

        Paths are checked in registration order and checking stops at the
        first mismatch, after its diff has been printed.
        """
        reporter = DiffReporter(self.console)
        for path in self.registered_paths:
            pair = self._pair(path)
            verify_file(path, pair, reporter, self.config.window_size)
        logger.info(f"Verified {len(self.registered_paths)} golden file(s) in {self._golden_root}")

    def _update(self) -> None:
        """Copy every registered path over its golden counterpart."""
        for path in self.registered_paths:
            pair = self._pair(path)
            try:
                pair.promote()
            except OSError as e:
                raise GoldenIOError(path, f"Could not update golden file {pair.golden_path}: {e}") from e
            logger.info(f"Updated golden file {pair.golden_path}")

    def _pair(self, relative_path: Path) -> StreamPair:
        return StreamPair(
            golden_path=self._golden_root / relative_path,
            staged_path=self._stage.root / relative_path,
        )

    def _release(self, quiet: bool) -> None:
        self._state = SessionState.DONE
        try:
            self._stage.destroy()
        except StagingError as e:
            if not quiet:
                raise
            logger.warning(f"Ignoring staging cleanup failure: {e}")
