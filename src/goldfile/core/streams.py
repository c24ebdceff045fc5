"""Path-based stream opening with transparent gzip support."""

from __future__ import annotations

import gzip
import shutil
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

COMPRESSED_SUFFIX = ".gz"


def is_compressed(path: str | Path) -> bool:
    """Check whether a path names a gzip-compressed artifact."""
    return Path(path).suffix == COMPRESSED_SUFFIX


def open_reader(path: str | Path) -> BinaryIO:
    """Open a path for reading, decompressing ``.gz`` files.

    Raises:
        OSError: If the file cannot be opened.
    """
    path = Path(path)
    if is_compressed(path):
        return gzip.GzipFile(filename=path, mode="rb")  # type: ignore[return-value]
    return path.open("rb")


def open_writer(path: str | Path) -> BinaryIO:
    """Open a path for writing, compressing ``.gz`` files.

    Compressed artifacts use the maximum compression level and a zero
    header timestamp so identical content produces identical files.

    Raises:
        OSError: If the file cannot be created.
    """
    path = Path(path)
    if is_compressed(path):
        return gzip.GzipFile(filename=path, mode="wb", compresslevel=9, mtime=0)  # type: ignore[return-value]
    return path.open("wb")


@dataclass(frozen=True)
class StreamPair:
    """A golden path and the staged path it is compared against."""

    golden_path: Path
    staged_path: Path

    @contextmanager
    def open_readers(self) -> Iterator[tuple[BinaryIO, BinaryIO]]:
        """Open both sides for reading.

        Yields:
            Tuple of (golden reader, staged reader).
        """
        golden = open_reader(self.golden_path)
        try:
            staged = open_reader(self.staged_path)
        except BaseException:
            golden.close()
            raise
        try:
            yield golden, staged
        finally:
            golden.close()
            staged.close()

    def promote(self) -> None:
        """Copy the staged file over the golden file, creating parents."""
        self.golden_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.staged_path, self.golden_path)
