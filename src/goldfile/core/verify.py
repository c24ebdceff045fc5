"""Windowed comparison of golden and actual streams."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import BinaryIO

from .config import DEFAULT_WINDOW_SIZE
from .diff import DiffReporter
from .errors import GoldenIOError, VerificationMismatch
from .streams import StreamPair

logger = logging.getLogger(__name__)


def decode_window(window: bytes) -> str:
    """Decode a byte window for diffing.

    Invalid UTF-8, including a multi-byte character split across two
    windows, is rendered as backslash escapes.
    """
    return window.decode("utf-8", errors="backslashreplace")


def compare_streams(
    golden: BinaryIO,
    actual: BinaryIO,
    reporter: DiffReporter,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> int:
    """Compare two streams window by window.

    Stops at the first window pair that differs; its diff is printed by the
    reporter.

    Args:
        golden: Reader over the golden content.
        actual: Reader over the actual content.
        reporter: Reporter used to diff and print a window pair.
        window_size: Bytes read from each side per window.

    Returns:
        Number of differing regions in the first differing window, or 0 if
        the streams are identical.
    """
    window_index = 0
    while True:
        old = golden.read(window_size)
        new = actual.read(window_size)
        if not old and not new:
            return 0
        if old != new:
            differences = reporter.compare(decode_window(old), decode_window(new))
            if differences == 0:
                # Distinct bytes that decode to the same escaped text.
                differences = 1
            logger.debug(f"Window {window_index} differs ({differences} region(s))")
            return differences
        window_index += 1


def verify_file(
    relative_path: str | Path,
    pair: StreamPair,
    reporter: DiffReporter,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> None:
    """Verify one staged artifact against its golden counterpart.

    Args:
        relative_path: Artifact path used in error messages.
        pair: Golden and staged locations of the artifact.
        reporter: Reporter used to print differences.
        window_size: Bytes read from each side per window.

    Raises:
        GoldenIOError: If either side cannot be opened or read.
        VerificationMismatch: If the contents differ.
    """
    try:
        with pair.open_readers() as (golden, actual):
            differences = compare_streams(golden, actual, reporter, window_size)
    except (OSError, EOFError, zlib.error) as e:
        # EOFError and zlib.error come from truncated or corrupt gzip streams.
        raise GoldenIOError(relative_path, f"Could not verify {relative_path}: {e}") from e

    if differences:
        raise VerificationMismatch(relative_path, differences)
    logger.debug(f"Verified {relative_path}")
