"""Token-level diff and colorized diff reporting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from difflib import SequenceMatcher

from rich.console import Console

from .cursor import ChunkKind, LineCursor

logger = logging.getLogger(__name__)

# A token is a run of word characters or any single other character.
_TOKEN_RE = re.compile(r"\w+|\W")


@dataclass(frozen=True)
class DiffChunk:
    """One contiguous run of the alignment between old and new text."""

    kind: ChunkKind
    text: str


def tokenize(text: str) -> list[str]:
    """Split text into diff tokens. Joining the tokens gives back ``text``."""
    return _TOKEN_RE.findall(text)


def diff_chunks(old: str, new: str) -> list[DiffChunk]:
    """Compute the ordered alignment of ``old`` against ``new``.

    Args:
        old: Golden text.
        new: Actual text.

    Returns:
        Chunks in order. Equal and Delete texts concatenate to ``old``,
        Equal and Insert texts concatenate to ``new``.
    """
    old_tokens = tokenize(old)
    new_tokens = tokenize(new)
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    chunks: list[DiffChunk] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            chunks.append(DiffChunk(ChunkKind.EQUAL, "".join(old_tokens[i1:i2])))
            continue
        if i2 > i1:
            chunks.append(DiffChunk(ChunkKind.DELETE, "".join(old_tokens[i1:i2])))
        if j2 > j1:
            chunks.append(DiffChunk(ChunkKind.INSERT, "".join(new_tokens[j1:j2])))
    return chunks


def count_regions(chunks: list[DiffChunk]) -> int:
    """Count maximal runs of consecutive non-equal chunks."""
    regions = 0
    in_region = False
    for chunk in chunks:
        if chunk.kind is ChunkKind.EQUAL:
            in_region = False
        elif not in_region:
            regions += 1
            in_region = True
    return regions


class DiffReporter:
    """Prints the differences between two text windows.

    Example:
        >>> reporter = DiffReporter()
        >>> reporter.compare("abc\\n", "abc\\n")
        0
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console(highlight=False)

    def compare(self, old: str, new: str) -> int:
        """Diff two windows and print the differing lines.

        Args:
            old: Golden window.
            new: Actual window.

        Returns:
            Number of differing regions. Zero means the windows are equal and
            nothing was printed.
        """
        chunks = diff_chunks(old, new)
        old_cursor = LineCursor(old, self.console)
        new_cursor = LineCursor(new, self.console)

        for chunk in chunks:
            length = len(chunk.text)
            if chunk.kind is ChunkKind.EQUAL:
                old_cursor.advance(length, ChunkKind.EQUAL, True)
                # Context was already echoed by the golden side.
                new_cursor.advance(length, ChunkKind.EQUAL, False)
            elif chunk.kind is ChunkKind.DELETE:
                old_cursor.advance(length, ChunkKind.DELETE, True)
            else:
                new_cursor.advance(length, ChunkKind.INSERT, False)

        differences = count_regions(chunks)
        if differences:
            self.console.out("", highlight=False)
            logger.debug(f"Window diff found {differences} differing region(s)")
        return differences
