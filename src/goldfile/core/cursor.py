"""Line-aware cursor that renders one side of a diff window."""

from __future__ import annotations

import unicodedata
from enum import Enum

from rich.console import Console


class ChunkKind(str, Enum):
    """How a run of text relates to the other side of the comparison."""

    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


CHUNK_STYLES = {
    ChunkKind.DELETE: "red",
    ChunkKind.INSERT: "green",
}


def make_visible(text: str) -> str:
    """Escape control characters other than newline.

    The console drops carriage returns and expands tabs, so a difference made
    only of such characters would otherwise print as nothing.
    """
    return "".join(
        ch.encode("unicode_escape").decode("ascii")
        if ch != "\n" and unicodedata.category(ch) == "Cc"
        else ch
        for ch in text
    )


class LineCursor:
    """Walks one side (golden or actual) of a comparison window.

    The cursor only reconstructs line boundaries when a difference forces
    something to be printed. When the first non-equal chunk of a line shows
    up, the unprinted start of that line is echoed so the terminal shows the
    whole line; the rest of the line is echoed by the following equal chunk.

    Attributes:
        source: Text window this cursor walks. Borrowed for one comparison.
        offset: Index of the next character to consume.
        line_start: Index of the first character of the current line.
        has_printed: Whether part of the current line was already emitted.
    """

    def __init__(self, source: str, console: Console) -> None:
        self.source = source
        self.console = console
        self.offset = 0
        self.line_start = 0
        self.has_printed = False

    def advance(self, length: int, kind: ChunkKind, print_equal_runs: bool) -> None:
        """Consume the next ``length`` characters of the source.

        Args:
            length: Number of characters the chunk covers on this side.
            kind: Relation of the chunk to the other side.
            print_equal_runs: Whether equal text on this side is echoed. Only
                one side of an equal pair echoes, so shared context prints once.
        """
        start = self.offset
        end = start + length

        if kind is not ChunkKind.EQUAL:
            if not self.has_printed and print_equal_runs:
                self._emit(self.source[self.line_start:start])
            self.has_printed = True
            self._emit(make_visible(self.source[start:end]), CHUNK_STYLES[kind])

        first_newline = self.source.find("\n", start, end)
        last_newline = self.source.rfind("\n", start, end)
        if last_newline != -1:
            self.line_start = last_newline + 1

        # Finish the line a previous difference started printing.
        if kind is ChunkKind.EQUAL and self.has_printed and print_equal_runs:
            if first_newline == -1:
                self._emit(self.source[start:end])
            else:
                self._emit(self.source[start:first_newline + 1])
                self.has_printed = False

        self.offset = end

    def _emit(self, text: str, style: str | None = None) -> None:
        if text:
            self.console.out(text, style=style, highlight=False, end="")
