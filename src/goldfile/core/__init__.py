"""Core staging, diff and verification components."""

from __future__ import annotations

from .config import DEFAULT_WINDOW_SIZE, UPDATE_ENV_VAR, GoldenConfig
from .cursor import ChunkKind, LineCursor
from .diff import DiffChunk, DiffReporter, diff_chunks, tokenize
from .errors import GoldenError, GoldenIOError, StagingError, VerificationMismatch
from .session import GoldenSession, SessionState
from .stage import ArtifactStage
from .streams import COMPRESSED_SUFFIX, StreamPair, is_compressed, open_reader, open_writer
from .verify import compare_streams, verify_file

__all__ = [
    # Configuration
    "DEFAULT_WINDOW_SIZE",
    "UPDATE_ENV_VAR",
    "GoldenConfig",
    # Diff engine
    "ChunkKind",
    "DiffChunk",
    "DiffReporter",
    "LineCursor",
    "diff_chunks",
    "tokenize",
    # Errors
    "GoldenError",
    "GoldenIOError",
    "StagingError",
    "VerificationMismatch",
    # Sessions
    "ArtifactStage",
    "GoldenSession",
    "SessionState",
    # Streams
    "COMPRESSED_SUFFIX",
    "StreamPair",
    "is_compressed",
    "open_reader",
    "open_writer",
    "compare_streams",
    "verify_file",
]
