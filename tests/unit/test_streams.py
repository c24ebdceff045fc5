"""Tests for path-based stream opening."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from goldfile.core.streams import StreamPair, is_compressed, open_reader, open_writer


class TestIsCompressed:
    """Tests for compressed-path detection."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("out.gz", True),
            ("dir/out.txt.gz", True),
            ("out.txt", False),
            ("out.gzip", False),
            ("out.GZ", False),
            (".gz", False),
            ("gz", False),
        ],
    )
    def test_suffix(self, path: str, expected: bool) -> None:
        assert is_compressed(path) is expected


class TestRoundTrip:
    """Tests for writing then reading artifacts."""

    def test_plain_file_is_raw(self, tmp_path: Path) -> None:
        """Plain paths store bytes unchanged."""
        path = tmp_path / "out.bin"
        with open_writer(path) as f:
            f.write(b"\x00\x01raw")

        assert path.read_bytes() == b"\x00\x01raw"
        with open_reader(path) as f:
            assert f.read() == b"\x00\x01raw"

    def test_gz_file_is_compressed(self, tmp_path: Path) -> None:
        """.gz paths store gzip data and read back decompressed."""
        path = tmp_path / "out.txt.gz"
        content = b"hello golden\n" * 100
        with open_writer(path) as f:
            f.write(content)

        raw = path.read_bytes()
        assert raw[:2] == b"\x1f\x8b"
        assert len(raw) < len(content)
        with open_reader(path) as f:
            assert f.read() == content

    def test_empty_gz_round_trip(self, tmp_path: Path) -> None:
        """An empty compressed artifact reads back empty."""
        path = tmp_path / "empty.gz"
        with open_writer(path):
            pass

        with open_reader(path) as f:
            assert f.read() == b""

    def test_gz_output_is_reproducible(self, tmp_path: Path) -> None:
        """The same content compresses to the same bytes."""
        first = tmp_path / "a" / "out.gz"
        second = tmp_path / "b" / "out.gz"
        for path in (first, second):
            path.parent.mkdir()
            with open_writer(path) as f:
                f.write(b"stable\n")

        assert first.read_bytes() == second.read_bytes()

    @given(st.binary(max_size=4096))
    @settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_gz_round_trip_any_content(self, tmp_path: Path, content: bytes) -> None:
        path = tmp_path / "any.gz"
        with open_writer(path) as f:
            f.write(content)

        with open_reader(path) as f:
            assert f.read() == content

    def test_missing_file(self, tmp_path: Path) -> None:
        """Opening a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            open_reader(tmp_path / "missing.txt")
        with pytest.raises(FileNotFoundError):
            open_reader(tmp_path / "missing.txt.gz")


class TestStreamPair:
    """Tests for StreamPair."""

    def test_open_readers(self, tmp_path: Path) -> None:
        """Both sides are opened and decompressed."""
        golden = tmp_path / "golden.gz"
        staged = tmp_path / "staged.gz"
        for path, data in ((golden, b"old"), (staged, b"new")):
            with open_writer(path) as f:
                f.write(data)

        with StreamPair(golden, staged).open_readers() as (golden_reader, staged_reader):
            assert golden_reader.read() == b"old"
            assert staged_reader.read() == b"new"
        assert golden_reader.closed
        assert staged_reader.closed

    def test_open_readers_missing_staged_closes_golden(self, tmp_path: Path) -> None:
        """A missing staged side raises and does not leave the golden side open."""
        golden = tmp_path / "golden.txt"
        golden.write_bytes(b"old")

        with pytest.raises(FileNotFoundError):
            with StreamPair(golden, tmp_path / "missing.txt").open_readers():
                pass

    def test_promote_creates_parents_and_overwrites(self, tmp_path: Path) -> None:
        """Promoting copies the staged bytes over the golden file."""
        staged = tmp_path / "staged.txt"
        staged.write_bytes(b"fresh")
        golden = tmp_path / "golden" / "nested" / "out.txt"

        pair = StreamPair(golden, staged)
        pair.promote()
        assert golden.read_bytes() == b"fresh"

        staged.write_bytes(b"fresher")
        pair.promote()
        assert golden.read_bytes() == b"fresher"
