"""Tests for bindata.compress."""

from __future__ import annotations

import gzip
import io
from pathlib import Path

import pytest

from bindata.compress import compress_stream, read_chunks
from bindata.errors import EncodeError, InputUnavailableError


class _FailingSink:
    def write(self, data: bytes) -> int:
        raise OSError(28, "No space left on device")

    def flush(self) -> None:
        pass


class _FailingReader:
    def read(self, size: int = -1) -> bytes:
        raise OSError(5, "Input/output error")


def test_compress_stream_round_trips_through_gzip() -> None:
    payload = b"hello bindata " * 1000
    sink = io.BytesIO()

    compress_stream(read_chunks(io.BytesIO(payload), "mem"), sink, name="mem")

    assert gzip.decompress(sink.getvalue()) == payload


def test_compress_stream_output_is_deterministic() -> None:
    payload = bytes(range(256)) * 64
    first, second = io.BytesIO(), io.BytesIO()

    compress_stream([payload], first, name="a")
    compress_stream([payload], second, name="a")

    assert first.getvalue() == second.getvalue()
    # mtime field of the gzip header
    assert first.getvalue()[4:8] == b"\x00\x00\x00\x00"


def test_compress_stream_wraps_sink_failures_with_asset_name() -> None:
    with pytest.raises(EncodeError) as excinfo:
        compress_stream([b"data"], _FailingSink(), name="logo.png")

    assert excinfo.value.name == "logo.png"
    assert "logo.png" in str(excinfo.value)


def test_read_chunks_reports_path_on_read_failure(tmp_path: Path) -> None:
    target = tmp_path / "broken.bin"
    with pytest.raises(InputUnavailableError) as excinfo:
        list(read_chunks(_FailingReader(), target))

    assert excinfo.value.path == target


def test_read_chunks_splits_large_inputs() -> None:
    chunks = list(read_chunks(io.BytesIO(b"x" * 10), "mem", size=4))
    assert chunks == [b"xxxx", b"xxxx", b"xx"]
