"""Deterministic gzip encoding of asset streams."""

from __future__ import annotations

import gzip
import zlib
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator

from .errors import EncodeError, InputUnavailableError

CHUNK_SIZE = 64 * 1024


def read_chunks(handle: BinaryIO, path: Path | str, size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield ``handle`` in chunks, reporting read failures against ``path``."""
    while True:
        try:
            chunk = handle.read(size)
        except OSError as exc:
            raise InputUnavailableError(path, exc.strerror or str(exc)) from exc
        if not chunk:
            return
        yield chunk


def compress_stream(
    chunks: Iterable[bytes],
    sink: BinaryIO,
    *,
    name: str,
    level: int = zlib.Z_BEST_COMPRESSION,
) -> None:
    """Gzip ``chunks`` into ``sink``.

    The gzip header carries no file name and a zero timestamp so two runs over
    the same bytes produce identical output.
    """
    try:
        with gzip.GzipFile(filename="", mode="wb", compresslevel=level, fileobj=sink, mtime=0) as gz:
            for chunk in chunks:
                gz.write(chunk)
    except (OSError, zlib.error) as exc:
        raise EncodeError(name, str(exc)) from exc


__all__ = ["CHUNK_SIZE", "compress_stream", "read_chunks"]
