"""Header and per-asset emitters for the four embedding strategies.

Every emitter writes Go source into a binary stream. The header is written
once per output file; ``write_asset`` is then called for each asset in
table-of-contents order. An asset contributes three symbols:

* ``_<func>``: the literal holding the (possibly gzipped) bytes,
* ``<func>_bytes()``: returns the original bytes,
* ``<func>()``: pairs those bytes with a ``bindata_file_info`` record.
"""

from __future__ import annotations

import dataclasses
import os
from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Tuple

from jinja2 import Environment

from .compress import compress_stream, read_chunks
from .errors import InputUnavailableError
from .literals import StringWriter, quote_bytes, sanitize
from .logging import get_logger
from .models import Asset, FileInfo
from .rendering import create_env, write_template

DEFAULT_REGISTRY = "grate"

_COMMON_IMPORTS: Tuple[str, ...] = ("fmt", "os", "path/filepath", "strings", "time")

_LOGGER = get_logger("emitters")


def registry_package(import_path: str) -> str:
    """Return the package name Go binds for ``import_path``: its last segment."""
    return import_path.rstrip("/").rsplit("/", 1)[-1]


class Emitter(ABC):
    """Writes the prologue and per-asset symbols for one strategy."""

    compress: ClassVar[bool]
    zero_copy: ClassVar[bool]
    extra_imports: ClassVar[Tuple[str, ...]] = ()
    read_helper: ClassVar[str | None] = None

    def __init__(
        self,
        *,
        registry: str | None = DEFAULT_REGISTRY,
        mode: int | None = None,
        modtime: int | None = None,
        env: Environment | None = None,
    ) -> None:
        self.registry = registry or None
        self.mode = mode
        self.modtime = modtime
        self._env = env or create_env()

    @property
    def registry_name(self) -> str | None:
        if not self.registry:
            return None
        return registry_package(self.registry)

    def imports(self) -> list[str]:
        paths = set(_COMMON_IMPORTS) | set(self.extra_imports)
        if self.registry:
            paths.add(self.registry)
        return sorted(paths)

    def write_header(self, out: BinaryIO) -> None:
        """Write imports, registration wiring, the decode helper and shared types."""
        write_template(
            out,
            self._env,
            "release/header.go.j2",
            imports=self.imports(),
            registry=self.registry_name,
            read_helper=self.read_helper,
            zero_copy=self.zero_copy,
        )
        write_template(out, self._env, "release/common.go.j2")

    def write_asset(self, out: BinaryIO, asset: Asset) -> None:
        """Write the literal, decode function and constructor for ``asset``."""
        _LOGGER.debug("Embedding %s as %s", asset.path, asset.func)
        try:
            handle = open(asset.path, "rb")
        except OSError as exc:
            raise InputUnavailableError(asset.path, exc.strerror or str(exc)) from exc
        with handle:
            self.write_literal(out, asset, handle)
        write_template(
            out,
            self._env,
            "release/asset.go.j2",
            asset=asset,
            info=self.file_info(asset),
            direct=self.read_helper is None,
        )

    def file_info(self, asset: Asset) -> FileInfo:
        """Stat ``asset`` and apply the configured mode and modtime overrides."""
        try:
            stat_result = os.stat(asset.path)
        except OSError as exc:
            raise InputUnavailableError(asset.path, exc.strerror or str(exc)) from exc
        info = FileInfo.from_stat(asset.name, stat_result)
        if self.mode is not None:
            info = dataclasses.replace(info, mode=self.mode)
        if self.modtime is not None:
            info = dataclasses.replace(info, mod_time=self.modtime)
        return info

    @abstractmethod
    def write_literal(self, out: BinaryIO, asset: Asset, handle: BinaryIO) -> None:
        """Write ``var _<func> = ...`` holding the encoded contents of ``handle``."""


class CompressedZeroCopyEmitter(Emitter):
    """Gzipped bytes in a string literal, decompressed from an aliasing view."""

    compress = True
    zero_copy = True
    extra_imports = ("bytes", "compress/gzip", "io", "unsafe")
    read_helper = "release/read_compressed.go.j2"

    def write_literal(self, out: BinaryIO, asset: Asset, handle: BinaryIO) -> None:
        out.write(f'var _{asset.func} = "'.encode("utf-8"))
        compress_stream(read_chunks(handle, asset.path), StringWriter(out), name=asset.name)
        out.write(b'"\n\n')


class CompressedCopyEmitter(Emitter):
    """Gzipped bytes in a ``[]byte`` literal."""

    compress = True
    zero_copy = False
    extra_imports = ("bytes", "compress/gzip", "io")
    read_helper = "release/read_compressed.go.j2"

    def write_literal(self, out: BinaryIO, asset: Asset, handle: BinaryIO) -> None:
        out.write(f'var _{asset.func} = []byte("'.encode("utf-8"))
        compress_stream(read_chunks(handle, asset.path), StringWriter(out), name=asset.name)
        out.write(b'")\n\n')


class UncompressedZeroCopyEmitter(Emitter):
    """Raw bytes in a string literal, returned as an aliasing view."""

    compress = False
    zero_copy = True
    extra_imports = ("unsafe",)
    read_helper = "release/read_view.go.j2"

    def write_literal(self, out: BinaryIO, asset: Asset, handle: BinaryIO) -> None:
        out.write(f'var _{asset.func} = "'.encode("utf-8"))
        writer = StringWriter(out)
        for chunk in read_chunks(handle, asset.path):
            writer.write(chunk)
        out.write(b'"\n\n')


class UncompressedCopyEmitter(Emitter):
    """Raw bytes in a ``[]byte`` literal returned as-is; no decode helper."""

    compress = False
    zero_copy = False

    def write_literal(self, out: BinaryIO, asset: Asset, handle: BinaryIO) -> None:
        data = b"".join(read_chunks(handle, asset.path))
        out.write(f"var _{asset.func} = []byte(".encode("utf-8"))
        try:
            data.decode("utf-8")
        except UnicodeDecodeError:
            out.write(quote_bytes(data).encode("utf-8"))
        else:
            # Readable raw literal; binary that happens to be valid UTF-8 lands here too.
            out.write(b"`" + sanitize(data) + b"`")
        out.write(b")\n\n")


__all__ = [
    "CompressedCopyEmitter",
    "CompressedZeroCopyEmitter",
    "DEFAULT_REGISTRY",
    "Emitter",
    "UncompressedCopyEmitter",
    "UncompressedZeroCopyEmitter",
    "registry_package",
]
