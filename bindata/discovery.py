"""Input enumeration into an ordered table of contents."""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Dict, Iterable, List, Pattern, Sequence, Set, Tuple

from .errors import BindataError, InputUnavailableError
from .logging import get_logger
from .models import Asset

_LOGGER = get_logger("discovery")

_NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]")

# Names an asset identifier must not take or shadow.
_RESERVED = {
    # Go keywords
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
    # predeclared identifiers
    "any", "append", "bool", "byte", "cap", "clear", "close", "comparable",
    "complex", "complex64", "complex128", "copy", "delete", "error", "false",
    "float32", "float64", "imag", "int", "int8", "int16", "int32", "int64",
    "iota", "len", "make", "max", "min", "new", "nil", "panic", "print",
    "println", "real", "recover", "rune", "string", "true", "uint", "uint8",
    "uint16", "uint32", "uint64", "uintptr",
    # imported packages
    "bytes", "filepath", "fmt", "gzip", "io", "os", "strings", "time", "unsafe",
    # generated helpers
    "asset", "bindata_file_info", "bindata_read", "bintree",
}

# Package-level symbols of the generated file that no asset symbol may reuse.
_GENERATED = {
    "Asset", "AssetDir", "AssetInfo", "AssetNames", "MustAsset", "Register",
    "RestoreAsset", "RestoreAssets", "_bindata", "_bintree", "_filePath",
    "asset", "bindata_file_info", "bindata_read", "bintree",
}


@dataclass(frozen=True)
class InputConfig:
    """A file or directory to embed; directories are walked when ``recursive``."""

    path: str
    recursive: bool = False

    @classmethod
    def parse(cls, raw: str) -> "InputConfig":
        """Interpret the ``dir/...`` suffix as a recursive input."""
        if raw.endswith("/..."):
            return cls(path=os.path.normpath(raw[: -len("/...")] or "/"), recursive=True)
        return cls(path=os.path.normpath(raw), recursive=False)


def _symbols(ident: str) -> Tuple[str, str, str]:
    return ident, f"_{ident}", f"{ident}_bytes"


def _is_free(ident: str, known: Dict[str, int]) -> bool:
    return not any(symbol in known or symbol in _GENERATED for symbol in _symbols(ident))


def safe_function_name(
    name: str, known: Dict[str, int], reserved: Collection[str] = ()
) -> str:
    """Derive a unique Go identifier from an asset name.

    ``data/logo.png`` becomes ``dataLogoPng``. The identifier is free along
    with the ``_<ident>`` and ``<ident>_bytes`` symbols emitted for it;
    collisions get numeric suffixes starting at 2. ``reserved`` adds names
    such as the registry package that must not be shadowed.
    """
    chars: List[str] = []
    to_upper = False
    for char in name.lower():
        if _NON_IDENTIFIER.match(char):
            to_upper = True
        elif to_upper:
            chars.append(char.upper())
            to_upper = False
        else:
            chars.append(char)
    ident = "".join(chars) or "asset"

    if ident[0].isdigit() or ident in _RESERVED or ident in reserved:
        ident = "_" + ident

    candidate = ident
    if not _is_free(candidate, known):
        count = known.get(ident, 2)
        candidate = f"{ident}{count}"
        while not _is_free(candidate, known):
            count += 1
            candidate = f"{ident}{count}"
        known[ident] = count + 1

    for symbol in _symbols(candidate):
        known.setdefault(symbol, 2)
    return candidate


def find_assets(
    inputs: Iterable[InputConfig],
    *,
    prefix: str | None = None,
    ignore: Sequence[str | Pattern[str]] = (),
    reserved: Collection[str] = (),
) -> List[Asset]:
    """Return the assets below ``inputs``, sorted by name within each directory.

    A file reached twice through overlapping inputs is embedded once; two
    different files mapping to the same name raise ``BindataError``.
    """
    patterns = [re.compile(pattern) if isinstance(pattern, str) else pattern for pattern in ignore]
    toc: List[Asset] = []
    known: Dict[str, int] = {}
    visited: Set[str] = set()
    names: Dict[str, Path] = {}
    reserved = frozenset(reserved)
    for item in inputs:
        _find_files(
            item.path, prefix, item.recursive, toc, patterns, known, visited, names, reserved
        )
    return toc


def _find_files(
    directory: str,
    prefix: str | None,
    recursive: bool,
    toc: List[Asset],
    ignore: Sequence[Pattern[str]],
    known: Dict[str, int],
    visited: Set[str],
    names: Dict[str, Path],
    reserved: Collection[str],
) -> None:
    dirpath = directory
    if prefix:
        dirpath = os.path.abspath(dirpath)
        prefix = _to_slash(os.path.abspath(prefix))

    try:
        stat_result = os.stat(dirpath)
    except OSError as exc:
        raise InputUnavailableError(directory, exc.strerror or str(exc)) from exc

    if stat.S_ISDIR(stat_result.st_mode):
        real = os.path.realpath(dirpath)
        if real in visited:
            _LOGGER.debug("Skipping already visited directory %s", directory)
            return
        visited.add(real)
        try:
            with os.scandir(dirpath) as entries:
                listing = sorted((entry.name, entry.is_dir()) for entry in entries)
        except OSError as exc:
            raise InputUnavailableError(directory, exc.strerror or str(exc)) from exc
    else:
        listing = [(os.path.basename(dirpath), False)]
        dirpath = os.path.dirname(dirpath)

    for filename, is_dir in listing:
        path = os.path.join(dirpath, filename)
        if any(pattern.search(path) for pattern in ignore):
            _LOGGER.debug("Ignoring %s", path)
            continue

        if is_dir:
            if recursive:
                _find_files(
                    os.path.join(directory, filename),
                    prefix,
                    recursive,
                    toc,
                    ignore,
                    known,
                    visited,
                    names,
                    reserved,
                )
            continue

        name = _to_slash(path)
        if prefix and not name.startswith(prefix):
            name = _to_slash(os.path.join(directory, filename))
        elif prefix:
            name = name[len(prefix):]
        name = name.lstrip("/")
        if not name:
            raise BindataError(f"Invalid file: {path}")

        source = Path(os.path.abspath(path))
        previous = names.get(name)
        if previous is not None:
            if previous == source:
                _LOGGER.debug("Skipping %s, already embedded as %s", path, name)
                continue
            raise BindataError(f"Asset name {name!r} used by both {previous} and {source}")
        names[name] = source

        toc.append(
            Asset(
                name=name,
                func=safe_function_name(name, known, reserved),
                path=source,
            )
        )


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


__all__ = ["InputConfig", "find_assets", "safe_function_name"]
