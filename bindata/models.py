"""Core data models shared across bindata components."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

# Go os.FileMode type bits (io/fs).
GO_MODE_DIR = 1 << 31
GO_MODE_SYMLINK = 1 << 27
GO_MODE_DEVICE = 1 << 26
GO_MODE_NAMED_PIPE = 1 << 25
GO_MODE_SOCKET = 1 << 24
GO_MODE_SETUID = 1 << 23
GO_MODE_SETGID = 1 << 22
GO_MODE_CHAR_DEVICE = 1 << 21
GO_MODE_STICKY = 1 << 20

_GO_TYPE_BITS = {
    stat.S_IFDIR: GO_MODE_DIR,
    stat.S_IFLNK: GO_MODE_SYMLINK,
    stat.S_IFBLK: GO_MODE_DEVICE,
    stat.S_IFCHR: GO_MODE_DEVICE | GO_MODE_CHAR_DEVICE,
    stat.S_IFIFO: GO_MODE_NAMED_PIPE,
    stat.S_IFSOCK: GO_MODE_SOCKET,
}


@dataclass(frozen=True)
class Asset:
    """One input file scheduled for embedding."""

    name: str
    func: str
    path: Path


@dataclass(frozen=True)
class FileInfo:
    """Generation-time snapshot of a file's metadata, baked into the output."""

    name: str
    size: int
    mode: int
    mod_time: int

    @classmethod
    def from_stat(cls, name: str, stat_result: os.stat_result) -> "FileInfo":
        return cls(
            name=name,
            size=stat_result.st_size,
            mode=go_file_mode(stat_result.st_mode),
            # Floor division matches Go's Time.Unix() for pre-epoch timestamps.
            mod_time=stat_result.st_mtime_ns // 1_000_000_000,
        )


def go_file_mode(st_mode: int) -> int:
    """Translate a POSIX ``st_mode`` into Go ``os.FileMode`` bits."""
    mode = st_mode & 0o777
    mode |= _GO_TYPE_BITS.get(stat.S_IFMT(st_mode), 0)
    if st_mode & stat.S_ISUID:
        mode |= GO_MODE_SETUID
    if st_mode & stat.S_ISGID:
        mode |= GO_MODE_SETGID
    if st_mode & stat.S_ISVTX:
        mode |= GO_MODE_STICKY
    return mode


__all__ = ["Asset", "FileInfo", "go_file_mode"]
