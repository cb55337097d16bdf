"""Error types raised while generating embedded asset sources."""

from __future__ import annotations

from pathlib import Path


class BindataError(RuntimeError):
    """Base class for failures that abort a generation run."""


class InputUnavailableError(BindataError):
    """Raised when an input file cannot be opened, read, or stat'd."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Input unavailable: {path}: {reason}")


class EncodeError(BindataError):
    """Raised when an asset's bytes cannot be encoded into the output stream."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Failed to encode asset {name!r}: {reason}")


__all__ = ["BindataError", "EncodeError", "InputUnavailableError"]
