"""Resolution of the compress/zero-copy flags into a single emitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Type

from jinja2 import Environment

from .emitters import (
    DEFAULT_REGISTRY,
    CompressedCopyEmitter,
    CompressedZeroCopyEmitter,
    Emitter,
    UncompressedCopyEmitter,
    UncompressedZeroCopyEmitter,
)


@dataclass(frozen=True)
class Strategy:
    """Embedding strategy shared by every asset of one generation run."""

    compress: bool = True
    zero_copy: bool = False

    @classmethod
    def from_flags(cls, *, no_compress: bool, no_memcopy: bool) -> "Strategy":
        """Build a strategy from the command-line polarity of the flags."""
        return cls(compress=not no_compress, zero_copy=bool(no_memcopy))

    @property
    def label(self) -> str:
        compression = "compressed" if self.compress else "uncompressed"
        copying = "zero-copy" if self.zero_copy else "copy"
        return f"{compression}/{copying}"


_EMITTERS: Dict[Strategy, Type[Emitter]] = {
    Strategy(compress=True, zero_copy=True): CompressedZeroCopyEmitter,
    Strategy(compress=True, zero_copy=False): CompressedCopyEmitter,
    Strategy(compress=False, zero_copy=True): UncompressedZeroCopyEmitter,
    Strategy(compress=False, zero_copy=False): UncompressedCopyEmitter,
}


def select_emitter(
    strategy: Strategy,
    *,
    registry: str | None = DEFAULT_REGISTRY,
    mode: int | None = None,
    modtime: int | None = None,
    env: Environment | None = None,
) -> Emitter:
    """Return the emitter implementing ``strategy``."""
    factory = _EMITTERS[Strategy(compress=bool(strategy.compress), zero_copy=bool(strategy.zero_copy))]
    return factory(registry=registry, mode=mode, modtime=modtime, env=env)


__all__ = ["Strategy", "select_emitter"]
