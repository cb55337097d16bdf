"""Release output: embeds every asset's bytes into the generated source."""

from __future__ import annotations

from typing import BinaryIO, Sequence

from jinja2 import Environment

from .emitters import DEFAULT_REGISTRY
from .logging import get_logger
from .models import Asset
from .strategy import Strategy, select_emitter

_LOGGER = get_logger("release")


def write_release(
    out: BinaryIO,
    strategy: Strategy,
    toc: Sequence[Asset],
    *,
    registry: str | None = DEFAULT_REGISTRY,
    mode: int | None = None,
    modtime: int | None = None,
    env: Environment | None = None,
) -> None:
    """Write the strategy prologue followed by one entry per asset, in order.

    Any failure propagates immediately; the stream is left half-written and
    must be discarded by the caller.
    """
    emitter = select_emitter(strategy, registry=registry, mode=mode, modtime=modtime, env=env)
    _LOGGER.debug("Writing %d assets using %s strategy", len(toc), strategy.label)
    emitter.write_header(out)
    for asset in toc:
        emitter.write_asset(out, asset)


__all__ = ["write_release"]
