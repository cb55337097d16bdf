from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence

import pytest

from bindata.models import Asset
from bindata.release import write_release
from bindata.strategy import Strategy
from tests._fixtures.go_source import GoSource


@pytest.fixture(
    params=[
        Strategy(compress=True, zero_copy=True),
        Strategy(compress=True, zero_copy=False),
        Strategy(compress=False, zero_copy=True),
        Strategy(compress=False, zero_copy=False),
    ],
    ids=lambda strategy: strategy.label,
)
def strategy(request: pytest.FixtureRequest) -> Strategy:
    """Each of the four embedding strategies in turn."""
    return request.param


@pytest.fixture
def make_asset(tmp_path: Path) -> Callable[..., Asset]:
    """Write ``data`` under tmp_path and describe it as an Asset."""

    def _make(name: str, data: bytes, func: str | None = None) -> Asset:
        path = tmp_path / "assets" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return Asset(name=name, func=func or name.replace(".", "_").replace("/", "_"), path=path)

    return _make


@pytest.fixture
def render() -> Callable[..., GoSource]:
    """Run write_release into memory and wrap the result for inspection."""

    def _render(strategy: Strategy, toc: Sequence[Asset], **kwargs: object) -> GoSource:
        buffer = io.BytesIO()
        write_release(buffer, strategy, toc, **kwargs)
        return GoSource(buffer.getvalue())

    return _render
