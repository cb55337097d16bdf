"""Composition root: turns a configuration into a generated Go source file."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Sequence

from jinja2 import Environment

from .config import BindataConfig
from .discovery import find_assets
from .emitters import registry_package
from .errors import BindataError
from .logging import get_logger
from .models import Asset
from .release import write_release
from .rendering import create_env, write_template
from .toc import TableOfContentsWriter

_LOGGER = get_logger("convert")


def translate(config: BindataConfig) -> List[Asset]:
    """Generate ``config.output`` from the configured inputs.

    The file is written next to its destination and moved into place only
    after every asset has been embedded, so a failed run leaves any previous
    output untouched.
    """
    config.validate()
    reserved = [registry_package(config.registry)] if config.registry else []
    toc = find_assets(
        config.inputs, prefix=config.prefix, ignore=config.ignore, reserved=reserved
    )
    _LOGGER.debug("Discovered %d assets", len(toc))

    output = config.output
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output.name}.", suffix=".tmp", dir=output.parent)
    except OSError as exc:
        raise BindataError(f"Cannot create output {output}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out:
            write_source(out, config, toc)
        os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, output)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise BindataError(f"Cannot write output {output}: {exc}") from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    _LOGGER.info("Embedded %d assets into %s (%s)", len(toc), output, config.strategy.label)
    return toc


def write_source(
    out: BinaryIO,
    config: BindataConfig,
    toc: Sequence[Asset],
    *,
    env: Environment | None = None,
) -> None:
    """Write the complete Go source for ``toc`` into ``out``."""
    env = env or create_env(config.templates_dir)
    write_template(out, env, "file.go.j2", tags=config.tags, assets=list(toc), package=config.package)
    write_release(
        out,
        config.strategy,
        toc,
        registry=config.registry,
        mode=config.mode,
        modtime=config.modtime,
        env=env,
    )
    TableOfContentsWriter(env).write(out, toc)


__all__ = ["translate", "write_source"]
