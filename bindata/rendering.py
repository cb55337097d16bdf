"""Jinja environment used to render the Go boilerplate around embedded literals."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .literals import quote_string

DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


def create_env(templates_dir: Path | None = None) -> Environment:
    """Return an environment searching ``templates_dir`` before the bundled templates."""
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(DEFAULT_TEMPLATES_DIR))
    # ensure uniqueness preserving order
    seen: set[str] = set()
    ordered: list[str] = []
    for directory in directories:
        if directory not in seen:
            ordered.append(directory)
            seen.add(directory)
    env = Environment(
        loader=FileSystemLoader(ordered),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["goquote"] = quote_string
    env.filters["gocomment"] = _comment_text
    return env


def write_template(out: BinaryIO, env: Environment, name: str, **context: object) -> None:
    """Render ``name`` with ``context`` and write it to ``out`` as UTF-8."""
    text = env.get_template(name).render(**context)
    out.write(text.encode("utf-8", "surrogateescape"))


def _comment_text(value: str) -> str:
    # Escaped but unquoted, so control characters cannot end a line comment.
    return quote_string(value)[1:-1]


__all__ = ["DEFAULT_TEMPLATES_DIR", "create_env", "write_template"]
