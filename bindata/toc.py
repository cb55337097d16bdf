"""Table-of-contents section of the generated source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Sequence

from jinja2 import Environment

from .literals import quote_string
from .models import Asset
from .rendering import create_env, write_template


@dataclass
class TreeNode:
    """Directory node of the ``_bintree`` lookup structure."""

    func: str | None = None
    children: Dict[str, "TreeNode"] = field(default_factory=dict)


def build_tree(toc: Sequence[Asset]) -> TreeNode:
    """Arrange assets into a tree keyed by the ``/``-separated parts of their names."""
    root = TreeNode()
    for asset in toc:
        node = root
        for part in asset.name.split("/"):
            node = node.children.setdefault(part, TreeNode())
        node.func = asset.func
    return root


def render_tree(node: TreeNode, depth: int = 0) -> str:
    """Render ``node`` as a Go ``&bintree{...}`` composite literal."""
    head = f"&bintree{{{node.func or 'nil'}, map[string]*bintree{{"
    if not node.children:
        return head + "}}"
    lines = [head]
    indent = "\t" * (depth + 1)
    for name in sorted(node.children):
        child = render_tree(node.children[name], depth + 1)
        lines.append(f"{indent}{quote_string(name)}: {child},")
    lines.append("\t" * depth + "}}")
    return "\n".join(lines)


class TableOfContentsWriter:
    """Writes the name-based lookup API over the embedded assets."""

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or create_env()

    def write(self, out: BinaryIO, toc: Sequence[Asset]) -> None:
        write_template(
            out,
            self._env,
            "toc.go.j2",
            assets=list(toc),
            tree=render_tree(build_tree(toc)),
        )


__all__ = ["TableOfContentsWriter", "TreeNode", "build_tree", "render_tree"]
