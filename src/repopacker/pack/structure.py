"""Connector-annotated structure index of a repository tree."""

from __future__ import annotations

from repopacker.core.tree import sorted_children
from repopacker.core.types import Node

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def render(tree: Node) -> str:
    """Render the descendants of `tree` as an indented index.

    Directories come before files and names sort lexicographically at every
    level, so the output does not depend on listing order. The root itself is
    not printed. Each line ends with a newline.

    Parameters
    ----------
    tree
        Root node.

    Returns
    -------
    str
        Index text, empty for a tree without children.
    """
    lines: list[str] = []
    stack: list[tuple[Node, str, bool]] = _frames(tree, "")
    while stack:
        node, prefix, is_last = stack.pop()
        lines.append(f"{prefix}{LAST_BRANCH if is_last else BRANCH}{node.name}\n")
        stack.extend(_frames(node, prefix + (SPACE if is_last else PIPE)))
    return "".join(lines)


def _frames(node: Node, prefix: str) -> list[tuple[Node, str, bool]]:
    children = sorted_children(node)
    count = len(children)
    # Reversed so the first child is popped first.
    return [(child, prefix, i == count - 1) for i, child in reversed(list(enumerate(children)))]
