"""Materialize a flat repository listing into a rooted tree."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import replace

from repopacker.core.types import Node, NodeKind, RepoEntry
from repopacker.errors import UnknownPathError

ROOT_NAME = "root"


def build_tree(entries: Iterable[RepoEntry]) -> Node:
    """Build a tree from a flat listing.

    Every path is split on ``/`` and one node is created per segment.
    Intermediate segments become ``tree`` nodes even when the listing never
    names them; the terminal segment takes the record's kind and content ref.

    Parameters
    ----------
    entries
        Listing records with unique paths, in any order.

    Returns
    -------
    Node
        The root node (path ``""``). Empty input gives a root with no children.
    """
    root = Node(name=ROOT_NAME, path="", kind=NodeKind.TREE)
    for entry in entries:
        if not entry.path:
            continue
        parts = entry.path.split("/")
        current = root
        last = len(parts) - 1
        for index, part in enumerate(parts):
            child = current.children.get(part)
            if index == last:
                if child is None:
                    child = Node(
                        name=part,
                        path="/".join(parts[: index + 1]),
                        kind=entry.kind,
                        content_ref=entry.content_ref,
                    )
                elif child.kind != entry.kind or child.content_ref != entry.content_ref:
                    # Created earlier as an implicit directory; the explicit record wins.
                    child = replace(child, kind=entry.kind, content_ref=entry.content_ref)
                current.children[part] = child
            elif child is None:
                child = Node(name=part, path="/".join(parts[: index + 1]), kind=NodeKind.TREE)
                current.children[part] = child
            current = child
    return root


def sorted_children(node: Node) -> list[Node]:
    """Return children with directories first, then by name."""
    return sorted(node.children.values(), key=lambda c: (0 if c.is_dir else 1, c.name))


def iter_nodes(root: Node, *, include_root: bool = True) -> Iterator[Node]:
    """Iterate every node in pre-order without recursion.

    Siblings are visited in `sorted_children` order.
    """
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if include_root or node is not root:
            yield node
        stack.extend(reversed(sorted_children(node)))


def iter_leaves(root: Node) -> Iterator[Node]:
    """Iterate every ``blob`` node below `root` in structure order."""
    for node in iter_nodes(root):
        if node.kind is NodeKind.BLOB:
            yield node


def find_node(root: Node, path: str) -> Node:
    """Look up a node by its full path.

    Raises
    ------
    UnknownPathError
        If no node has this path.
    """
    if path == root.path:
        return root
    current = root
    for part in path.split("/"):
        child = current.children.get(part)
        if child is None:
            raise UnknownPathError(path)
        current = child
    return current
