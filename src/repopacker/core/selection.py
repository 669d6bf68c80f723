"""Tri-state selection over a repository tree.

Only leaves carry an explicit boolean (`SelectionState`). The status of every
node is derived from it with one post-order pass; nothing derived is stored
between calls, so a new status map must be computed after each edit.

All edit operations return a new mapping and leave their input untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from repopacker.core.classify import DEFAULT_CODE_EXTENSIONS, code_file_predicate
from repopacker.core.tree import find_node, iter_leaves
from repopacker.core.types import Node, NodeKind, SelectionState, SelectionStatus, SelectionStatusMap


def compute_status_map(tree: Node, selection: SelectionState) -> SelectionStatusMap:
    """Derive the status of every node below (and including) `tree`.

    Children are always resolved before their parent and each node is
    resolved exactly once, so the cost is linear in the number of nodes.

    Parameters
    ----------
    tree
        Root of the (sub)tree to evaluate.
    selection
        Explicit leaf selection; missing paths count as unselected.

    Returns
    -------
    SelectionStatusMap
        Status keyed by node path.
    """
    statuses: SelectionStatusMap = {}
    stack: list[tuple[Node, bool]] = [(tree, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded and node.children:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children.values())
            continue
        statuses[node.path] = _derive(node, selection, statuses)
    return statuses


def _derive(node: Node, selection: SelectionState, statuses: SelectionStatusMap) -> SelectionStatus:
    if node.kind is NodeKind.BLOB:
        return SelectionStatus.CHECKED if selection.get(node.path) is True else SelectionStatus.UNCHECKED
    if not node.children:
        return SelectionStatus.UNCHECKED

    seen = {statuses[child.path] for child in node.children.values()}
    if seen == {SelectionStatus.CHECKED}:
        return SelectionStatus.CHECKED
    if seen == {SelectionStatus.UNCHECKED}:
        return SelectionStatus.UNCHECKED
    return SelectionStatus.INDETERMINATE


def node_status(node: Node, selection: SelectionState) -> SelectionStatus:
    """Return the aggregate status of a single node."""
    return compute_status_map(node, selection)[node.path]


def toggle(tree: Node, selection: SelectionState, path: str, kind: NodeKind | str | None = None) -> SelectionState:
    """Toggle the selection of a file or directory.

    A file flips its own flag. A directory that is fully checked is cleared;
    any other directory (unchecked or indeterminate) gets every descendant
    file selected.

    An empty subdirectory is always unchecked, so a directory holding one
    never becomes checked and toggling it keeps selecting its files. Clear
    such a directory with `select_none` or per-file toggles.

    Parameters
    ----------
    tree
        Root of the tree.
    selection
        Current selection.
    path
        Path of the node to toggle.
    kind
        Kind the caller believes the node has. Must match the tree if given.

    Returns
    -------
    SelectionState
        A new selection mapping.

    Raises
    ------
    UnknownPathError
        If `path` is not in the tree.
    ValueError
        If `kind` disagrees with the node's kind.
    """
    node = find_node(tree, path)
    if kind is not None and NodeKind(kind) is not node.kind:
        raise ValueError(f"Node {path!r} is a {node.kind.value}, not a {NodeKind(kind).value}")

    updated = dict(selection)
    if node.kind is NodeKind.BLOB:
        updated[node.path] = not selection.get(node.path, False)
        return updated

    target = node_status(node, selection) is not SelectionStatus.CHECKED
    for leaf in iter_leaves(node):
        updated[leaf.path] = target
    return updated


def select_by_predicate(tree: Node, predicate: Callable[[Node], bool]) -> SelectionState:
    """Assign every leaf the result of `predicate`."""
    return {leaf.path: bool(predicate(leaf)) for leaf in iter_leaves(tree)}


def select_all(tree: Node) -> SelectionState:
    return select_by_predicate(tree, lambda _: True)


def select_none(tree: Node) -> SelectionState:
    return select_by_predicate(tree, lambda _: False)


def select_code(tree: Node, extensions: Collection[str] = DEFAULT_CODE_EXTENSIONS) -> SelectionState:
    """Select exactly the files whose extension is a known code extension."""
    return select_by_predicate(tree, code_file_predicate(extensions))


def initial_selection(tree: Node, extensions: Collection[str] = DEFAULT_CODE_EXTENSIONS) -> SelectionState:
    """Selection applied right after a repository is loaded."""
    return select_code(tree, extensions)


def selected_leaves(tree: Node, selection: SelectionState) -> list[Node]:
    """Return selected files in structure order."""
    return [leaf for leaf in iter_leaves(tree) if selection.get(leaf.path) is True]
