"""Tree and selection primitives.

This package contains the pure, I/O-free parts of repopacker:
- node/record datatypes
- tree materialization from a flat listing
- tri-state selection derivation and edits
- extension classifiers
"""

from __future__ import annotations

from .types import (
    ContentRef,
    Node,
    NodeKind,
    RepoDetails,
    RepoEntry,
    SelectionState,
    SelectionStatus,
    SelectionStatusMap,
)
from .tree import build_tree, find_node, iter_leaves, iter_nodes, sorted_children
from .selection import (
    compute_status_map,
    initial_selection,
    node_status,
    select_all,
    select_by_predicate,
    select_code,
    select_none,
    selected_leaves,
    toggle,
)
from .classify import DEFAULT_CODE_EXTENSIONS, DEFAULT_IMAGE_EXTENSIONS, extension_of

__all__ = [
    "ContentRef",
    "Node",
    "NodeKind",
    "RepoDetails",
    "RepoEntry",
    "SelectionState",
    "SelectionStatus",
    "SelectionStatusMap",
    "build_tree",
    "find_node",
    "iter_leaves",
    "iter_nodes",
    "sorted_children",
    "compute_status_map",
    "initial_selection",
    "node_status",
    "select_all",
    "select_by_predicate",
    "select_code",
    "select_none",
    "selected_leaves",
    "toggle",
    "DEFAULT_CODE_EXTENSIONS",
    "DEFAULT_IMAGE_EXTENSIONS",
    "extension_of",
]
