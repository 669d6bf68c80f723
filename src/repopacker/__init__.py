"""repopacker: turn a GitHub repository into a selectable tree and a text bundle."""

from __future__ import annotations

from repopacker.config import PackConfig, load_config
from repopacker.core import (
    ContentRef,
    Node,
    NodeKind,
    RepoDetails,
    RepoEntry,
    SelectionState,
    SelectionStatus,
    build_tree,
    compute_status_map,
    select_all,
    select_by_predicate,
    select_code,
    select_none,
    selected_leaves,
    toggle,
)
from repopacker.errors import (
    EmptySelectionError,
    InvalidListingError,
    RepoPackerError,
    RepositoryAPIError,
    UnknownPathError,
)
from repopacker.pack import assemble, fetch_all, render
from repopacker.pipeline import BundleResult, RepositorySnapshot, generate_bundle, load_repository

__version__ = "0.1.0"

__all__ = [
    "PackConfig",
    "load_config",
    "ContentRef",
    "Node",
    "NodeKind",
    "RepoDetails",
    "RepoEntry",
    "SelectionState",
    "SelectionStatus",
    "build_tree",
    "compute_status_map",
    "select_all",
    "select_by_predicate",
    "select_code",
    "select_none",
    "selected_leaves",
    "toggle",
    "EmptySelectionError",
    "InvalidListingError",
    "RepoPackerError",
    "RepositoryAPIError",
    "UnknownPathError",
    "assemble",
    "fetch_all",
    "render",
    "BundleResult",
    "RepositorySnapshot",
    "generate_bundle",
    "load_repository",
]
