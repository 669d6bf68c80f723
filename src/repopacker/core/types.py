"""Core datatypes for repository trees and selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    """Kind of a tree node, using the git object names.

    Attributes
    ----------
    TREE
        Directory; may have zero or more children.
    BLOB
        File; never has children in a well-formed listing.
    """

    TREE = "tree"
    BLOB = "blob"


class SelectionStatus(str, Enum):
    """Tri-state status derived for every node.

    Attributes
    ----------
    CHECKED
        Leaf is selected, or every child of a directory is checked.
    UNCHECKED
        Leaf is not selected, or every child of a directory is unchecked.
    INDETERMINATE
        Directory whose children disagree.
    """

    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class ContentRef:
    """Opaque locator for a blob's content.

    Attributes
    ----------
    sha
        Git object id of the blob.
    url
        API address the content is fetched from.
    """

    sha: str
    url: str


@dataclass(frozen=True)
class RepoEntry:
    """One record of a flat, recursive repository listing."""

    path: str
    kind: NodeKind
    content_ref: ContentRef | None = None


@dataclass(frozen=True)
class Node:
    """One path segment of a repository tree.

    Attributes
    ----------
    name
        The segment's local label ("root" for the root node).
    path
        Slash-joined path from the root; empty for the root.
    kind
        Directory or file.
    content_ref
        Content locator taken from the listing record of this path, if any.
    children
        Child nodes keyed by segment name. Unordered; see
        `repopacker.core.tree.sorted_children`.
    """

    name: str
    path: str
    kind: NodeKind
    content_ref: ContentRef | None = None
    children: dict[str, Node] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.TREE


@dataclass(frozen=True)
class RepoDetails:
    """Already parsed address of a repository location."""

    owner: str
    repo: str
    ref: str | None = None
    path: str | None = None

    @property
    def label(self) -> str:
        return f"{self.owner}/{self.repo}"


SelectionState = dict[str, bool]
SelectionStatusMap = dict[str, SelectionStatus]


__all__ = [
    "ContentRef",
    "Node",
    "NodeKind",
    "RepoDetails",
    "RepoEntry",
    "SelectionState",
    "SelectionStatus",
    "SelectionStatusMap",
]
