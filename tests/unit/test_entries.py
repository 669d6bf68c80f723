"""Unit tests for listing validation."""

from __future__ import annotations

from typing import Any

import pytest

from repopacker.core.types import ContentRef, NodeKind, RepoEntry
from repopacker.errors import InvalidListingError
from repopacker.remote.entries import parse_entries

pytestmark = pytest.mark.unit


def _item(path: str, kind: str = "blob", **extra: Any) -> dict[str, Any]:
    item: dict[str, Any] = {"path": path, "type": kind, "sha": f"sha-{path}", "mode": "100644"}
    if kind == "blob":
        item["url"] = f"https://api.test/blobs/{path}"
        item["size"] = 10
    item.update(extra)
    return item


class TestParseEntries:
    """Tests for parse_entries function."""

    def test_blobs_and_trees(self) -> None:
        """Test blobs carry a content ref and trees do not."""
        entries = parse_entries([_item("src", "tree"), _item("src/a.py")])
        assert entries == [
            RepoEntry(path="src", kind=NodeKind.TREE),
            RepoEntry(
                path="src/a.py",
                kind=NodeKind.BLOB,
                content_ref=ContentRef(sha="sha-src/a.py", url="https://api.test/blobs/src/a.py"),
            ),
        ]

    def test_submodules_are_skipped(self) -> None:
        """Test commit entries are dropped."""
        entries = parse_entries([_item("vendor/lib", "commit"), _item("a.py")])
        assert [e.path for e in entries] == ["a.py"]

    def test_not_a_list(self) -> None:
        """Test non-list payloads are rejected."""
        with pytest.raises(InvalidListingError, match="must be a list"):
            parse_entries({"tree": []})

    def test_none_payload(self) -> None:
        """Test a missing listing is rejected."""
        with pytest.raises(InvalidListingError):
            parse_entries(None)

    def test_missing_path(self) -> None:
        """Test records without a path are rejected with their index."""
        with pytest.raises(InvalidListingError, match="index 1"):
            parse_entries([_item("a.py"), {"type": "blob", "url": "u"}])

    def test_unknown_type(self) -> None:
        """Test unknown record types are rejected."""
        with pytest.raises(InvalidListingError):
            parse_entries([_item("a.py", "symlink")])

    def test_duplicate_paths(self) -> None:
        """Test repeated paths are rejected."""
        with pytest.raises(InvalidListingError, match="Duplicate"):
            parse_entries([_item("a.py"), _item("a.py")])

    def test_blob_without_url(self) -> None:
        """Test blobs must have a content URL."""
        with pytest.raises(InvalidListingError, match="without content URL"):
            parse_entries([{"path": "a.py", "type": "blob", "sha": "x"}])

    def test_empty_listing(self) -> None:
        """Test empty listings fail fast."""
        with pytest.raises(InvalidListingError, match="empty"):
            parse_entries([])

    def test_only_submodules_is_empty(self) -> None:
        """Test a listing with nothing usable counts as empty."""
        with pytest.raises(InvalidListingError, match="empty"):
            parse_entries([_item("vendor", "commit")])

    def test_allow_empty(self) -> None:
        """Test empty listings can be explicitly allowed."""
        assert parse_entries([], allow_empty=True) == []

    def test_invalid_error_is_value_error(self) -> None:
        """Test InvalidListingError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_entries("nope")
