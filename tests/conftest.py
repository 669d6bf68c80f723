"""Shared test fixtures for repopacker tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from repopacker.core.tree import build_tree
from repopacker.core.types import ContentRef, Node, NodeKind, RepoEntry
from repopacker.pack.fetch import RawContent

BLOB_URL = "https://api.test/blobs/{path}"


def blob(path: str) -> RepoEntry:
    return RepoEntry(path=path, kind=NodeKind.BLOB, content_ref=ContentRef(sha=f"sha-{path}", url=BLOB_URL.format(path=path)))


def tree(path: str) -> RepoEntry:
    return RepoEntry(path=path, kind=NodeKind.TREE)


class FakeSource:
    """In-memory content source that records concurrency.

    Values in `contents` are bytes (returned) or exceptions (raised), keyed by
    file path.
    """

    def __init__(
        self,
        contents: dict[str, bytes | BaseException],
        *,
        content_types: dict[str, str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.contents = contents
        self.content_types = content_types or {}
        self.delays = delays or {}
        self.in_flight = 0
        self.max_in_flight = 0
        self.events: list[tuple[str, str]] = []

    async def fetch_content(self, ref: ContentRef) -> RawContent:
        path = ref.url.removeprefix(BLOB_URL.format(path=""))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        self.events.append(("start", path))
        try:
            await asyncio.sleep(self.delays.get(path, 0))
            value = self.contents[path]
            if isinstance(value, BaseException):
                raise value
            return RawContent(data=value, content_type=self.content_types.get(path))
        finally:
            self.in_flight -= 1
            self.events.append(("end", path))


@pytest.fixture
def make_blob() -> Callable[[str], RepoEntry]:
    """Factory for blob listing records."""
    return blob


@pytest.fixture
def make_tree_entry() -> Callable[[str], RepoEntry]:
    """Factory for directory listing records."""
    return tree


@pytest.fixture
def fake_source() -> type[FakeSource]:
    """The in-memory content source class."""
    return FakeSource


@pytest.fixture
def sample_entries() -> list[RepoEntry]:
    """A small listing in deliberately unsorted order."""
    return [
        blob("src/main.py"),
        blob("README.md"),
        tree("src"),
        blob("src/utils/helpers.py"),
        blob("docs/index.md"),
        blob("a.txt"),
        blob("src/__init__.py"),
        tree("empty"),
    ]


@pytest.fixture
def sample_tree(sample_entries: list[RepoEntry]) -> Node:
    """Tree built from `sample_entries`."""
    return build_tree(sample_entries)
