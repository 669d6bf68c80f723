"""Validation of raw git-tree listings into `RepoEntry` records."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from repopacker.core.types import ContentRef, NodeKind, RepoEntry
from repopacker.errors import InvalidListingError

logger = logging.getLogger(__name__)


class GitTreeItem(BaseModel):
    """One item of a ``git/trees/{sha}?recursive=1`` response.

    Attributes
    ----------
    path
        Path relative to the listed tree.
    type
        ``tree``, ``blob`` or ``commit`` (submodule).
    sha
        Object id.
    url
        API URL of the object.
    size
        Blob size in bytes, absent for trees.
    """

    path: str
    type: Literal["tree", "blob", "commit"]
    sha: str = ""
    url: str | None = None
    size: int | None = None

    model_config = {"frozen": True, "extra": "ignore"}


def parse_entries(payload: Any, *, allow_empty: bool = False) -> list[RepoEntry]:
    """Validate a raw listing and convert it to `RepoEntry` records.

    Submodule (``commit``) items are skipped. Trees carry no content ref.

    Parameters
    ----------
    payload
        Decoded JSON list of listing items.
    allow_empty
        Accept a listing without any usable entry.

    Returns
    -------
    list[RepoEntry]
        Records in listing order.

    Raises
    ------
    InvalidListingError
        If the payload is not a list, a record is malformed, a blob has no
        URL, a path is repeated, or (unless `allow_empty`) nothing is left.
    """
    if not isinstance(payload, list):
        raise InvalidListingError(f"Repository listing must be a list, got {type(payload).__name__}")

    entries: list[RepoEntry] = []
    seen: set[str] = set()
    for index, raw in enumerate(payload):
        try:
            item = GitTreeItem.model_validate(raw)
        except ValidationError as e:
            raise InvalidListingError(f"Malformed listing record at index {index}") from e

        if item.type == "commit":
            logger.debug("Skipping submodule entry %s", item.path)
            continue
        if item.path in seen:
            raise InvalidListingError(f"Duplicate path in listing: {item.path}")
        seen.add(item.path)

        if item.type == "blob":
            if not item.url:
                raise InvalidListingError(f"Blob without content URL: {item.path}")
            entries.append(RepoEntry(path=item.path, kind=NodeKind.BLOB, content_ref=ContentRef(item.sha, item.url)))
        else:
            entries.append(RepoEntry(path=item.path, kind=NodeKind.TREE))

    if not entries and not allow_empty:
        raise InvalidListingError("Repository listing is empty")
    return entries
