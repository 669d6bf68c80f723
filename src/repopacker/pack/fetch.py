"""Bounded-concurrency retrieval of selected file contents.

Selected files are fetched in fixed-size windows. Windows run one after
another; the items of a window run concurrently and the window is done only
when every item has settled. At most `limit` requests are therefore in flight
at any moment.

Each item yields an explicit outcome: a `FetchSuccess` carrying a text or
binary record, or a `FetchFailure` naming the path and the cause. A failing
item never aborts its window or the windows after it.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from typing import Protocol

import aiohttp

from repopacker.core.classify import DEFAULT_IMAGE_EXTENSIONS, has_extension
from repopacker.core.types import ContentRef, Node
from repopacker.errors import RepositoryAPIError

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 10
FALLBACK_MIME_TYPE = "application/octet-stream"

# Failures isolated to a single item; anything else propagates.
_ITEM_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError, RepositoryAPIError)


@dataclass(frozen=True)
class RawContent:
    """Bytes returned by a content source plus its content-type hint."""

    data: bytes
    content_type: str | None = None


class ContentSource(Protocol):
    """Anything able to retrieve the bytes behind a `ContentRef`."""

    async def fetch_content(self, ref: ContentRef) -> RawContent: ...


@dataclass(frozen=True)
class TextContent:
    """Decoded text of a file."""

    path: str
    text: str


@dataclass(frozen=True)
class BinaryContent:
    """Binary file captured as a self-describing payload.

    Attributes
    ----------
    path
        File path in the repository.
    encoded_data
        ``data:<mime>;base64,<payload>`` URL.
    mime_type
        MIME type of the payload.
    """

    path: str
    encoded_data: str
    mime_type: str


ContentRecord = TextContent | BinaryContent


@dataclass(frozen=True)
class FetchSuccess:
    record: ContentRecord

    @property
    def path(self) -> str:
        return self.record.path


@dataclass(frozen=True)
class FetchFailure:
    """An item that could not be fetched.

    Attributes
    ----------
    path
        File path in the repository.
    cause
        Human-readable reason.
    error
        Underlying exception, if any.
    """

    path: str
    cause: str
    error: BaseException | None = field(default=None, compare=False, repr=False)


FetchOutcome = FetchSuccess | FetchFailure


async def fetch_all(
    leaves: Sequence[Node],
    source: ContentSource,
    *,
    limit: int = DEFAULT_CONCURRENCY_LIMIT,
    image_extensions: Collection[str] = DEFAULT_IMAGE_EXTENSIONS,
) -> list[FetchOutcome]:
    """Fetch the content of every leaf, `limit` at a time.

    Parameters
    ----------
    leaves
        Selected file nodes, in the order results should be returned.
    source
        Content source, typically `repopacker.remote.GitHubClient`.
    limit
        Window size, i.e. the maximum number of outstanding requests.
    image_extensions
        Extensions handled as binary content.

    Returns
    -------
    list[FetchOutcome]
        One outcome per leaf, in input order.

    Raises
    ------
    ValueError
        If `limit` is smaller than 1.
    """
    if limit < 1:
        raise ValueError(f"Concurrency limit must be >= 1, got {limit}")

    items = list(leaves)
    outcomes: list[FetchOutcome] = []
    windows = (len(items) + limit - 1) // limit
    for number, start in enumerate(range(0, len(items), limit), start=1):
        window = items[start : start + limit]
        logger.debug("Fetching window %d/%d (%d files)", number, windows, len(window))
        settled = await asyncio.gather(
            *(_fetch_one(leaf, source, image_extensions) for leaf in window),
            return_exceptions=True,
        )
        for result in settled:
            if isinstance(result, BaseException):
                raise result
        outcomes.extend(settled)

    for outcome in outcomes:
        if isinstance(outcome, FetchFailure):
            logger.warning("Failed to fetch %s: %s", outcome.path, outcome.cause)
    return outcomes


async def _fetch_one(leaf: Node, source: ContentSource, image_extensions: Collection[str]) -> FetchOutcome:
    if leaf.content_ref is None:
        return FetchFailure(path=leaf.path, cause="no content reference")
    try:
        raw = await source.fetch_content(leaf.content_ref)
    except _ITEM_ERRORS as e:
        return FetchFailure(path=leaf.path, cause=_describe(e), error=e)

    if has_extension(leaf.path, image_extensions):
        return FetchSuccess(encode_binary(leaf.path, raw))
    return FetchSuccess(TextContent(path=leaf.path, text=raw.data.decode("utf-8", errors="replace")))


def encode_binary(path: str, raw: RawContent) -> BinaryContent:
    """Wrap raw bytes in a base64 data URL."""
    mime_type = resolve_mime_type(path, raw.content_type)
    payload = base64.b64encode(raw.data).decode("ascii")
    return BinaryContent(path=path, encoded_data=f"data:{mime_type};base64,{payload}", mime_type=mime_type)


def resolve_mime_type(path: str, content_type: str | None) -> str:
    """Pick a MIME type: an ``image/*`` hint, else a guess from the name, else the hint."""
    hint = content_type.split(";", 1)[0].strip().lower() if content_type else ""
    if hint.startswith("image/"):
        return hint
    guessed, _ = mimetypes.guess_type(path)
    return guessed or hint or FALLBACK_MIME_TYPE


def _describe(error: BaseException) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "request timed out"
    return str(error) or type(error).__name__
