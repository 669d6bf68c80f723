"""End-to-end flow: list a repository, then pack the selected files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from repopacker.config import PackConfig
from repopacker.core.selection import initial_selection, selected_leaves
from repopacker.core.tree import build_tree
from repopacker.core.types import Node, RepoDetails, RepoEntry, SelectionState
from repopacker.errors import EmptySelectionError, InvalidListingError
from repopacker.pack.assemble import assemble
from repopacker.pack.fetch import ContentRecord, ContentSource, FetchFailure, FetchOutcome, FetchSuccess, fetch_all
from repopacker.pack.overview import build_bundle_overview
from repopacker.pack.structure import render
from repopacker.pack.tokens import TokenCounts, count_bundle_tokens

logger = logging.getLogger(__name__)


class RepositoryLister(Protocol):
    async def list_entries(
        self, owner: str, repo: str, revision: str | None = None, subpath: str | None = None
    ) -> list[RepoEntry]: ...


@dataclass(frozen=True)
class RepositorySnapshot:
    """Result of one fetch cycle.

    The tree never changes after construction; `selection` is the initial
    selection and callers keep their own edited copies.
    """

    details: RepoDetails
    entries: tuple[RepoEntry, ...]
    tree: Node
    selection: SelectionState


@dataclass(frozen=True)
class BundleResult:
    """Generated bundle plus what went into it.

    Attributes
    ----------
    text
        The assembled bundle.
    records
        Contents included in the bundle, in bundle order.
    failures
        Selected files that could not be fetched.
    overview
        Counters from `repopacker.pack.overview.build_bundle_overview`.
    tokens
        Token counts, or None when counting is disabled.
    """

    text: str
    records: tuple[ContentRecord, ...]
    failures: tuple[FetchFailure, ...]
    overview: dict[str, Any]
    tokens: TokenCounts | None = None


async def load_repository(
    client: RepositoryLister, details: RepoDetails, *, config: PackConfig | None = None
) -> RepositorySnapshot:
    """List a repository and build its tree and initial selection.

    Raises
    ------
    InvalidListingError
        If the listing is malformed or contains no entries.
    RepositoryAPIError
        If the hosting API rejects a request.
    """
    config = config or PackConfig()
    entries = await client.list_entries(details.owner, details.repo, details.ref, details.path)
    if not entries:
        raise InvalidListingError(f"Repository listing is empty: {details.label}")

    tree = build_tree(entries)
    selection = initial_selection(tree, config.code_extensions)
    logger.info(
        "Loaded %s: %d entries, %d files preselected",
        details.label,
        len(entries),
        sum(1 for v in selection.values() if v),
    )
    return RepositorySnapshot(details=details, entries=tuple(entries), tree=tree, selection=selection)


async def generate_bundle(
    source: ContentSource,
    snapshot: RepositorySnapshot,
    selection: SelectionState,
    *,
    config: PackConfig | None = None,
) -> BundleResult:
    """Fetch the selected files and assemble the bundle.

    Parameters
    ----------
    source
        Content source for selected files.
    snapshot
        Repository loaded by `load_repository`.
    selection
        Current selection over ``snapshot.tree``.
    config
        Settings; defaults to `PackConfig()`.

    Returns
    -------
    BundleResult
        Bundle text with per-file failures reported separately.

    Raises
    ------
    EmptySelectionError
        If no file is selected. Nothing is fetched in that case.
    """
    config = config or PackConfig()
    leaves = selected_leaves(snapshot.tree, selection)
    if not leaves:
        raise EmptySelectionError("No files selected")

    outcomes: list[FetchOutcome] = await fetch_all(
        leaves, source, limit=config.concurrency_limit, image_extensions=config.image_extensions
    )
    records = tuple(o.record for o in outcomes if isinstance(o, FetchSuccess))
    failures = tuple(o for o in outcomes if isinstance(o, FetchFailure))

    text = assemble(snapshot.details.label, render(snapshot.tree), records)
    tokens = None
    if config.token_encoding:
        tokens = count_bundle_tokens(records, text, encoding_name=config.token_encoding)
    overview = build_bundle_overview(outcomes=outcomes, bundle_text=text)
    logger.info(
        "Bundle for %s: %d files packed, %d failed, %d chars",
        snapshot.details.label,
        len(records),
        len(failures),
        len(text),
    )
    return BundleResult(text=text, records=records, failures=failures, overview=overview, tokens=tokens)
