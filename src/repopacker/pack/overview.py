"""Compact counters describing a generated bundle.

Kept deliberately small: counts only, no per-file listing. Failed items are
listed by path since they are missing from the bundle body.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from repopacker.pack.fetch import BinaryContent, FetchFailure, FetchOutcome, FetchSuccess, TextContent


def build_bundle_overview(*, outcomes: Sequence[FetchOutcome], bundle_text: str) -> dict[str, Any]:
    """Summarize fetch outcomes and bundle size.

    Parameters
    ----------
    outcomes
        Per-file fetch outcomes.
    bundle_text
        Assembled bundle.

    Returns
    -------
    dict[str, Any]
        Overview with file counts, failed paths and total characters.
    """
    text_files = 0
    binary_files = 0
    failed: list[str] = []
    for outcome in outcomes:
        if isinstance(outcome, FetchFailure):
            failed.append(outcome.path)
        elif isinstance(outcome, FetchSuccess) and isinstance(outcome.record, BinaryContent):
            binary_files += 1
        elif isinstance(outcome, FetchSuccess) and isinstance(outcome.record, TextContent):
            text_files += 1

    return {
        "selected": {
            "files": len(outcomes),
            "text_files": text_files,
            "binary_files": binary_files,
            "failed_files": len(failed),
        },
        "failed": sorted(failed),
        "total_chars": len(bundle_text),
    }
