"""Bundle production: structure index, content retrieval and assembly."""

from __future__ import annotations

from .fetch import (
    BinaryContent,
    ContentRecord,
    ContentSource,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    RawContent,
    TextContent,
    fetch_all,
)
from .structure import render
from .assemble import assemble
from .overview import build_bundle_overview

__all__ = [
    "BinaryContent",
    "ContentRecord",
    "ContentSource",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "RawContent",
    "TextContent",
    "fetch_all",
    "render",
    "assemble",
    "build_bundle_overview",
]
