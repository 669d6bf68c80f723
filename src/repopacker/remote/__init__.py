"""Remote repository access (GitHub)."""

from __future__ import annotations

from .entries import GitTreeItem, parse_entries
from .github import GitHubClient

__all__ = ["GitHubClient", "GitTreeItem", "parse_entries"]
