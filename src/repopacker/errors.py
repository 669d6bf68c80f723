"""Exception hierarchy for repopacker."""

from __future__ import annotations


class RepoPackerError(Exception):
    """Base class for all repopacker errors."""


class InvalidListingError(RepoPackerError, ValueError):
    """A repository listing is malformed or empty."""


class EmptySelectionError(RepoPackerError, ValueError):
    """Bundle generation was requested with no selected files."""


class UnknownPathError(RepoPackerError, LookupError):
    """A path does not name any node of the tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found in tree: {path!r}")
        self.path = path


class RepositoryAPIError(RepoPackerError):
    """The hosting API answered with a non-success status.

    Attributes
    ----------
    status
        HTTP status code returned by the API.
    url
        Requested URL.
    """

    def __init__(self, message: str, *, status: int, url: str) -> None:
        super().__init__(f"{message}: {status}")
        self.status = status
        self.url = url
