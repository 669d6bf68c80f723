"""Async GitHub REST client for repository listings and file contents."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import aiohttp

from repopacker.config import PackConfig
from repopacker.core.types import ContentRef, RepoEntry
from repopacker.errors import InvalidListingError, RepositoryAPIError
from repopacker.pack.fetch import RawContent
from repopacker.remote.entries import parse_entries

logger = logging.getLogger(__name__)

ACCEPT_JSON = "application/vnd.github+json"
ACCEPT_OBJECT = "application/vnd.github.object+json"
ACCEPT_RAW = "application/vnd.github.v3.raw"
USER_AGENT = "repopacker"


class GitHubClient:
    """GitHub API client with explicit credential and session lifecycle.

    Use as an async context manager. A session passed in by the caller is
    used as-is and left open on exit; otherwise the client creates and closes
    its own.

    Parameters
    ----------
    token
        Personal access token, or None for anonymous access.
    config
        Settings providing the API base URL and request timeout.
    session
        Optional caller-owned session.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        config: PackConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.config = config or PackConfig()
        self._token = token or None
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> GitHubClient:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": USER_AGENT})
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("GitHubClient must be used inside 'async with'")
        return self._session

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {"Accept": accept}
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def _repo_url(self, owner: str, repo: str, *tail: str) -> str:
        parts = [self.config.api_base, "repos", quote(owner, safe=""), quote(repo, safe=""), *tail]
        return "/".join(parts)

    async def _get_json(
        self, url: str, *, what: str, accept: str = ACCEPT_JSON, params: dict[str, str] | None = None
    ) -> Any:
        async with self.session.get(url, params=params, headers=self._headers(accept)) as response:
            if response.status != 200:
                raise RepositoryAPIError(what, status=response.status, url=url)
            return await response.json(content_type=None)

    async def _get_object(self, url: str, **kwargs: Any) -> dict[str, Any]:
        data = await self._get_json(url, **kwargs)
        if not isinstance(data, dict):
            raise InvalidListingError(f"Expected a JSON object from {url}, got {type(data).__name__}")
        return data

    async def fetch_repo_info(self, owner: str, repo: str) -> dict[str, Any]:
        """Return the repository metadata object."""
        return await self._get_object(self._repo_url(owner, repo), what="Failed to fetch repo info")

    async def default_branch(self, owner: str, repo: str) -> str:
        info = await self.fetch_repo_info(owner, repo)
        branch = info.get("default_branch")
        if not isinstance(branch, str) or not branch:
            raise InvalidListingError(f"Repository {owner}/{repo} reports no default branch")
        return branch

    async def resolve_tree_sha(self, owner: str, repo: str, ref: str | None, path: str = "") -> str:
        """Resolve the object id of `path` at `ref` (the repository root if empty)."""
        url = self._repo_url(owner, repo, "contents", quote(path.strip("/"), safe="/"))
        params = {"ref": ref} if ref else None
        data = await self._get_object(url, what="Path not found or API error", accept=ACCEPT_OBJECT, params=params)
        sha = data.get("sha")
        if not isinstance(sha, str) or not sha:
            raise InvalidListingError(f"No object id for {path or '/'!r} in {owner}/{repo}")
        return sha

    async def fetch_tree(self, owner: str, repo: str, sha: str) -> Any:
        """Return the raw recursive listing of tree `sha`."""
        url = self._repo_url(owner, repo, "git", "trees", quote(sha, safe=""))
        data = await self._get_object(url, what="Repository tree fetch failed", params={"recursive": "1"})
        if data.get("truncated"):
            logger.warning("Listing of %s/%s@%s was truncated by the API", owner, repo, sha)
        return data.get("tree")

    async def list_entries(
        self, owner: str, repo: str, revision: str | None = None, subpath: str | None = None
    ) -> list[RepoEntry]:
        """List every entry below `subpath` at `revision`.

        Parameters
        ----------
        owner, repo
            Repository coordinates.
        revision
            Branch, tag or commit; the default branch when None.
        subpath
            Directory to list; the repository root when None or empty.

        Returns
        -------
        list[RepoEntry]
            Validated records with paths relative to `subpath`.

        Raises
        ------
        RepositoryAPIError
            If any API call answers with a non-success status.
        InvalidListingError
            If the listing or an API response body is malformed, or the
            listing is empty.
        """
        branch = revision or await self.default_branch(owner, repo)
        sha = await self.resolve_tree_sha(owner, repo, branch, subpath or "")
        raw = await self.fetch_tree(owner, repo, sha)
        entries = parse_entries(raw)
        logger.info("Listed %d entries from %s/%s@%s", len(entries), owner, repo, branch)
        return entries

    async def fetch_content(self, ref: ContentRef) -> RawContent:
        """Download the raw bytes behind `ref`."""
        async with self.session.get(ref.url, headers=self._headers(ACCEPT_RAW)) as response:
            if response.status != 200:
                raise RepositoryAPIError("Content fetch failed", status=response.status, url=ref.url)
            data = await response.read()
            return RawContent(data=data, content_type=response.headers.get("Content-Type"))
