# docmirror/source/github.py
"""
GitHub REST API source.

Lists a repository's tree at a branch head and retrieves blob content.
One httpx.Client is shared by every call; httpx clients are safe to use
from the fetcher's worker threads.

Example:
    with GitHubClient(config.github, token=config.resolve_token()) as client:
        entries = client.list_entries(config.primary)
        content = client.blob(entries[0].url)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from docmirror.config.schema import GitHubConfig, RepoSpec
from docmirror.core.document import TreeEntry
from docmirror.core.http import create_api_client, handle_api_error, raise_for_status
from docmirror.exceptions import SourceError
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import GITHUB

logger = get_logger(__name__)

PROVIDER = "github"

# Hourly quota GitHub grants requests without a credential
ANONYMOUS_LIMIT = 60


@dataclass(frozen=True)
class RateLimit:
    """Quota snapshot for the calling credential."""

    limit: int
    remaining: int
    reset: int  # Epoch seconds at which the quota resets

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "RateLimit":
        rate = data.get("rate") or {}
        try:
            return cls(
                limit=int(rate["limit"]),
                remaining=int(rate["remaining"]),
                reset=int(rate["reset"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SourceError(f"Malformed rate limit response: {data!r}") from e

    @property
    def reset_at(self) -> datetime:
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    def reset_seconds(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        return math.ceil((self.reset_at - now).total_seconds())

    def reset_minutes(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now(timezone.utc)
        return math.ceil((self.reset_at - now).total_seconds() / 60)

    @property
    def is_unauthenticated(self) -> bool:
        return self.limit <= ANONYMOUS_LIMIT

    def describe(self, now: Optional[datetime] = None) -> str:
        return (
            f"Rate limit {self.remaining} / {self.limit} requests per hour remaining. "
            f"Reset in {self.reset_minutes(now)} minutes."
        )


class GitHubClient:
    """
    Minimal GitHub API client for tree listings and blob content.

    Extra keyword arguments go to httpx.Client (tests pass a MockTransport).
    """

    def __init__(self, config: GitHubConfig, token: Optional[str] = None, **client_kwargs: Any):
        self.config = config
        self.owner = config.owner
        self._client = create_api_client(
            base_url=config.api_url,
            api_key=token,
            timeout=config.timeout,
            auth_scheme="token",
            **client_kwargs,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise handle_api_error(exc, provider=PROVIDER, endpoint=url) from exc

        raise_for_status(response, provider=PROVIDER, endpoint=url)

        try:
            data = response.json()
        except ValueError as e:
            raise SourceError(f"Response from {url} is not JSON") from e

        if not isinstance(data, dict):
            raise SourceError(f"Response from {url} is not a JSON object")
        return data

    def rate_limit(self) -> RateLimit:
        return RateLimit.from_api(self._get_json("/rate_limit"))

    def branch_head(self, repo: str, branch: str = "master") -> str:
        """Return the commit SHA at the head of a branch."""
        data = self._get_json(f"/repos/{self.owner}/{repo}/branches/{branch}")
        try:
            return str(data["commit"]["sha"])
        except (KeyError, TypeError) as e:
            raise SourceError(f"No commit SHA for {self.owner}/{repo}@{branch}") from e

    def tree(self, repo: str, sha: str) -> List[TreeEntry]:
        """Return the flat recursive tree listing for a tree or commit SHA."""
        data = self._get_json(
            f"/repos/{self.owner}/{repo}/git/trees/{sha}",
            params={"recursive": "true"},
        )

        rows = data.get("tree")
        if not isinstance(rows, list):
            raise SourceError(f"Tree listing for {self.owner}/{repo}@{sha} has no 'tree' list")

        if data.get("truncated"):
            logger.warning(
                f"{GITHUB} Tree listing for {self.owner}/{repo} was truncated by GitHub; "
                f"some documents will be missing"
            )

        return [TreeEntry.from_api(row) for row in rows]

    def list_entries(self, repo: RepoSpec) -> List[TreeEntry]:
        """Branch head lookup followed by the recursive tree listing."""
        logger.info(f"{GITHUB} Fetching root SHA for '{repo.name}' repo...")
        sha = self.branch_head(repo.name, repo.branch)

        logger.info(f"{GITHUB} Fetching nodes from '{repo.name}' repo...")
        entries = self.tree(repo.name, sha)
        logger.debug(f"{GITHUB} {repo.name}@{sha[:7]}: {len(entries)} nodes")
        return entries

    def blob(self, url: str) -> str:
        """Return the base64-encoded content behind a blob URL."""
        data = self._get_json(url)
        content = data.get("content")
        if not isinstance(content, str):
            raise SourceError(f"Blob {url} has no content")
        return content


__all__ = ["ANONYMOUS_LIMIT", "RateLimit", "GitHubClient"]
