# tests/conftest.py
"""
Shared fixtures.

The GitHub API is replaced by FakeGitHub, an in-memory set of repositories
served through httpx.MockTransport, so every test runs offline.

Test Tiers:
- tier1: pure logic (paths, filter, steps, config schema)
- tier2: fake network or temporary directories (everything else)
"""

from __future__ import annotations

import base64
import hashlib
import posixpath
import time
from typing import Dict, Iterable, List, Optional, Set, Union

import httpx
import pytest

from docmirror.config.schema import GitHubConfig, MirrorConfig, OutputConfig, RepoSpec
from docmirror.core.document import TreeEntry
from docmirror.source.github import GitHubClient

API_URL = "https://api.github.test"
OWNER = "netdata"

TIER1_MODULES = {
    "test_paths",
    "test_filter",
    "test_sanitize",
    "test_links",
    "test_relocate_and_readme",
    "test_transform_pipeline",
    "test_config",
}


def pytest_collection_modifyitems(items):
    for item in items:
        module = item.module.__name__.rsplit(".", 1)[-1]
        item.add_marker(pytest.mark.tier1 if module in TIER1_MODULES else pytest.mark.tier2)


# =============================================================================
# Fake GitHub API
# =============================================================================


def _sha(*parts: str) -> str:
    return hashlib.sha1("/".join(parts).encode("utf-8")).hexdigest()


class FakeGitHub:
    """
    Minimal in-memory GitHub REST API.

    Serves /rate_limit, branches, recursive git trees and git blobs for
    repositories registered with add_repo().
    """

    def __init__(self, owner: str = OWNER):
        self.owner = owner
        self.repos: Dict[str, dict] = {}
        self.requests: List[httpx.Request] = []
        self.limit = 5000
        self.remaining = 4990
        self.reset = int(time.time()) + 30 * 60
        self.broken_blobs: Set[str] = set()  # paths answered with HTTP 500
        self.garbled_blobs: Set[str] = set()  # paths answered with non-base64 content

    def add_repo(
        self,
        name: str,
        files: Dict[str, Union[str, bytes]],
        branch: str = "master",
        truncated: bool = False,
    ) -> None:
        commit = _sha(name, "commit", branch)
        tree: List[dict] = []
        blobs: Dict[str, bytes] = {}
        dirs: Set[str] = set()

        for path, content in files.items():
            parent = posixpath.dirname(path)
            while parent and parent not in dirs:
                dirs.add(parent)
                parent = posixpath.dirname(parent)

        for directory in sorted(dirs):
            tree.append(
                {
                    "path": directory,
                    "mode": "040000",
                    "type": "tree",
                    "sha": _sha(name, directory),
                    "url": f"{API_URL}/repos/{self.owner}/{name}/git/trees/{_sha(name, directory)}",
                }
            )

        for path, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            sha = _sha(name, path)
            blobs[sha] = data
            tree.append(
                {
                    "path": path,
                    "mode": "100644",
                    "type": "blob",
                    "sha": sha,
                    "size": len(data),
                    "url": f"{API_URL}/repos/{self.owner}/{name}/git/blobs/{sha}",
                }
            )

        self.repos[name] = {
            "branch": branch,
            "commit": commit,
            "tree": tree,
            "blobs": blobs,
            "paths": {_sha(name, p): p for p in files},
            "truncated": truncated,
        }

    def entries(self, name: str) -> List[TreeEntry]:
        return [TreeEntry.from_api(row) for row in self.repos[name]["tree"]]

    def blob_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if "/git/blobs/" in r.url.path]

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")

        if parts == ["rate_limit"]:
            rate = {"limit": self.limit, "remaining": self.remaining, "reset": self.reset}
            return httpx.Response(200, json={"resources": {"core": rate}, "rate": rate})

        if len(parts) < 4 or parts[0] != "repos" or parts[1] != self.owner:
            return self._not_found()

        repo = self.repos.get(parts[2])
        if repo is None:
            return self._not_found()

        if parts[3] == "branches" and len(parts) == 5:
            if parts[4] != repo["branch"]:
                return self._not_found()
            return httpx.Response(200, json={"name": parts[4], "commit": {"sha": repo["commit"]}})

        if parts[3:5] == ["git", "trees"] and len(parts) == 6:
            if parts[5] != repo["commit"]:
                return self._not_found()
            return httpx.Response(
                200,
                json={"sha": repo["commit"], "tree": repo["tree"], "truncated": repo["truncated"]},
            )

        if parts[3:5] == ["git", "blobs"] and len(parts) == 6:
            sha = parts[5]
            if sha not in repo["blobs"]:
                return self._not_found()
            path = repo["paths"][sha]
            if path in self.broken_blobs:
                return httpx.Response(500, json={"message": "Server Error"})
            if path in self.garbled_blobs:
                content = "this is not base64!"
            else:
                content = base64.encodebytes(repo["blobs"][sha]).decode("ascii")
            return httpx.Response(
                200, json={"sha": sha, "encoding": "base64", "content": content}
            )

        return self._not_found()

    @staticmethod
    def _not_found() -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(api_url=API_URL, owner=OWNER)


@pytest.fixture
def github_client(fake_github: FakeGitHub, github_config: GitHubConfig):
    client = GitHubClient(
        github_config,
        token="test-token",
        transport=httpx.MockTransport(fake_github.handler),
    )
    yield client
    client.close()


@pytest.fixture
def make_config(github_config, tmp_path):
    """Factory for a MirrorConfig writing under tmp_path/site/docs."""

    def _make(
        repos: Optional[Iterable[RepoSpec]] = None,
        excluded_paths: Optional[List[str]] = None,
        preserve: Optional[List[str]] = None,
        max_workers: int = 4,
    ) -> MirrorConfig:
        kwargs = {}
        if excluded_paths is not None:
            kwargs["excluded_paths"] = excluded_paths
        return MirrorConfig(
            github=github_config,
            repos=list(repos or [RepoSpec(name="netdata")]),
            output=OutputConfig(root=tmp_path / "site" / "docs", preserve=preserve or []),
            max_workers=max_workers,
            **kwargs,
        )

    return _make
