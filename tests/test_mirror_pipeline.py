# tests/test_mirror_pipeline.py
"""
End-to-end tests for MirrorPipeline against the fake GitHub API.
"""

import logging
from pathlib import Path

import httpx
import pytest

from docmirror.config.schema import RepoSpec
from docmirror.core.http import NotFoundError
from docmirror.exceptions import BatchError, OutputWriteError
from docmirror.pipeline import mirror as mirror_module
from docmirror.pipeline.mirror import MirrorPipeline, run_mirror
from docmirror.source.github import GitHubClient

NETDATA_FILES = {
    "README.md": "# Netdata\nroot readme",
    "docs/guide.md": "# Title\n[text](./other.md)",
    "docs/other.md": "Other",
    "docs/README.md": "# Docs index",
    ".github/ISSUE_TEMPLATE.md": "template",
    "src/main.c": "int main() {}",
    "collectors/python.d.plugin/README.md": "# Python\n[a](a.md) [gh](https://github.com/netdata)",
}

GO_FILES = {
    "x.md": "X doc",
    "README.md": "# Go\nGo readme",
}

REPOS = [
    RepoSpec(name="netdata"),
    RepoSpec(name="go.d.plugin", prefix="collectors/go.d.plugin/"),
]

EXPECTED = {
    "guide.md": "\n[text](/docs/other.md)",
    "other.md": "Other",
    "collectors/python.d.plugin.md": "\n[a](/docs/collectors/python.d.plugin/a.md) [gh](https://github.com/netdata)",
    "collectors/go.d.plugin/x.md": "X doc",
    "collectors/go.d.plugin.md": "\nGo readme",
}


def _snapshot(root: Path) -> dict:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


def _text(root: Path) -> dict:
    return {k: v.decode("utf-8") for k, v in _snapshot(root).items()}


@pytest.fixture
def repos(fake_github):
    fake_github.add_repo("netdata", NETDATA_FILES)
    fake_github.add_repo("go.d.plugin", GO_FILES)


@pytest.fixture
def pipeline(repos, make_config, github_client):
    return MirrorPipeline(config=make_config(repos=REPOS), client=github_client)


class TestMirrorPipeline:
    def test_end_to_end(self, pipeline):
        result = pipeline.run()
        root = pipeline.writer.root

        assert _text(root) == EXPECTED
        assert result.entries_listed == 14
        assert result.documents_selected == 5
        assert result.documents_written == 5
        assert sorted(p.name for p in result.written) == sorted(Path(k).name for k in EXPECTED)

    def test_only_selected_blobs_are_fetched(self, pipeline, fake_github):
        pipeline.run()

        assert len(fake_github.blob_requests()) == 5

    def test_rate_limit_checked_before_and_after(self, pipeline, fake_github):
        pipeline.run()

        paths = [r.url.path for r in fake_github.requests]
        assert paths[0] == "/rate_limit"
        assert paths[-1] == "/rate_limit"
        assert paths.count("/rate_limit") == 2

    def test_secondary_repository_is_prefixed(self, pipeline):
        entries = pipeline.list_entries()
        paths = [e.path for e in entries]

        assert "collectors/go.d.plugin/x.md" in paths
        assert "x.md" not in paths
        assert paths.index("docs/guide.md") < paths.index("collectors/go.d.plugin/x.md")

    def test_rerun_is_byte_identical(self, pipeline):
        pipeline.run()
        first = _snapshot(pipeline.writer.root)

        pipeline.run()

        assert _snapshot(pipeline.writer.root) == first

    def test_stale_output_removed(self, pipeline):
        root = pipeline.writer.root
        root.mkdir(parents=True)
        (root / "removed-upstream.md").write_text("old")

        pipeline.run()

        assert "removed-upstream.md" not in _text(root)

    def test_preserved_files_kept(self, repos, make_config, github_client):
        config = make_config(repos=REPOS, preserve=["CNAME"])
        root = config.output.root
        root.mkdir(parents=True)
        (root / "CNAME").write_text("learn.netdata.cloud")

        MirrorPipeline(config=config, client=github_client).run()

        assert _text(root)["CNAME"] == "learn.netdata.cloud"

    def test_custom_exclusions(self, repos, make_config, github_client):
        config = make_config(repos=REPOS, excluded_paths=["docs/", "collectors/go.d.plugin/x.md"])

        result = MirrorPipeline(config=config, client=github_client).run()

        assert set(_text(config.output.root)) == {
            "readme.md",
            "collectors/python.d.plugin.md",
            "collectors/go.d.plugin.md",
        }
        assert result.documents_written == 3

    def test_failed_fetch_keeps_previous_output(self, pipeline, fake_github):
        pipeline.run()
        before = _snapshot(pipeline.writer.root)

        fake_github.broken_blobs.add("docs/other.md")
        fake_github.garbled_blobs.add("docs/guide.md")

        with pytest.raises(BatchError) as exc_info:
            pipeline.run()

        assert [item.path for item, _ in exc_info.value.failures] == ["docs/guide.md", "docs/other.md"]
        assert _snapshot(pipeline.writer.root) == before

    def test_missing_repository_aborts_before_writing(self, fake_github, make_config, github_client):
        fake_github.add_repo("netdata", NETDATA_FILES)
        config = make_config(repos=REPOS)

        with pytest.raises(BatchError) as exc_info:
            MirrorPipeline(config=config, client=github_client).run()

        assert isinstance(exc_info.value.exceptions[0], NotFoundError)
        assert not config.output.root.exists()
        assert fake_github.blob_requests() == []

    def test_low_quota_warning(self, pipeline, fake_github, caplog):
        fake_github.remaining = 42

        with caplog.at_level(logging.WARNING):
            pipeline.run()

        assert "Only 42 of 5000" in caplog.text


class TestRunMirror:
    def test_builds_client_from_config_and_closes_it(self, repos, make_config, fake_github, monkeypatch):
        clients = []

        def client_factory(config, token=None):
            client = GitHubClient(config, token=token, transport=httpx.MockTransport(fake_github.handler))
            clients.append(client)
            return client

        monkeypatch.setattr(mirror_module, "GitHubClient", client_factory)
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        config = make_config(repos=REPOS)

        result = run_mirror(config)

        assert result.documents_written == 5
        assert len(clients) == 1
        assert clients[0]._client.is_closed
        assert fake_github.requests[0].headers["Authorization"] == "token env-token"

    def test_client_closed_when_pipeline_construction_fails(self, make_config, fake_github, monkeypatch):
        clients = []

        def client_factory(config, token=None):
            client = GitHubClient(config, token=token, transport=httpx.MockTransport(fake_github.handler))
            clients.append(client)
            return client

        def failing_writer(*args, **kwargs):
            raise OutputWriteError("cannot prepare output")

        monkeypatch.setattr(mirror_module, "GitHubClient", client_factory)
        monkeypatch.setattr(mirror_module, "OutputWriter", failing_writer)

        with pytest.raises(OutputWriteError):
            run_mirror(make_config(repos=REPOS))

        assert len(clients) == 1
        assert clients[0]._client.is_closed
        assert fake_github.requests == []
