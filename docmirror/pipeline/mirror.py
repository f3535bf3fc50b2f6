# docmirror/pipeline/mirror.py
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from docmirror.config.schema import MirrorConfig, RepoSpec
from docmirror.core.concurrency import map_all
from docmirror.core.document import TreeEntry
from docmirror.core.paths import prefix_entries
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import FILTER, PIPELINE
from docmirror.pipeline.fetch import DocumentFetcher
from docmirror.pipeline.filter import EntryFilter
from docmirror.pipeline.transform import TransformPipeline
from docmirror.pipeline.writer import OutputWriter
from docmirror.source.github import GitHubClient, RateLimit

logger = get_logger(__name__)

# Below this many remaining requests a run is likely to fail part-way
LOW_QUOTA_THRESHOLD = 100


@dataclass
class MirrorResult:
    """Summary of one mirror run."""

    output_root: Path
    entries_listed: int
    documents_selected: int
    documents_written: int
    fetch_seconds: float
    write_seconds: float
    written: List[Path]


class MirrorPipeline:
    """
    End-to-end documentation mirror:

        rate limit
          -> tree listing per repository (concurrent)
          -> prefix secondary repositories into their subtree
          -> filter
          -> fetch bodies (concurrent, bounded)
          -> relocate -> sanitize -> normalize links -> promote readmes
          -> publish (clear + write)
        rate limit

    Nothing is retried or caught: the first failing stage aborts the run.
    The output directory is only replaced after every document has been
    fetched, transformed and written to staging.
    """

    def __init__(
        self,
        *,
        config: MirrorConfig,
        client: GitHubClient,
        writer: Optional[OutputWriter] = None,
        transforms: Optional[TransformPipeline] = None,
    ) -> None:
        self.config = config
        self.client = client
        self.entry_filter = EntryFilter(tuple(config.excluded_paths))
        self.fetcher = DocumentFetcher(client, max_workers=config.max_workers)
        self.transforms = transforms or TransformPipeline.from_config(config.transforms)
        self.writer = writer or OutputWriter(
            config.output.root,
            preserve=config.output.preserve,
            max_workers=config.max_workers,
        )

    @classmethod
    def from_config(cls, config: MirrorConfig) -> "MirrorPipeline":
        client = GitHubClient(config.github, token=config.resolve_token())
        try:
            return cls(config=config, client=client)
        except BaseException:
            client.close()
            raise

    def list_repo(self, repo: RepoSpec) -> List[TreeEntry]:
        entries = self.client.list_entries(repo)
        return prefix_entries(entries, repo.prefix)

    def list_entries(self) -> List[TreeEntry]:
        """All repositories' entries, concatenated in configuration order."""
        listings = map_all(
            self.list_repo,
            self.config.repos,
            max_workers=self.config.max_workers,
            label="list repository trees",
        )
        return [entry for listing in listings for entry in listing]

    def log_rate_limit(self) -> RateLimit:
        rate = self.client.rate_limit()
        logger.info(f"{PIPELINE} {rate.describe()}")
        return rate

    def run(self) -> MirrorResult:
        logger.info(f"{PIPELINE} Starting mirror of {len(self.config.repos)} repositories")
        self.log_rate_limit()

        entries = self.list_entries()
        selected = self.entry_filter(entries)
        logger.info(f"{FILTER} Filtering {len(entries)} nodes to {len(selected)}")

        fetch_start = time.perf_counter()
        records = self.fetcher.fetch(selected)
        fetch_seconds = time.perf_counter() - fetch_start
        logger.info(f"{PIPELINE} Fetching completed in {fetch_seconds * 1000:.0f} ms")

        records = self.transforms.process(records)

        logger.info(f"{PIPELINE} Writing {len(records)} pages to {self.writer.root}")
        write_start = time.perf_counter()
        written = self.writer.publish(records)
        write_seconds = time.perf_counter() - write_start
        logger.info(f"{PIPELINE} Writing completed in {write_seconds * 1000:.0f} ms")

        rate = self.log_rate_limit()
        if rate.is_unauthenticated or rate.remaining < LOW_QUOTA_THRESHOLD:
            logger.warning(
                f"{PIPELINE} Only {rate.remaining} of {rate.limit} API requests left "
                f"for the next {rate.reset_minutes()} minutes"
            )

        return MirrorResult(
            output_root=self.writer.root,
            entries_listed=len(entries),
            documents_selected=len(selected),
            documents_written=len(written),
            fetch_seconds=fetch_seconds,
            write_seconds=write_seconds,
            written=written,
        )


def run_mirror(config: MirrorConfig) -> MirrorResult:
    """Build a pipeline from config, run it once and close the API client."""
    pipeline = MirrorPipeline.from_config(config)
    try:
        return pipeline.run()
    finally:
        pipeline.client.close()


__all__ = ["LOW_QUOTA_THRESHOLD", "MirrorPipeline", "MirrorResult", "run_mirror"]
