# docmirror/pipeline/fetch.py
"""
Turns eligible tree entries into document records by downloading blobs.
"""

from __future__ import annotations

import base64
import binascii
from typing import Iterable, List, Protocol

from docmirror.core.concurrency import DEFAULT_MAX_WORKERS, map_all
from docmirror.core.document import DocumentRecord, TreeEntry
from docmirror.exceptions import ContentDecodeError
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import FETCH

logger = get_logger(__name__)


class BlobSource(Protocol):
    def blob(self, url: str) -> str: ...


def decode_content(content: str) -> str:
    """
    Decode GitHub's base64 blob payload into text.

    GitHub wraps the payload at 60 columns, so whitespace is ignored.
    Bytes that are not valid UTF-8 are kept as surrogate escapes and
    come back unchanged when the text is encoded the same way.

    Raises:
        ContentDecodeError: If content is not base64
    """
    compact = "".join(content.split())
    try:
        raw = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ContentDecodeError(f"Blob content is not valid base64: {e}") from e
    return raw.decode("utf-8", errors="surrogateescape")


class DocumentFetcher:
    """
    Fetch every entry's content on a bounded worker pool.

    The result is available only once every fetch has succeeded; failures
    are reported together as a BatchError.
    """

    def __init__(self, source: BlobSource, max_workers: int = DEFAULT_MAX_WORKERS):
        self.source = source
        self.max_workers = max_workers

    def fetch_one(self, entry: TreeEntry) -> DocumentRecord:
        try:
            body = decode_content(self.source.blob(entry.url))
        except ContentDecodeError as e:
            raise ContentDecodeError(f"{entry.path}: {e}") from e
        return DocumentRecord(meta=entry, body=body)

    def fetch(self, entries: Iterable[TreeEntry]) -> List[DocumentRecord]:
        entries = list(entries)
        logger.info(f"{FETCH} Fetching {len(entries)} pages...")
        return map_all(
            self.fetch_one,
            entries,
            max_workers=self.max_workers,
            label="fetch documents",
        )


__all__ = ["BlobSource", "DocumentFetcher", "decode_content"]
