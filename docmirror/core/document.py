# docmirror/core/document.py
"""
Core record types for the mirroring pipeline.

TreeEntry is one row of a remote repository's recursive file listing.
DocumentRecord is the unit every pipeline stage consumes and produces.

Flow: GitHub tree → TreeEntry → filter → fetch → DocumentRecord → steps → writer
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

BLOB = "blob"
TREE = "tree"


@dataclass(frozen=True)
class TreeEntry:
    """
    One file or directory node from a recursive tree listing.

    The url is an opaque content handle; for blobs it points at the
    blob endpoint that returns base64 content.
    """

    path: str  # Slash-separated, relative to the repository root
    type: str  # "blob", "tree", or anything else GitHub reports (e.g. "commit")
    url: str = ""
    sha: Optional[str] = None
    size: Optional[int] = None
    mode: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TreeEntry":
        """Build an entry from a row of the GitHub git/trees response."""
        return cls(
            path=str(data["path"]),
            type=str(data.get("type", "")),
            url=str(data.get("url") or ""),
            sha=data.get("sha"),
            size=data.get("size"),
            mode=data.get("mode"),
        )

    @property
    def is_blob(self) -> bool:
        return self.type == BLOB

    def with_path(self, path: str) -> "TreeEntry":
        return replace(self, path=path)

    def __repr__(self) -> str:
        return f"TreeEntry({self.path!r}, {self.type})"


@dataclass(frozen=True)
class DocumentRecord:
    """
    A fetched document moving through the transform steps.

    Records are replaced, never mutated: every step returns new records.
    meta.path is the output-relative path and always stays a forward-slash,
    non-absolute path.
    """

    meta: TreeEntry
    body: str

    @property
    def path(self) -> str:
        return self.meta.path

    def with_path(self, path: str) -> "DocumentRecord":
        return replace(self, meta=self.meta.with_path(path))

    def with_body(self, body: str) -> "DocumentRecord":
        return replace(self, body=body)

    def __repr__(self) -> str:
        return f"DocumentRecord({self.path!r}, {len(self.body)} chars)"


__all__ = [
    "BLOB",
    "TREE",
    "TreeEntry",
    "DocumentRecord",
]
