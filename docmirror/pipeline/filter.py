# docmirror/pipeline/filter.py
"""
Selects which tree entries become documents.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from docmirror.core.document import TreeEntry

# Markdown file whose path does not start with a dot; the whole path must match
MARKDOWN_PATTERN = re.compile(r"^[^.].*?\.md\Z")


def is_eligible(entry: TreeEntry, excluded_paths: Sequence[str] = ()) -> bool:
    """
    True if entry is a markdown blob outside dot-directories and not excluded.

    Exclusion is a prefix match on the path.
    """
    path = entry.path
    return (
        entry.is_blob
        and not path.startswith(".")
        and not any(path.startswith(excluded) for excluded in excluded_paths)
        and MARKDOWN_PATTERN.match(path) is not None
    )


@dataclass
class EntryFilter:
    """
    Keep eligible entries, preserving input order.

    Example:
        >>> keep = EntryFilter(excluded_paths=["README.md"])
        >>> [e.path for e in keep([TreeEntry("README.md", "blob"), TreeEntry("a.md", "blob")])]
        ['a.md']
    """

    excluded_paths: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.excluded_paths = tuple(self.excluded_paths)

    def __call__(self, entries: Iterable[TreeEntry]) -> List[TreeEntry]:
        return [e for e in entries if is_eligible(e, self.excluded_paths)]


def filter_entries(entries: Iterable[TreeEntry], excluded_paths: Sequence[str] = ()) -> List[TreeEntry]:
    return EntryFilter(tuple(excluded_paths))(entries)


__all__ = ["MARKDOWN_PATTERN", "EntryFilter", "filter_entries", "is_eligible"]
