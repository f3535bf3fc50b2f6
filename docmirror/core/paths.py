# docmirror/core/paths.py
"""
Path helpers for document and site paths.

Document paths are always POSIX-style, no matter the host OS, so every
helper here works on posixpath and plain strings. Only output_path()
touches the local filesystem layout.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from docmirror.core.document import TreeEntry
from docmirror.exceptions import OutputWriteError


@dataclass(frozen=True)
class PathParts:
    """A document path split into directory, base name, stem and extension."""

    dir: str
    base: str
    stem: str
    ext: str


def join_path(*parts: str) -> str:
    """
    Join path parts with "/" and normalize the result.

    Unlike posixpath.join, a part starting with "/" does not discard the
    parts before it. Empty parts are ignored. "." and ".." segments and
    repeated separators are collapsed.

    Examples:
        >>> join_path("collectors/go.d.plugin/", "x.md")
        'collectors/go.d.plugin/x.md'
        >>> join_path("/", "docs", "a", "../x.md")
        '/docs/x.md'
    """
    joined = "/".join(p for p in parts if p)
    if not joined:
        return "."

    normalized = posixpath.normpath(joined)

    # posixpath keeps a leading "//" (implementation-defined per POSIX)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")

    return normalized


def prefix_entries(entries: Iterable[TreeEntry], prefix: str) -> List[TreeEntry]:
    """Return entries with prefix joined in front of every path, order preserved."""
    if not prefix:
        return list(entries)
    return [entry.with_path(join_path(prefix, entry.path)) for entry in entries]


def strip_prefix(path: str, prefix: str) -> str:
    """Drop prefix from the start of path, if present."""
    if prefix and path.startswith(prefix):
        return path[len(prefix) :]
    return path


def split_path(path: str) -> PathParts:
    directory, base = posixpath.split(path)
    stem, ext = posixpath.splitext(base)
    return PathParts(dir=directory, base=base, stem=stem, ext=ext)


def site_url(mount: str, directory: str, url: str) -> str:
    """
    Resolve a relative link against a document directory under the site mount.

    A trailing slash on url survives normalization.

    Examples:
        >>> site_url("docs", "a", "../x.md")
        '/docs/x.md'
        >>> site_url("./docs", "", "guides/")
        '/docs/guides/'
    """
    resolved = join_path("/", mount, directory, url)
    if url.endswith("/") and not resolved.endswith("/"):
        resolved += "/"
    return resolved


def escapes_root(path: str) -> bool:
    """True if a root-relative path is absolute or climbs out of the root."""
    normalized = posixpath.normpath(path)
    return path.startswith("/") or normalized == ".." or normalized.startswith("../")


def output_path(root: Path, path: str) -> Path:
    """
    Local file path for a document path under the output root.

    The document path is lowercased; the root is used as given.

    Raises:
        OutputWriteError: If path is absolute or escapes the root
    """
    if not path or path.startswith("/"):
        raise OutputWriteError(f"Document path must be relative: {path!r}")

    normalized = posixpath.normpath(path)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        raise OutputWriteError(f"Document path escapes the output root: {path!r}")

    return Path(root).joinpath(*normalized.lower().split("/"))


__all__ = [
    "PathParts",
    "join_path",
    "prefix_entries",
    "strip_prefix",
    "split_path",
    "site_url",
    "escapes_root",
    "output_path",
]
