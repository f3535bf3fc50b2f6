# docmirror/pipeline/steps/links.py
"""
Rewrite relative markdown links to absolute site paths.

A link is resolved against the directory of the document's path at the
time this step runs: after relocation, before readme promotion. A promoted
readme therefore keeps resolving links from its original directory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from docmirror.core.document import DocumentRecord
from docmirror.core.paths import site_url, split_path
from docmirror.pipeline.steps.base import PathStage

INLINE_LINK = re.compile(r"\[(.*?)\]\((.*?)\)")

DEFAULT_LINK_MOUNT = "docs"


def is_external(url: str) -> bool:
    return url.startswith("http")


def normalize_links(text: str, path: str, mount: str = DEFAULT_LINK_MOUNT) -> str:
    """
    Rewrite every [text](url) in text that is not an http(s) link.

    Example:
        >>> normalize_links("[x](../x.md)", "a/b.md")
        '[x](/docs/x.md)'
    """
    directory = split_path(path).dir

    def _rewrite(match: "re.Match[str]") -> str:
        label, url = match.group(1), match.group(2)
        if not is_external(url):
            url = site_url(mount, directory, url)
        return f"[{label}]({url})"

    return INLINE_LINK.sub(_rewrite, text)


@dataclass
class LinkNormalizeStep:
    mount: str = DEFAULT_LINK_MOUNT

    name: str = field(default="normalize_links", init=False)
    requires: FrozenSet[PathStage] = field(default=frozenset({PathStage.RELOCATED}), init=False)
    produces: Optional[PathStage] = field(default=None, init=False)

    def __call__(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
        return [r.with_body(normalize_links(r.body, r.path, self.mount)) for r in records]
