# docmirror/pipeline/steps/readme.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from docmirror.core.document import DocumentRecord
from docmirror.core.paths import split_path
from docmirror.pipeline.steps.base import PathStage

README = "readme.md"


def promote_readme(path: str) -> str:
    """
    Rename a nested readme to its directory's page at the parent level.

    Examples:
        >>> promote_readme("foo/bar/README.md")
        'foo/bar.md'
        >>> promote_readme("README.md")
        'README.md'
    """
    parts = split_path(path)
    if parts.base.lower() == README and parts.dir:
        return parts.dir + parts.ext
    return path


@dataclass
class ReadmePromoteStep:
    """
    Promote nested readmes. Bodies pass through unchanged.

    Links elsewhere that pointed at the old readme path are not rewritten.
    """

    name: str = field(default="promote_readmes", init=False)
    requires: FrozenSet[PathStage] = field(default=frozenset({PathStage.RELOCATED}), init=False)
    produces: Optional[PathStage] = field(default=PathStage.PROMOTED, init=False)

    def __call__(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
        return [r.with_path(promote_readme(r.path)) for r in records]
