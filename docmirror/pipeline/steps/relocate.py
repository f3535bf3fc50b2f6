# docmirror/pipeline/steps/relocate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from docmirror.core.document import DocumentRecord
from docmirror.core.paths import strip_prefix
from docmirror.pipeline.steps.base import PathStage

DEFAULT_DOCS_PREFIX = "docs/"


@dataclass
class RelocateStep:
    """
    Move the repository's docs directory to the output root.

    docs/guide.md becomes guide.md; paths outside the prefix are untouched.
    """

    prefix: str = DEFAULT_DOCS_PREFIX

    name: str = field(default="relocate", init=False)
    requires: FrozenSet[PathStage] = field(default=frozenset({PathStage.SOURCE}), init=False)
    produces: Optional[PathStage] = field(default=PathStage.RELOCATED, init=False)

    def relocate(self, path: str) -> str:
        return strip_prefix(path, self.prefix)

    def __call__(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
        return [r.with_path(self.relocate(r.path)) for r in records]
