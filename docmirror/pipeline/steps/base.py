# docmirror/pipeline/steps/base.py
"""
Transform step contract.

Every step maps the full record sequence to a new one. Steps that read or
rewrite meta.path declare which path shape they accept (requires) and which
shape they leave behind (produces), so TransformPipeline can reject an
ordering that would silently change results.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, List, Optional, Protocol, Sequence, runtime_checkable

from docmirror.core.document import DocumentRecord


class PathStage(Enum):
    """Shape of DocumentRecord.meta.path at a point in the pipeline."""

    SOURCE = "source"  # As listed by the repository (plus subtree prefix)
    RELOCATED = "relocated"  # Docs prefix stripped, pre-readme-rename
    PROMOTED = "promoted"  # Readmes renamed to their directory's page


ANY_STAGE: FrozenSet[PathStage] = frozenset(PathStage)


@runtime_checkable
class TransformStep(Protocol):
    name: str
    requires: FrozenSet[PathStage]
    produces: Optional[PathStage]

    def __call__(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]: ...


__all__ = ["PathStage", "ANY_STAGE", "TransformStep"]
