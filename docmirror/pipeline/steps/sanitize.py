# docmirror/pipeline/steps/sanitize.py
"""
Strip presentation artifacts that the published site renders itself.

Applied in this order, each at most once:
    1. unwrap frontmatter hidden in an HTML comment (keeps the frontmatter)
    2. drop the first level-1 heading line
    3. drop the analytics pixel line

Unwrapping has to come first: inside a still-commented block the heading
pattern could match frontmatter content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence

from docmirror.core.document import DocumentRecord
from docmirror.pipeline.steps.base import ANY_STAGE, PathStage

COMMENTED_FRONTMATTER = re.compile(r"^<!--\s+(---\s+.*?\s+---)\s+-->", re.DOTALL)
H1_HEADING = re.compile(r"^#\s+.*", re.MULTILINE)
ANALYTICS_PIXEL = re.compile(r"^\[!\[analytics\].*", re.MULTILINE)


def unwrap_frontmatter(text: str) -> str:
    return COMMENTED_FRONTMATTER.sub(r"\1", text, count=1)


def strip_heading(text: str) -> str:
    return H1_HEADING.sub("", text, count=1)


def strip_analytics(text: str) -> str:
    return ANALYTICS_PIXEL.sub("", text, count=1)


def sanitize(text: str) -> str:
    text = unwrap_frontmatter(text)
    text = strip_heading(text)
    text = strip_analytics(text)
    # TODO: strip GitHub badge lines once their markup is settled (see /docs/what-is-netdata)
    return text


@dataclass
class SanitizeStep:
    """Apply sanitize() to every body. Paths are not read or changed."""

    name: str = field(default="sanitize", init=False)
    requires: FrozenSet[PathStage] = field(default=ANY_STAGE, init=False)
    produces: Optional[PathStage] = field(default=None, init=False)

    def __call__(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
        return [r.with_body(sanitize(r.body)) for r in records]
