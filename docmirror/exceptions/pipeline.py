# docmirror/exceptions/pipeline.py
from __future__ import annotations

from docmirror.exceptions.base import MirrorError


class PipelineError(MirrorError):
    """A transform step failed."""

    pass


class StageOrderError(PipelineError):
    """Transform steps are arranged in an order that breaks their path contracts."""

    pass
