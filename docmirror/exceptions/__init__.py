# docmirror/exceptions/__init__.py
"""
Exception types for docmirror.

All mirroring failures inherit from MirrorError.
"""

from docmirror.exceptions.base import BatchError, MirrorError
from docmirror.exceptions.output import OutputWriteError
from docmirror.exceptions.pipeline import PipelineError, StageOrderError
from docmirror.exceptions.source import ContentDecodeError, SourceError

__all__ = [
    "MirrorError",
    "BatchError",
    "SourceError",
    "ContentDecodeError",
    "PipelineError",
    "StageOrderError",
    "OutputWriteError",
]
