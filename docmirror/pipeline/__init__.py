# docmirror/pipeline/__init__.py
"""
The mirror pipeline: filter, fetch, transform and publish documents.
"""

from docmirror.pipeline.fetch import DocumentFetcher, decode_content
from docmirror.pipeline.filter import EntryFilter, filter_entries
from docmirror.pipeline.mirror import MirrorPipeline, MirrorResult, run_mirror
from docmirror.pipeline.transform import TransformPipeline, check_step_order
from docmirror.pipeline.writer import OutputWriter, clear_directory, write_document

__all__ = [
    "DocumentFetcher",
    "decode_content",
    "EntryFilter",
    "filter_entries",
    "MirrorPipeline",
    "MirrorResult",
    "run_mirror",
    "TransformPipeline",
    "check_step_order",
    "OutputWriter",
    "clear_directory",
    "write_document",
]
