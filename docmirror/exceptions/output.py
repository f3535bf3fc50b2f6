# docmirror/exceptions/output.py
from __future__ import annotations

from docmirror.exceptions.base import MirrorError


class OutputWriteError(MirrorError):
    """Bad output path or a failure while publishing the output directory."""

    pass
