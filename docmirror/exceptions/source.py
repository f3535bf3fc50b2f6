# docmirror/exceptions/source.py
"""
Remote source errors: tree listings and blob content.
"""

from __future__ import annotations

from docmirror.exceptions.base import MirrorError


class SourceError(MirrorError):
    """Malformed or missing data returned by the remote repository API."""

    pass


class ContentDecodeError(SourceError):
    """Blob content could not be decoded (e.g. not valid base64)."""

    pass
