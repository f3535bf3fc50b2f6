# docmirror/core/__init__.py
"""
Core contracts: record types, path helpers, HTTP and config plumbing.
"""

from docmirror.core.document import BLOB, TREE, DocumentRecord, TreeEntry

__all__ = [
    "BLOB",
    "TREE",
    "DocumentRecord",
    "TreeEntry",
]
