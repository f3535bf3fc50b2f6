# docmirror/exceptions/base.py
"""
Base exception types for docmirror.
"""

from __future__ import annotations

from typing import Any, List, Tuple


class MirrorError(Exception):
    """Base class for all mirroring exceptions."""

    pass


class BatchError(MirrorError):
    """
    One or more tasks of a concurrent batch failed.

    Every failure is kept so they can be reported together.

    Attributes:
        label: What the batch was doing (e.g. "fetch documents")
        failures: (item, exception) pairs, in input order
    """

    def __init__(self, label: str, failures: List[Tuple[Any, BaseException]]):
        self.label = label
        self.failures = list(failures)

        first_item, first_exc = self.failures[0]
        message = f"{label}: {len(self.failures)} task(s) failed; first: {first_item!r}: {first_exc}"
        super().__init__(message)

    @property
    def exceptions(self) -> List[BaseException]:
        return [exc for _, exc in self.failures]
