# docmirror/logging/logger.py
"""
Unified logging setup for docmirror.

All modules use:
    from docmirror.logging.logger import get_logger
    logger = get_logger(__name__)

Configuration happens once, in the CLI entrypoint, via configure_logging().
"""

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=None,
):
    """
    Configure root logging handler.

    Safe to call multiple times - handler duplication is prevented.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here - configuration happens in configure_logging().
    """
    return logging.getLogger(name)
