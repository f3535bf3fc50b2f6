# docmirror/cli/__init__.py
"""
docmirror CLI.

Usage:
    docmirror run                  # Mirror docs with the bundled config
    docmirror run -c mirror.yaml   # Mirror docs with a custom config
    docmirror rate-limit           # Show remaining GitHub API quota
    docmirror config               # Show resolved configuration
"""

from docmirror.cli.cli import app

__all__ = ["app"]
