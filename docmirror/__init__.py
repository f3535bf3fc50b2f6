# docmirror/__init__.py
"""
docmirror - mirror markdown documentation from GitHub repositories into a
static-site-ready directory tree.

Quick Start:
    >>> from docmirror import load_mirror_config, run_mirror
    >>> result = run_mirror(load_mirror_config())
    >>> print(result.documents_written)

Architecture:
    docmirror/
    ├── core/        # Record types, paths, HTTP, config plumbing
    ├── config/      # Pydantic schema + bundled default.yaml
    ├── source/      # GitHub tree and blob access
    ├── pipeline/    # filter → fetch → steps → writer, orchestrated by MirrorPipeline
    └── cli/         # Typer application
"""

from docmirror.config import MirrorConfig, load_mirror_config
from docmirror.core.document import DocumentRecord, TreeEntry
from docmirror.pipeline import MirrorPipeline, MirrorResult, TransformPipeline, run_mirror

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MirrorConfig",
    "load_mirror_config",
    "DocumentRecord",
    "TreeEntry",
    "MirrorPipeline",
    "MirrorResult",
    "TransformPipeline",
    "run_mirror",
]
