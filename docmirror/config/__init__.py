# docmirror/config/__init__.py
"""
Configuration schemas and loading for the mirror pipeline.
"""

from docmirror.config.loader import DEFAULT_CONFIG_PATH, load_mirror_config
from docmirror.config.schema import (
    DEFAULT_EXCLUDED_PATHS,
    GitHubConfig,
    MirrorConfig,
    OutputConfig,
    RepoSpec,
    TransformConfig,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_EXCLUDED_PATHS",
    "GitHubConfig",
    "MirrorConfig",
    "OutputConfig",
    "RepoSpec",
    "TransformConfig",
    "load_mirror_config",
]
