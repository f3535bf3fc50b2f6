# docmirror/config/loader.py
"""
Configuration loader for the mirror pipeline.

Thin wrapper around docmirror.core.config that knows the bundled default.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from docmirror.config.schema import MirrorConfig
from docmirror.core.config import load_config

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def load_mirror_config(path: Optional[Union[str, Path]] = None) -> MirrorConfig:
    """
    Load mirror configuration.

    - None → load built-in default.yaml
    - path → load and validate the given YAML file

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    return load_config(path, schema=MirrorConfig)


__all__ = ["DEFAULT_CONFIG_PATH", "load_mirror_config"]
