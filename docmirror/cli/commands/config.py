# docmirror/cli/commands/config.py
"""
Configuration command.

Usage:
    docmirror config                 # Bundled default config
    docmirror config -c mirror.yaml  # A custom config
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml

from docmirror.cli.errors import handle_errors
from docmirror.config import DEFAULT_CONFIG_PATH, load_mirror_config

MASK = "********"


@handle_errors
def command(config: Optional[Path] = None) -> None:
    cfg = load_mirror_config(config)

    data = cfg.model_dump(mode="json")
    if data["github"].get("token"):
        data["github"]["token"] = MASK

    typer.echo(f"# {config or DEFAULT_CONFIG_PATH}")
    typer.echo(yaml.safe_dump(data, sort_keys=False).rstrip())
