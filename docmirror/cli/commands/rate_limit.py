# docmirror/cli/commands/rate_limit.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from docmirror.cli.errors import handle_errors
from docmirror.cli.ui import ui
from docmirror.config import load_mirror_config
from docmirror.source.github import GitHubClient


@handle_errors
def command(config: Optional[Path] = None) -> None:
    cfg = load_mirror_config(config)

    with GitHubClient(cfg.github, token=cfg.resolve_token()) as client:
        rate = client.rate_limit()

    ui.print(rate.describe())
    if rate.is_unauthenticated:
        ui.warning("Requests are anonymous", f"set {cfg.github.token_env} for a higher limit")
