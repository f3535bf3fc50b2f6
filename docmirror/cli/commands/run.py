# docmirror/cli/commands/run.py
"""
Run command.

Usage:
    docmirror run
    docmirror run --config mirror.yaml --output ./site/docs
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from docmirror.cli.errors import handle_errors
from docmirror.cli.ui import ui
from docmirror.config import load_mirror_config
from docmirror.logging.logger import configure_logging, get_logger
from docmirror.logging.tags import CLI
from docmirror.pipeline.mirror import run_mirror

logger = get_logger(__name__)


@handle_errors
def command(
    config: Optional[Path] = None,
    output: Optional[Path] = None,
    max_workers: Optional[int] = None,
    verbose: bool = False,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.INFO)

    cfg = load_mirror_config(config)

    overrides = {}
    if output is not None:
        overrides["output"] = cfg.output.model_copy(update={"root": output})
    if max_workers is not None:
        overrides["max_workers"] = max_workers
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    repos = ", ".join(f"{cfg.github.owner}/{r.name}@{r.branch}" for r in cfg.repos)
    ui.header("docmirror run", repos)
    logger.debug(f"{CLI} Output root: {cfg.output.root}")

    result = run_mirror(cfg)

    ui.table(
        "Mirror summary",
        [
            ("Nodes listed", str(result.entries_listed)),
            ("Documents selected", str(result.documents_selected)),
            ("Documents written", str(result.documents_written)),
            ("Fetch time", f"{result.fetch_seconds:.2f}s"),
            ("Write time", f"{result.write_seconds:.2f}s"),
        ],
    )
    ui.success(f"Wrote {result.documents_written} documents to {result.output_root}")
