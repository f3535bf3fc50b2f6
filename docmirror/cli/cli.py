# docmirror/cli/cli.py
"""
docmirror CLI - Main application.

Commands:
    docmirror run          Mirror documentation into the output directory
    docmirror rate-limit   Show the GitHub API quota
    docmirror config       Show the resolved configuration
    docmirror version      Show the version

NOTE: Commands import their implementation lazily.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="docmirror",
    help="Mirror markdown documentation from GitHub repositories into a static-site tree.",
    no_args_is_help=True,
    add_completion=False,
)

CONFIG_OPTION_HELP = "Path to a mirror YAML config (defaults to the bundled one)."


@app.command("run")
def run(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Override output.root."),
    max_workers: Optional[int] = typer.Option(
        None, "--max-workers", "-w", min=1, help="Override max_workers."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Fetch, transform and publish the documentation."""
    from docmirror.cli.commands import run as mod

    mod.command(config=config, output=output, max_workers=max_workers, verbose=verbose)


@app.command("rate-limit")
def rate_limit(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Show the remaining GitHub API quota for the configured credential."""
    from docmirror.cli.commands import rate_limit as mod

    mod.command(config=config)


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Print the resolved configuration as YAML (token masked)."""
    from docmirror.cli.commands import config as mod

    mod.command(config=config)


@app.command("version")
def version() -> None:
    """Show the docmirror version."""
    from docmirror import __version__

    typer.echo(f"docmirror version {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
