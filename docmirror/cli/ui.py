# docmirror/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from docmirror.cli.ui import ui

    ui.header("Mirror")
    ui.success("Done!")
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


class UI:
    """Rich-styled output helpers used by every command."""

    def print(self, msg: str, style: str = "") -> None:
        if style:
            console.print(f"[{style}]{msg}[/{style}]")
        else:
            console.print(msg)

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a fitted box around the command title."""
        if subtitle:
            content = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            content = f"[bold]{title}[/bold]"
        console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        console.print(f"[green]✓[/green] {msg}")

    def error(self, msg: str) -> None:
        console.print(f"[red]✗[/red] {msg}")

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({detail})[/dim]" if detail else ""
        console.print(f"[yellow]⚠[/yellow] {msg}{detail_str}")

    def info(self, msg: str) -> None:
        console.print(f"[dim]{msg}[/dim]")

    def table(self, title: str, rows: Sequence[tuple[str, str]]) -> None:
        """Two-column key/value table."""
        table = Table(title=title, show_header=False, title_justify="left")
        table.add_column("key", style="bold")
        table.add_column("value")
        for key, value in rows:
            table.add_row(key, value)
        console.print(table)


ui = UI()

__all__ = ["UI", "ui", "console"]
