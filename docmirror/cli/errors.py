# docmirror/cli/errors.py
"""
Error handler for CLI commands.

Known failures become a one-line message and exit code 1 instead of a
traceback. Anything else propagates unchanged.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import typer

from docmirror.cli.ui import ui
from docmirror.core.config import ConfigError
from docmirror.core.http import APIError, AuthenticationError, RateLimitError
from docmirror.exceptions import BatchError, MirrorError

F = TypeVar("F", bound=Callable[..., Any])


def describe_error(exc: BaseException) -> str:
    if isinstance(exc, BatchError):
        lines = [str(exc)]
        for item, error in exc.failures[1:]:
            lines.append(f"  also failed: {item!r}: {error}")
        return "\n".join(lines)
    return str(exc)


def handle_errors(fn: F) -> F:
    """Decorator for command implementations."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except AuthenticationError as e:
            ui.error(f"GitHub rejected the credential: {e}")
            ui.info("Check the token in the config or the token environment variable.")
            raise typer.Exit(code=1) from e
        except RateLimitError as e:
            ui.error(f"GitHub rate limit exhausted: {e}")
            ui.info("Wait for the quota to reset or configure a token.")
            raise typer.Exit(code=1) from e
        except (ConfigError, APIError, MirrorError) as e:
            ui.error(describe_error(e))
            raise typer.Exit(code=1) from e

    return wrapper  # type: ignore[return-value]


__all__ = ["describe_error", "handle_errors"]
