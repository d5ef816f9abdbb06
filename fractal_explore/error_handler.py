"""Unified CLI error handler for fractal-explore commands."""

from __future__ import annotations

import functools
import logging
import os
import traceback

import typer
from rich.markup import escape

from fractal_explore import ui
from fractal_explore.errors import (
    ConfigError,
    FractalExploreError,
    ManifestParseError,
    NotReactProjectError,
    ProjectNotFoundError,
)

logger = logging.getLogger("fractal_explore.error_handler")


def _debug_mode() -> bool:
    """Check if debug output is enabled via FRACTAL_EXPLORE_DEBUG env var."""
    return os.environ.get("FRACTAL_EXPLORE_DEBUG", "").lower() in ("1", "true", "yes")


def _render_error(e: FractalExploreError) -> None:
    """Render a FractalExploreError on stderr with context and a hint."""
    out = ui.err_console
    out.print(f"\n{ui.icon('error')} [bold red]Error:[/bold red] {escape(str(e))}")

    if e.context and _debug_mode():
        context_parts = [
            f"  [dim]{key}:[/dim] {value}" for key, value in e.context.items() if value is not None
        ]
        if context_parts:
            out.print("[dim]Context:[/dim]")
            for part in context_parts:
                out.print(part)

    if isinstance(e, ProjectNotFoundError):
        out.print("[dim]cd into the project root (the folder containing package.json) and retry.[/dim]")
    elif isinstance(e, ManifestParseError):
        out.print("[dim]Fix the JSON syntax in package.json, then retry.[/dim]")
    elif isinstance(e, NotReactProjectError):
        out.print("[dim]Add react to dependencies, or point the command at a React project.[/dim]")
    elif isinstance(e, ConfigError):
        out.print("[dim]Run 'fractal-explore config path' to locate your config files.[/dim]")


def handle_errors(func):
    """Decorator that turns FractalExploreError into stderr output and an exit code.

    Usage::

        @app.command()
        @handle_errors
        def my_command(...):
            ...  # no try/except needed
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FractalExploreError as e:
            logger.debug("Command failed: %r", e)
            _render_error(e)
            if _debug_mode():
                ui.err_console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            raise typer.Exit(e.exit_code)
        except KeyboardInterrupt:
            ui.err_console.print("\n[dim]Interrupted.[/dim]")
            raise typer.Exit(130)
        except (typer.Exit, typer.Abort, SystemExit):
            raise
        except Exception as e:
            ui.err_console.print(f"\n[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            if _debug_mode():
                ui.err_console.print(f"\n[dim]{traceback.format_exc()}[/dim]")
            else:
                ui.err_console.print("[dim]Set FRACTAL_EXPLORE_DEBUG=1 for full traceback.[/dim]")
            raise typer.Exit(1)

    return wrapper
