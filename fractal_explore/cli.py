#!/usr/bin/env python3
"""
fractal-explore: zero-config component explorer for React applications.
"""
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from fractal_explore import __version__, ui
from fractal_explore.error_handler import handle_errors

app = typer.Typer(
    name="fractal-explore",
    help="Zero-config component explorer for React applications.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

from fractal_explore.commands import config_cmd, detect_cmd, start_cmd

app.add_typer(config_cmd.app, name="config", help="Manage configuration", rich_help_panel="Settings")


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("fractal_explore")
    logger.handlers.clear()
    handler = RichHandler(console=ui.err_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _version_callback(value: bool):
    if value:
        print(f"fractal-explore {__version__}")
        raise typer.Exit()


def _project_root(path: Optional[str]) -> Path:
    return Path(path).resolve() if path else Path.cwd()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show the version and exit.",
        callback=_version_callback, is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
    plain: bool = typer.Option(False, "--plain", help="Plain ASCII output without colors or panels."),
):
    """Zero-config component explorer for React applications."""
    from fractal_explore.core.config_service import get_config_service

    if plain or get_config_service().get("ui.plain_output") is True:
        ui.set_plain_mode(True)
    _setup_logging(verbose)


@app.command(rich_help_panel="Explore")
@handle_errors
def start(
    path: Optional[str] = typer.Argument(None, help="Project directory (defaults to the current directory)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port number [default: 3434]"),
    components_dir: Optional[str] = typer.Option(
        None, "--dir", "-d", help="Component directory [default: src/components]",
    ),
    cache: Optional[bool] = typer.Option(None, "--cache/--no-cache", help="Enable or disable caching"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Give up on detection after N seconds"),
):
    """[bold magenta]Start[/bold magenta] exploring the React project in PATH."""
    start_cmd.start(
        _project_root(path),
        port=port,
        components_dir=components_dir,
        cache=cache,
        timeout=timeout,
    )


@app.command(rich_help_panel="Explore")
@handle_errors
def detect(
    path: Optional[str] = typer.Argument(None, help="Project directory (defaults to the current directory)"),
    output: str = typer.Option("table", "--format", "-f", help="Output format: table, json or yaml"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Give up on detection after N seconds"),
):
    """[bold]Detect[/bold] build tool, TypeScript usage and component directories."""
    detect_cmd.detect(_project_root(path), output=output, timeout=timeout)


def main():
    app()


if __name__ == "__main__":
    main()
