"""CLI commands for configuration management."""
from __future__ import annotations

import typer
from rich.markup import escape

from fractal_explore import ui
from fractal_explore.error_handler import handle_errors

app = typer.Typer(
    name="config",
    help="Manage fractal-explore configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
@handle_errors
def show():
    """Display the resolved configuration (all layers merged)."""
    from rich.panel import Panel
    from rich.table import Table
    from fractal_explore.core.config_service import get_config_service

    info = get_config_service().show()

    def _source(value):
        return escape(value) if value else "[dim]not found[/dim]"

    sources = info["sources"]
    ui.console.print(Panel(
        f"Global:  {_source(sources['global_config'])}\n"
        f"Project: {_source(sources['project_config'])}",
        title="Config Sources",
        border_style="cyan",
    ))

    for section, values in info["resolved"].items():
        if not isinstance(values, dict):
            continue
        table = Table(title=section.capitalize(), show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for key, val in values.items():
            if isinstance(val, list):
                val = ", ".join(str(v) for v in val)
            table.add_row(key, escape(str(val)))
        ui.console.print(table)


@app.command("set")
@handle_errors
def set_value(
    key: str = typer.Argument(..., help="Config key in dotted notation (e.g. server.port)"),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a global configuration value."""
    from fractal_explore.core.config_service import get_config_service, validate_port

    parsed_value: object
    if value.lower() in ("true", "yes", "1"):
        parsed_value = True
    elif value.lower() in ("false", "no", "0"):
        parsed_value = False
    else:
        try:
            parsed_value = int(value)
        except ValueError:
            parsed_value = value

    if key == "server.port":
        parsed_value = validate_port(value)

    get_config_service().set_global(key, parsed_value)
    ui.console.print(f"[green]Set[/green] {escape(key)} = {escape(str(parsed_value))}")


@app.command()
@handle_errors
def init():
    """Create a .fractal-explore.toml project config in the current directory."""
    from fractal_explore.core.config_service import get_config_service

    path = get_config_service().init_project_config()
    ui.console.print(f"[green]Created project config:[/green] {escape(str(path))}")


@app.command()
@handle_errors
def path():
    """Show all configuration file locations."""
    from rich.table import Table
    from fractal_explore.core.config_service import get_config_service

    paths = get_config_service().config_paths()

    table = Table(title="Config Paths", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Location")
    for name, location in paths.items():
        table.add_row(name, escape(location))
    ui.console.print(table)
