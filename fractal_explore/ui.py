"""Shared UI theme, consoles, and display helpers for fractal-explore."""

import json

import yaml
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

# ── Output Mode State ──
_plain_mode: bool = False


# ── Theme ──
FRACTAL_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "yellow",
    "error": "bold red",
    "brand": "bold magenta",
    "muted": "dim",
})

console = Console(theme=FRACTAL_THEME)
err_console = Console(theme=FRACTAL_THEME, stderr=True)


def set_plain_mode(enabled: bool = True) -> None:
    """Enable or disable plain text output (no colors, no panels, ASCII only)."""
    global _plain_mode, console, err_console
    _plain_mode = enabled
    if enabled:
        console = Console(no_color=True, highlight=False)
        err_console = Console(no_color=True, highlight=False, stderr=True)
    else:
        console = Console(theme=FRACTAL_THEME)
        err_console = Console(theme=FRACTAL_THEME, stderr=True)


def print_json_output(data: dict | list) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def print_yaml_output(data: dict | list) -> None:
    print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), end="")


# ── Status Icons ──
ICONS = {
    "ok": "[green]✔[/green]",          # checkmark
    "error": "[red]✘[/red]",           # cross
    "search": "[cyan]▶[/cyan]",        # play triangle
    "pending": "[yellow]○[/yellow]",   # empty circle
    "bullet": "[cyan]•[/cyan]",        # bullet
}

PLAIN_ICONS = {
    "ok": "[OK]",
    "error": "[!!]",
    "search": ">>",
    "pending": "[..]",
    "bullet": "*",
}


def icon(name: str) -> str:
    if _plain_mode:
        return PLAIN_ICONS.get(name, "")
    return ICONS.get(name, "")


def banner(version: str) -> None:
    """Display the fractal-explore welcome banner."""
    if _plain_mode:
        print(f"Fractal Explore v{version}")
        print()
        return

    content = Text.from_markup(
        f"[bold magenta]Fractal Explore[/bold magenta] [dim]v{version}[/dim]\n"
        "[dim]Zero-config component explorer for React[/dim]"
    )
    console.print(Panel(
        Align.center(content),
        border_style="magenta",
        padding=(0, 4),
    ))
