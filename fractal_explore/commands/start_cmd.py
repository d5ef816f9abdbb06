"""The ``start`` command: detect the project and report what comes next."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.markup import escape

from fractal_explore import __version__, ui
from fractal_explore.core.config_service import get_config_service, validate_port
from fractal_explore.core.detection_service import run_detection
from fractal_explore.models import ProjectClassification

logger = logging.getLogger("fractal_explore.start")

UPCOMING = ("Component scanning", "Web interface", "Dev server")


def render_report(info: ProjectClassification) -> None:
    """Print the human-readable detection report."""
    ok = ui.icon("ok")
    dirs = ", ".join(escape(d) for d in info.component_directories)
    ui.console.print(f"   {ok} React project detected ({info.build_tool})")
    ui.console.print(f"   {ok} TypeScript: {'Yes' if info.uses_static_typing else 'No'}")
    ui.console.print(f"   {ok} Component directories: {dirs}")


def start(
    path: Path,
    port: Optional[int] = None,
    components_dir: Optional[str] = None,
    cache: Optional[bool] = None,
    timeout: Optional[float] = None,
) -> ProjectClassification:
    """Run detection for ``path`` and print the start-up report.

    Options left as None fall back to the resolved configuration.
    """
    config = get_config_service()
    port = validate_port(port) if port is not None else config.get_port()
    components_dir = components_dir or config.get_components_dir()
    cache = config.cache_enabled() if cache is None else cache
    logger.debug("start: path=%s port=%d dir=%s cache=%s", path, port, components_dir, cache)

    ui.banner(__version__)
    ui.console.print(f"{ui.icon('search')} Detecting project structure...")
    info = run_detection(path, timeout=timeout)
    render_report(info)

    ui.console.print(
        f"\n[dim]Port {port} · components {escape(components_dir)} · "
        f"cache {'on' if cache else 'off'}[/dim]"
    )
    ui.console.print()
    for feature in UPCOMING:
        ui.console.print(f"{ui.icon('pending')} {feature} coming next...")
    return info
