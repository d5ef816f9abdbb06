"""The ``detect`` command: print a project classification."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.table import Table

from fractal_explore import ui
from fractal_explore.core.detection_service import run_detection
from fractal_explore.errors import ConfigError
from fractal_explore.models import ProjectClassification, ProjectConfig

OUTPUT_FORMATS = ("table", "json", "yaml")


def _render_table(info: ProjectClassification) -> None:
    project = ProjectConfig.from_classification(info)
    table = Table(title=f"Project: {escape(project.name)}", show_header=True, expand=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Framework", info.framework)
    table.add_row("Flavor", project.framework)
    table.add_row("Build tool", info.build_tool)
    table.add_row("TypeScript", "Yes" if info.uses_static_typing else "No")
    table.add_row("Component directories", escape("\n".join(info.component_directories)))
    table.add_row("Root", escape(str(info.root_path)))
    ui.console.print(table)


def detect(path: Path, output: str = "table", timeout: Optional[float] = None) -> ProjectClassification:
    """Detect the project at ``path`` and print it in ``output`` format."""
    if output not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unknown output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            context={"format": output},
        )

    info = run_detection(path, timeout=timeout)
    if output == "json":
        ui.print_json_output(info.to_dict())
    elif output == "yaml":
        ui.print_yaml_output(info.to_dict())
    else:
        _render_table(info)
    return info
