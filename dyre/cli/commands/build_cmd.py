"""``dyre build PROJECT`` — compile the custom binary now.

Runs the compiler regardless of timestamps and prints the diagnostics on
failure.  Exits with status 1 when the build fails or there is no config
source to build.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from dyre.cli.commands._project import (
    CACHE_DIR_OPT,
    CONFIG_DIR_OPT,
    DEBUG_OPT,
    EXT_OPT,
    PROJECT_ARG,
    project_orchestrator,
)

console = Console()


def build_cmd(
    project: str = PROJECT_ARG,
    debug: bool = DEBUG_OPT,
    config_dir: Path = CONFIG_DIR_OPT,
    cache_dir: Path = CACHE_DIR_OPT,
    ext: str = EXT_OPT,
) -> None:
    """Compile the project's config source into its custom binary."""
    orch = project_orchestrator(project, debug, config_dir, cache_dir, ext)
    config_file = orch.paths.config_file

    if not config_file.is_file():
        console.print(f"[bold red]Config source not found:[/bold red] {config_file}")
        raise typer.Exit(code=1)

    outcome = orch.build()
    if not outcome.success:
        console.print(
            Panel(
                Text(outcome.diagnostics.rstrip()),
                title="[bold red]Build failed[/bold red]",
                border_style="red",
            ),
        )
        raise typer.Exit(code=1)

    console.print(f"[bold green]Built[/bold green] {orch.paths.temp_binary}")
