"""``dyre paths PROJECT`` — show where a project's files live."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dyre.cli.commands._project import (
    CACHE_DIR_OPT,
    CONFIG_DIR_OPT,
    DEBUG_OPT,
    EXT_OPT,
    PROJECT_ARG,
    project_orchestrator,
)
from dyre.core.stale_check import modification_time

console = Console()


def _mtime(path: Path) -> str:
    ts = modification_time(path)
    if ts is None:
        return "[dim]missing[/dim]"
    return datetime.fromtimestamp(ts).isoformat(sep=" ", timespec="seconds")


def paths_cmd(
    project: str = PROJECT_ARG,
    debug: bool = DEBUG_OPT,
    config_dir: Path = CONFIG_DIR_OPT,
    cache_dir: Path = CACHE_DIR_OPT,
    ext: str = EXT_OPT,
) -> None:
    """Show the resolved binary, custom binary, config file and cache paths."""
    orch = project_orchestrator(project, debug, config_dir, cache_dir, ext)
    paths = orch.paths

    table = Table(title=f"Paths for {project}")
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Path")
    table.add_column("Modified", justify="right")

    table.add_row("This binary", str(paths.this_binary), _mtime(paths.this_binary))
    table.add_row("Custom binary", str(paths.temp_binary), _mtime(paths.temp_binary))
    table.add_row("Config source", str(paths.config_file), _mtime(paths.config_file))
    table.add_row("Cache dir", str(paths.cache_dir), "")
    table.add_row("State store", str(orch.state.db_path), "")

    console.print(table)
