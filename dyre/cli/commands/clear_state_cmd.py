"""``dyre clear-state PROJECT`` — drop a project's persisted state."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from dyre.cli.commands._project import (
    CACHE_DIR_OPT,
    CONFIG_DIR_OPT,
    DEBUG_OPT,
    EXT_OPT,
    PROJECT_ARG,
    project_orchestrator,
)

console = Console()


def clear_state_cmd(
    project: str = PROJECT_ARG,
    debug: bool = DEBUG_OPT,
    config_dir: Path = CONFIG_DIR_OPT,
    cache_dir: Path = CACHE_DIR_OPT,
    ext: str = EXT_OPT,
) -> None:
    """Remove every persisted key for the project."""
    orch = project_orchestrator(project, debug, config_dir, cache_dir, ext)
    removed = len(orch.state.items())
    orch.state.clear()
    console.print(f"Cleared {removed} persisted value(s) for [cyan]{project}[/cyan].")
