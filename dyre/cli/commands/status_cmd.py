"""``dyre status PROJECT`` — show the rebuild and handoff decision.

Read-only apart from creating the cache directory: nothing is compiled
and persisted state is left as it is.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from dyre.cli.commands._project import (
    CACHE_DIR_OPT,
    CONFIG_DIR_OPT,
    DEBUG_OPT,
    EXT_OPT,
    PROJECT_ARG,
    project_orchestrator,
)

console = Console()


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[yellow]no[/yellow]"


def status_cmd(
    project: str = PROJECT_ARG,
    debug: bool = DEBUG_OPT,
    config_dir: Path = CONFIG_DIR_OPT,
    cache_dir: Path = CACHE_DIR_OPT,
    ext: str = EXT_OPT,
) -> None:
    """Show whether the next start would recompile and hand off."""
    orch = project_orchestrator(project, debug, config_dir, cache_dir, ext)
    paths = orch.paths
    state = orch.state.items()

    lines = [
        f"[bold]Config source present:[/bold] {_yes_no(paths.config_file.is_file())}",
        f"[bold]Custom binary present:[/bold] {_yes_no(paths.temp_binary.is_file())}",
        f"[bold]Rebuild needed:[/bold]        {_yes_no(orch.needs_rebuild())}",
        f"[bold]Would hand off:[/bold]        {_yes_no(orch.should_handoff())}",
        "",
        "[bold]Persisted state:[/bold]",
    ]
    if state:
        lines += [f"  [cyan]{key}[/cyan] = {value}" for key, value in state.items()]
    else:
        lines.append("  [dim]none[/dim]")

    console.print(
        Panel(
            "\n".join(lines),
            title=f"[bold]{project}[/bold]",
            border_style="blue",
            padding=(1, 2),
        )
    )
