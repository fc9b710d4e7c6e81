"""Main Typer application — imports and registers all CLI commands.

Entry point: ``dyre`` (configured via pyproject.toml project.scripts).

Commands: paths, status, build, clear-state.
"""

from __future__ import annotations

import logging

import typer

from dyre.cli.commands.build_cmd import build_cmd
from dyre.cli.commands.clear_state_cmd import clear_state_cmd
from dyre.cli.commands.paths_cmd import paths_cmd
from dyre.cli.commands.status_cmd import status_cmd
from dyre.config import settings

app = typer.Typer(
    name="dyre",
    help="Dyre: dynamic reconfiguration through compiled configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="paths", help="Show a project's resolved paths.")(paths_cmd)
app.command(name="status", help="Show the rebuild and handoff decision.")(status_cmd)
app.command(name="build", help="Compile the custom binary now.")(build_cmd)
app.command(name="clear-state", help="Drop a project's persisted state.")(clear_state_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, ...)."
    ),
) -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
