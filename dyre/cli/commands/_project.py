"""Shared project options for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from dyre.core.orchestrator import Orchestrator
from dyre.core.paths import DEBUG_FLAG
from dyre.models.params import Params

PROJECT_ARG = typer.Argument(..., help="Project name, as passed to Params.")
DEBUG_OPT = typer.Option(
    False, "--debug", "-d", help="Use working-directory-relative paths (--dyre-debug)."
)
CONFIG_DIR_OPT = typer.Option(None, "--config-dir", help="Override the config directory.")
CACHE_DIR_OPT = typer.Option(None, "--cache-dir", help="Override the cache directory.")
EXT_OPT = typer.Option("hs", "--ext", help="Config source file extension.")


def _inspect_only(*_: Any) -> None:
    raise RuntimeError("The CLI never launches the host program.")


def project_orchestrator(
    project: str,
    debug: bool,
    config_dir: Path | None,
    cache_dir: Path | None,
    ext: str,
) -> Orchestrator:
    """An Orchestrator for *project* that is only used for its steps."""
    params = Params(
        project_name=project,
        config_dir=config_dir,
        cache_dir=cache_dir,
        source_extension=ext,
        real_main=_inspect_only,
        show_error=_inspect_only,
    )
    return Orchestrator(params, [DEBUG_FLAG] if debug else [])
