"""Host-supplied parameters for a Dyre-managed program."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

_stderr = Console(stderr=True, highlight=False, soft_wrap=True)


def stderr_status(message: str) -> None:
    """Default status sink: one line per message on stderr."""
    _stderr.print(message, markup=False)


class Params(BaseModel):
    """Configuration record supplied once by the host program.

    ``project_name``, ``real_main`` and ``show_error`` have no usable
    default.  Omitting any of them raises ``pydantic.ValidationError``
    when the record is built, not when the program later needs them.

    Parameters
    ----------
    project_name:
        Names the config file, the custom binary and the state namespace.
    config_dir, cache_dir:
        Overrides for the platform-standard directories.
    real_main:
        ``real_main(config)`` — the program proper.
    show_error:
        ``show_error(config, diagnostics) -> config`` — folds compiler
        diagnostics into the config that ``real_main`` receives.
    hide_packages:
        Packages/modules the compiler must not expose to the config source.
    compiler_flags:
        Extra flags appended to the compiler command.
    status_out:
        Sink for progress messages.
    source_extension:
        Extension of the configuration source file.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(min_length=1)
    config_dir: Path | None = None
    cache_dir: Path | None = None
    real_main: Callable[[Any], Any]
    show_error: Callable[[Any, str], Any]
    hide_packages: list[str] = Field(default_factory=list)
    compiler_flags: list[str] = Field(default_factory=list)
    status_out: Callable[[str], Any] = stderr_status
    source_extension: str = "hs"


def default_params(**overrides: Any) -> Params:
    """Build a ``Params`` from the defaults plus *overrides*.

    Every optional field falls back to its default; the three required
    fields must be among *overrides* or validation fails.
    """
    return Params(**overrides)
