"""Path resolution — where the config source, custom binary and cache live.

The platform-standard directories come from a pluggable ``PathResolver``.
``XdgPathResolver`` follows the XDG base directory variables on POSIX and
``%LOCALAPPDATA%`` / ``%APPDATA%`` on Windows.

With ``--dyre-debug`` (or ``DYRE_DEBUG=true``) both directories are taken
relative to the working directory instead: the cache becomes ``./cache``
and the config directory ``.``.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from dyre.config import DyreSettings
from dyre.models.params import Params
from dyre.models.paths import ResolvedPaths

logger = logging.getLogger(__name__)

DEBUG_FLAG = "--dyre-debug"


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class PathResolver(Protocol):
    """Supplies the three platform-dependent locations for a project."""

    def this_binary(self) -> Path:
        """Path of the currently executing binary."""
        ...

    def cache_dir(self, project_name: str) -> Path:
        ...

    def config_dir(self, project_name: str) -> Path:
        ...


# ---------------------------------------------------------------------------
# Default implementation
# ---------------------------------------------------------------------------


class XdgPathResolver:
    """Platform-standard directories, XDG on POSIX."""

    def this_binary(self) -> Path:
        if getattr(sys, "frozen", False):
            return Path(sys.executable)
        script = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        if script is not None and script.is_file():
            return script.absolute()
        return Path(sys.executable)

    def cache_dir(self, project_name: str) -> Path:
        if os.name == "nt":
            base = os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local"
            return Path(base) / project_name / "cache"
        base = os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache"
        return Path(base) / project_name

    def config_dir(self, project_name: str) -> Path:
        if os.name == "nt":
            base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
            return Path(base) / project_name
        base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
        return Path(base) / project_name


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def platform_tag() -> str:
    """Operating system component of the custom binary name."""
    return "windows" if sys.platform == "win32" else sys.platform


def arch_tag() -> str:
    """Architecture component of the custom binary name."""
    return platform.machine().lower() or "unknown"


def binary_name(project_name: str) -> str:
    """File name of a project's compiled custom binary."""
    name = f"{project_name}-{platform_tag()}-{arch_tag()}"
    if os.name == "nt":
        name += ".exe"
    return name


def resolve_paths(
    params: Params,
    argv: Sequence[str],
    *,
    resolver: PathResolver | None = None,
    settings: DyreSettings | None = None,
    cwd: Path | None = None,
) -> ResolvedPaths:
    """Compute this invocation's ``ResolvedPaths``.

    Precedence per directory: debug mode, then the ``Params`` override,
    then the resolver.
    """
    resolver = resolver or XdgPathResolver()
    debug = DEBUG_FLAG in argv or bool(settings and settings.debug)
    name = params.project_name

    if debug:
        cwd = cwd or Path.cwd()
        cache_dir = cwd / "cache"
        config_dir = cwd
    else:
        cache_dir = params.cache_dir or resolver.cache_dir(name)
        config_dir = params.config_dir or resolver.config_dir(name)

    paths = ResolvedPaths(
        this_binary=resolver.this_binary(),
        temp_binary=cache_dir / binary_name(name),
        config_file=config_dir / f"{name}.{params.source_extension}",
        cache_dir=cache_dir,
        config_dir=config_dir,
    )
    logger.debug(
        "Resolved paths for %s (debug=%s): binary=%s custom=%s config=%s",
        name, debug, paths.this_binary, paths.temp_binary, paths.config_file,
    )
    return paths
