"""Compiler invocation — builds the custom binary from the config source.

Only the invocation contract lives here: build a command line, run it to
completion, capture its diagnostic stream in ``<cache_dir>/errors.log``,
and turn the exit status into a ``BuildOutcome``.  What the compiler
accepts is its own business.

Backends implement the ``Compiler`` protocol:
1. **GhcCompiler** — the default; a ``ghc --make`` build of the config file.
2. **TemplateCompiler** — any toolchain, from a command template
   (``DYRE_COMPILER_COMMAND``).
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from dyre.config import DyreSettings
from dyre.models.outcome import BuildOutcome

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class Compiler(Protocol):
    """Protocol for compiler backends.

    Any object with a ``command(...) -> list[str]`` method satisfies this
    protocol.  The returned argv is run as-is, without a shell.
    """

    def command(
        self,
        config_file: Path,
        output_path: Path,
        cache_dir: Path,
        extra_flags: Sequence[str],
        excluded_modules: Sequence[str],
    ) -> list[str]:
        ...


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class GhcCompiler:
    """``ghc --make`` build of the config source.

    Parameters
    ----------
    executable:
        Compiler executable name or path.  Defaults to ``ghc``.
    """

    def __init__(self, executable: str = "ghc") -> None:
        self.executable = executable

    def command(
        self,
        config_file: Path,
        output_path: Path,
        cache_dir: Path,
        extra_flags: Sequence[str],
        excluded_modules: Sequence[str],
    ) -> list[str]:
        argv = [
            self.executable,
            "-v0",
            "--make",
            str(config_file),
            f"-i{config_file.parent}",
            "-outputdir", str(cache_dir),
            "-o", str(output_path),
            "-fforce-recomp",
        ]
        for package in excluded_modules:
            argv += ["-hide-package", package]
        argv += list(extra_flags)
        return argv


class TemplateCompiler:
    """Command built from a template with ``{placeholder}`` fields.

    Recognized placeholders: ``{config_file}``, ``{config_dir}``,
    ``{output}``, ``{cache_dir}``.  Any other brace text, such as a shell
    function body, is passed through untouched.  Extra flags are appended.
    Excluded modules have no generic spelling and are not passed.

    Parameters
    ----------
    template:
        A shell-style string (split with ``shlex``) or an argv list.
    """

    def __init__(self, template: str | Sequence[str]) -> None:
        self.template = shlex.split(template) if isinstance(template, str) else list(template)
        if not self.template:
            raise ValueError("Compiler command template is empty.")

    def command(
        self,
        config_file: Path,
        output_path: Path,
        cache_dir: Path,
        extra_flags: Sequence[str],
        excluded_modules: Sequence[str],
    ) -> list[str]:
        fields = {
            "config_file": str(config_file),
            "config_dir": str(config_file.parent),
            "output": str(output_path),
            "cache_dir": str(cache_dir),
        }
        if excluded_modules:
            logger.debug(
                "TemplateCompiler ignores excluded modules: %s",
                ", ".join(excluded_modules),
            )
        return [_substitute(part, fields) for part in self.template] + list(extra_flags)


def _substitute(part: str, fields: dict[str, str]) -> str:
    for name, value in fields.items():
        part = part.replace("{" + name + "}", value)
    return part


def default_compiler(settings: DyreSettings | None = None) -> Compiler:
    """The compiler backend selected by settings."""
    if settings is not None and settings.compiler_command:
        return TemplateCompiler(settings.compiler_command)
    return GhcCompiler(settings.compiler if settings is not None else "ghc")


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


def compile_config(
    config_file: Path,
    output_path: Path,
    cache_dir: Path,
    extra_flags: Sequence[str] = (),
    excluded_modules: Sequence[str] = (),
    *,
    compiler: Compiler | None = None,
    log_name: str = "errors.log",
) -> BuildOutcome:
    """Run the compiler to completion and report the result.

    Blocks until the compiler exits; no timeout is applied.  A nonzero
    exit, or a compiler that cannot be started, yields a failed outcome
    carrying the log contents.  This function does not raise for build
    failures.
    """
    compiler = compiler or GhcCompiler()
    cache_dir = Path(cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)
    log_path = cache_dir / log_name

    argv = compiler.command(
        Path(config_file), Path(output_path), cache_dir, extra_flags, excluded_modules
    )
    logger.info("Compiling %s -> %s", config_file, output_path)
    logger.debug("Compiler command: %s", shlex.join(argv))

    try:
        with log_path.open("w", encoding="utf-8") as log:
            result = subprocess.run(argv, stderr=log, check=False)
    except OSError as exc:
        message = f"Unable to run compiler {argv[0]!r}: {exc}"
        logger.error(message)
        log_path.write_text(message + "\n", encoding="utf-8")
        return BuildOutcome.failed(message)

    if result.returncode != 0:
        diagnostics = log_path.read_text(encoding="utf-8", errors="replace")
        logger.warning(
            "Compiler exited with status %d; diagnostics in %s",
            result.returncode, log_path,
        )
        return BuildOutcome.failed(
            diagnostics or f"Compiler exited with status {result.returncode}."
        )

    logger.info("Compiled %s", output_path)
    return BuildOutcome.succeeded()
