"""Process handoff — transfers control to the custom binary.

Two platform-selected strategies satisfy one contract: control moves to
the target binary with the original arguments and environment, and this
process does not resume except to relay the child's exit code.

1. **ExecHandoff** — replaces the process image (POSIX).
2. **SpawnHandoff** — runs the target as a child with inherited stdio,
   waits, and exits with its status (platforms without in-place exec).
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class HandoffError(RuntimeError):
    """Raised when the handoff target cannot be executed.

    Once a handoff has been chosen there is no fallback; this error must
    propagate to the host.
    """


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class HandoffStrategy(Protocol):
    """Protocol for handing control to another binary."""

    def transfer(self, target: Path, args: Sequence[str]) -> NoReturn:
        """Run *target* with *args*; never returns on success."""
        ...


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class ExecHandoff:
    """Replace the current process image with the target."""

    def transfer(self, target: Path, args: Sequence[str]) -> NoReturn:
        argv = [str(target), *args]
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execv(str(target), argv)
        except OSError as exc:
            raise HandoffError(f"Unable to exec {target}: {exc}") from exc
        raise AssertionError("os.execv returned")  # pragma: no cover


class SpawnHandoff:
    """Run the target as a child process and relay its exit status."""

    def transfer(self, target: Path, args: Sequence[str]) -> NoReturn:
        try:
            result = subprocess.run([str(target), *args], check=False)
        except OSError as exc:
            raise HandoffError(f"Unable to start {target}: {exc}") from exc
        sys.exit(result.returncode)


def select_strategy() -> HandoffStrategy:
    """In-place exec where the platform supports it, spawn-and-relay otherwise."""
    if os.name == "posix" and hasattr(os, "execv"):
        return ExecHandoff()
    return SpawnHandoff()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def ensure_executable(target: Path) -> None:
    """Raise ``HandoffError`` unless *target* is an executable file."""
    if not target.is_file():
        logger.critical("Handoff target %s does not exist", target)
        raise HandoffError(f"Handoff target {target} does not exist.")
    if not os.access(target, os.X_OK):
        logger.critical("Handoff target %s is not executable", target)
        raise HandoffError(f"Handoff target {target} is not executable.")


def handoff(
    target: Path,
    original_args: Sequence[str],
    this_binary: Path,
    *,
    strategy: HandoffStrategy | None = None,
) -> bool:
    """Hand control to *target* unless it is the running binary.

    Returns ``False`` without doing anything when *target* resolves to
    *this_binary*; the caller then proceeds to launch in-process.  With a
    real strategy a successful handoff never returns.

    Raises
    ------
    HandoffError
        If *target* is missing or not executable.
    """
    target = Path(target)
    if target.resolve() == Path(this_binary).resolve():
        logger.debug("Handoff target %s is the running binary; skipping", target)
        return False

    ensure_executable(target)
    strategy = strategy or select_strategy()
    logger.info("Handing off to %s via %s", target, type(strategy).__name__)
    strategy.transfer(target, list(original_args))
    return True
