"""Resolved filesystem locations for one invocation."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ResolvedPaths(BaseModel):
    """The files a single invocation decides over.

    Computed once at startup and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    this_binary: Path  # currently executing binary
    temp_binary: Path  # compiled custom binary, cache_dir/<project>-<os>-<arch>
    config_file: Path  # config_dir/<project>.<ext>
    cache_dir: Path
    config_dir: Path

    @property
    def is_custom_binary(self) -> bool:
        """Whether the running binary is the compiled custom binary."""
        return _same_file(self.this_binary, self.temp_binary)


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()
