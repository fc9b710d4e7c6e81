"""Runtime settings — env-driven, read once per process.

Centralized settings using pydantic-settings.  Reads from a .env file and
DYRE_* environment variables so a host can redirect the compiler, the
diagnostics log, or the persisted-state database without code changes.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DyreSettings(BaseSettings):
    """Dyre settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export DYRE_LOG_LEVEL=DEBUG
        export DYRE_COMPILER=/opt/ghc/bin/ghc
        export DYRE_COMPILER_COMMAND="cc {config_file} -o {output}"

    Or via .env file::

        DYRE_STATE_PATH=/var/lib/myapp/state.db
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DYRE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Behaves as if --dyre-debug were on the command line
    debug: bool = False

    # Compiler toolchain
    compiler: str = "ghc"
    compiler_command: str | None = None  # template, see TemplateCompiler
    error_log_name: str = "errors.log"

    # Persisted state; defaults to <cache_dir>/state.db
    state_path: Path | None = None


# Module-level singleton — import as `from dyre.config import settings`
settings = DyreSettings()
