"""Tests for runtime settings — env-driven overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from dyre.config import DyreSettings

_VARS = (
    "DYRE_LOG_LEVEL",
    "DYRE_DEBUG",
    "DYRE_COMPILER",
    "DYRE_COMPILER_COMMAND",
    "DYRE_ERROR_LOG_NAME",
    "DYRE_STATE_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


class TestDyreSettings:
    def test_defaults(self):
        config = DyreSettings(_env_file=None)
        assert config.log_level == "WARNING"
        assert config.debug is False
        assert config.compiler == "ghc"
        assert config.compiler_command is None
        assert config.error_log_name == "errors.log"
        assert config.state_path is None

    def test_env_overrides(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("DYRE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("DYRE_COMPILER", "/opt/ghc/bin/ghc")
        monkeypatch.setenv("DYRE_COMPILER_COMMAND", "cc {config_file} -o {output}")
        monkeypatch.setenv("DYRE_ERROR_LOG_NAME", "build.log")
        monkeypatch.setenv("DYRE_STATE_PATH", str(tmp_path / "state.db"))

        config = DyreSettings(_env_file=None)

        assert config.log_level == "DEBUG"
        assert config.compiler == "/opt/ghc/bin/ghc"
        assert config.compiler_command == "cc {config_file} -o {output}"
        assert config.error_log_name == "build.log"
        assert config.state_path == tmp_path / "state.db"

    def test_debug_flag_from_env(self, monkeypatch):
        monkeypatch.setenv("DYRE_DEBUG", "true")
        assert DyreSettings(_env_file=None).debug is True

    def test_unprefixed_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("COMPILER", "clang")
        assert DyreSettings(_env_file=None).compiler == "ghc"

    def test_env_file(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("DYRE_COMPILER=ghc-9.8\nDYRE_DEBUG=1\n")

        config = DyreSettings(_env_file=env_file)

        assert config.compiler == "ghc-9.8"
        assert config.debug is True
