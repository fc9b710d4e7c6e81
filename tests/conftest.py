"""Shared test fixtures for Dyre."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from dyre.config import DyreSettings
from dyre.models.params import Params
from tests.doubles import FixedResolver, make_executable


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> DyreSettings:
    """Settings isolated from the developer's environment."""
    return DyreSettings(_env_file=None, debug=False, compiler_command=None, state_path=None)


@pytest.fixture
def dirs(tmp_path: Path) -> dict[str, Path]:
    """Config, cache and bin directories under a temp root."""
    layout = {
        "config": tmp_path / "config",
        "cache": tmp_path / "cache",
        "bin": tmp_path / "bin",
    }
    for path in layout.values():
        path.mkdir()
    return layout


@pytest.fixture
def host_binary(dirs: dict[str, Path]) -> Path:
    """The 'running' host binary, dated well in the past."""
    return make_executable(dirs["bin"] / "host", mtime=1_000_000)


@pytest.fixture
def resolver(host_binary: Path, dirs: dict[str, Path]) -> FixedResolver:
    return FixedResolver(host_binary, dirs["cache"], dirs["config"])


@pytest.fixture
def calls() -> dict[str, list[Any]]:
    """Call log shared by the params callbacks."""
    return {"real_main": [], "show_error": []}


@pytest.fixture
def make_params(calls: dict[str, list[Any]]) -> Callable[..., Params]:
    """Factory fixture: build Params whose callbacks record their calls."""

    def real_main(config: Any) -> None:
        calls["real_main"].append(config)

    def show_error(config: Any, errors: str) -> Any:
        calls["show_error"].append((config, errors))
        return {"config": config, "errors": errors}

    def _factory(**overrides: Any) -> Params:
        defaults: dict[str, Any] = {
            "project_name": "example",
            "real_main": real_main,
            "show_error": show_error,
            "status_out": lambda message: None,
        }
        defaults.update(overrides)
        return Params(**defaults)

    return _factory
