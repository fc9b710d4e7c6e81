"""Tests for Dyre models — required-field validation, immutability."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dyre.models.outcome import BuildOutcome
from dyre.models.params import Params, default_params, stderr_status


def _main(config):
    return None


def _error(config, errors):
    return config


class TestParams:
    def test_minimal(self):
        params = Params(project_name="example", real_main=_main, show_error=_error)

        assert params.hide_packages == []
        assert params.compiler_flags == []
        assert params.status_out is stderr_status
        assert params.config_dir is None
        assert params.source_extension == "hs"

    @pytest.mark.parametrize("missing", ["project_name", "real_main", "show_error"])
    def test_required_fields(self, missing):
        fields = {"project_name": "example", "real_main": _main, "show_error": _error}
        del fields[missing]
        with pytest.raises(ValidationError):
            Params(**fields)

    def test_empty_project_name_rejected(self):
        with pytest.raises(ValidationError):
            Params(project_name="", real_main=_main, show_error=_error)

    def test_callbacks_must_be_callable(self):
        with pytest.raises(ValidationError):
            Params(project_name="example", real_main="main", show_error=_error)

    def test_frozen(self):
        params = Params(project_name="example", real_main=_main, show_error=_error)
        with pytest.raises(ValidationError):
            params.project_name = "other"

    def test_default_params_requires_fields(self):
        with pytest.raises(ValidationError):
            default_params(project_name="example")

    def test_default_params_with_overrides(self):
        params = default_params(
            project_name="example", real_main=_main, show_error=_error,
            compiler_flags=["-O2"],
        )
        assert params.compiler_flags == ["-O2"]


class TestBuildOutcome:
    def test_succeeded(self):
        outcome = BuildOutcome.succeeded()
        assert outcome.success
        assert outcome.diagnostics == ""

    def test_failed(self):
        outcome = BuildOutcome.failed("line 1: error")
        assert not outcome.success
        assert outcome.diagnostics == "line 1: error"
