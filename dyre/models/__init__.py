"""Dyre data models — all Pydantic v2, all frozen (immutable)."""

from dyre.models.outcome import BuildOutcome
from dyre.models.params import Params, default_params, stderr_status
from dyre.models.paths import ResolvedPaths

__all__ = [
    "BuildOutcome",
    "Params",
    "ResolvedPaths",
    "default_params",
    "stderr_status",
]
