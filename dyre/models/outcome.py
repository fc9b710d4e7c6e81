"""Compile result model — failures are values, not exceptions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BuildOutcome(BaseModel):
    """Result of one compiler invocation.

    Launch consumes ``diagnostics`` later; a failed build never aborts the
    startup sequence.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    diagnostics: str = ""

    @classmethod
    def succeeded(cls) -> BuildOutcome:
        return cls(success=True)

    @classmethod
    def failed(cls, diagnostics: str) -> BuildOutcome:
        return cls(success=False, diagnostics=diagnostics)
