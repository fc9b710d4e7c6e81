"""Launch — the terminal step that runs the host's main routine."""

from __future__ import annotations

import logging
from typing import Any

from dyre.models.params import Params

logger = logging.getLogger(__name__)


def launch_main(params: Params, diagnostics: str | None, config: Any) -> None:
    """Run ``params.real_main``, folding in compiler diagnostics first.

    With non-empty *diagnostics* the config passed to ``real_main`` is the
    one returned by ``params.show_error(config, diagnostics)``.
    """
    if diagnostics:
        logger.debug("Applying compiler diagnostics through show_error")
        config = params.show_error(config, diagnostics)
    params.real_main(config)
