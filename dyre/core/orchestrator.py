"""Startup orchestrator — the central coordinator for a Dyre-managed program.

The Orchestrator wires together path resolution, the persisted-state store,
the staleness policy, the compiler backend and the handoff strategy, then
runs one startup sequence:

1. Resolve paths (once, at construction)
2. Clear the project's persisted state
3. Store recognized flag values
4. Read modification times and decide on a rebuild
5. Compile if stale; keep the outcome, never abort on failure
6. Hand off to the custom binary if it exists and is not this binary
7. Otherwise launch the host's main routine in-process
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from dyre.config import DyreSettings
from dyre.config import settings as default_settings
from dyre.core.compiler import Compiler, compile_config, default_compiler
from dyre.core.handoff import HandoffStrategy, handoff
from dyre.core.launch import launch_main
from dyre.core.paths import PathResolver, XdgPathResolver, resolve_paths
from dyre.core.stale_check import FORCE_FLAG, modification_time, should_rebuild
from dyre.core.state_store import StateStore, state_db_path
from dyre.models.outcome import BuildOutcome
from dyre.models.params import Params

logger = logging.getLogger(__name__)


class Orchestrator:
    """Runs the decide → compile → handoff → launch sequence.

    Parameters
    ----------
    params:
        Host-supplied parameters.
    argv:
        Command-line arguments, without the program name.  Defaults to
        ``sys.argv[1:]``.
    settings:
        Runtime settings.  Uses the module singleton if not provided.
    path_resolver, compiler, handoff_strategy, state_store:
        Collaborators; platform defaults are used for any left as None.
    """

    def __init__(
        self,
        params: Params,
        argv: Sequence[str] | None = None,
        *,
        settings: DyreSettings | None = None,
        path_resolver: PathResolver | None = None,
        compiler: Compiler | None = None,
        handoff_strategy: HandoffStrategy | None = None,
        state_store: StateStore | None = None,
    ) -> None:
        self.params = params
        self.argv: list[str] = list(sys.argv[1:] if argv is None else argv)
        self._settings = settings or default_settings
        self._resolver = path_resolver or XdgPathResolver()
        self._compiler = compiler or default_compiler(self._settings)
        self._handoff_strategy = handoff_strategy

        self.paths = resolve_paths(
            params, self.argv, resolver=self._resolver, settings=self._settings
        )
        self.state = state_store or StateStore(
            state_db_path(self.paths.cache_dir, self._settings),
            params.project_name,
        )
        self.outcome: BuildOutcome | None = None

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    @property
    def forced(self) -> bool:
        return FORCE_FLAG in self.argv

    def needs_rebuild(self) -> bool:
        """Apply the staleness policy to the current files."""
        this_time = modification_time(self.paths.this_binary)
        temp_time = modification_time(self.paths.temp_binary)
        conf_time = modification_time(self.paths.config_file)
        rebuild = should_rebuild(this_time, temp_time, conf_time, self.forced)
        logger.debug(
            "Staleness: this=%s custom=%s config=%s forced=%s -> rebuild=%s",
            this_time, temp_time, conf_time, self.forced, rebuild,
        )
        return rebuild

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def persist_flags(self) -> dict[str, str]:
        """Clear the project's state, then store recognized flag values."""
        self.state.clear()
        return self.state.store_flag_values(self.argv)

    def build(self) -> BuildOutcome:
        """Compile the config source into the custom binary."""
        status = self.params.status_out
        status(f"Configuration '{self.paths.config_file}' changed. Recompiling.")
        outcome = compile_config(
            self.paths.config_file,
            self.paths.temp_binary,
            self.paths.cache_dir,
            self.params.compiler_flags,
            self.params.hide_packages,
            compiler=self._compiler,
            log_name=self._settings.error_log_name,
        )
        if outcome.success:
            status("Program reconfiguration successful.")
        else:
            status("Error occurred while loading configuration file.")
        return outcome

    def should_handoff(self) -> bool:
        """Whether a custom binary exists and is not the running binary."""
        return self.paths.temp_binary.is_file() and not self.paths.is_custom_binary

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, initial_config: Any) -> None:
        """Execute one startup sequence.

        Does not return if control is handed to the custom binary.
        """
        self.persist_flags()

        if self.needs_rebuild():
            self.outcome = self.build()

        if self.should_handoff():
            self.params.status_out(f"Launching custom binary {self.paths.temp_binary}")
            if handoff(
                self.paths.temp_binary,
                self.argv,
                self.paths.this_binary,
                strategy=self._handoff_strategy,
            ):
                return

        diagnostics = self.outcome.diagnostics if self.outcome else None
        launch_main(self.params, diagnostics, initial_config)


def wrap_main(
    params: Params,
    initial_config: Any,
    argv: Sequence[str] | None = None,
) -> None:
    """Program entry point for a Dyre-managed host.

    Call from ``main()`` with the default configuration; the custom binary
    built from the user's config source calls it again with its own.
    """
    Orchestrator(params, argv).run(initial_config)
