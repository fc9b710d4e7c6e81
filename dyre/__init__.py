"""Dyre: dynamic reconfiguration through compiled configuration.

A host program hands its startup to ``wrap_main``.  On every start Dyre
checks whether the user's configuration source is newer than the custom
binary compiled from it, recompiles when stale, and hands control to the
custom binary, which runs the same ``wrap_main`` with the user's config.
Compile errors never stop the program: they reach the host's
``show_error`` callback and the default configuration keeps running.

Minimal host::

    import dyre

    def real_main(config):
        print(config["message"])

    def show_error(config, errors):
        return {**config, "message": f"Error: {errors}"}

    params = dyre.Params(
        project_name="example",
        real_main=real_main,
        show_error=show_error,
    )

    if __name__ == "__main__":
        dyre.wrap_main(params, {"message": "Hello, world!"})
"""

__version__ = "0.1.0"

from dyre.core.orchestrator import Orchestrator, wrap_main
from dyre.core.relaunch import relaunch_master, restore_state
from dyre.core.state_store import persisted_value
from dyre.models.params import Params, default_params

__all__ = [
    "Orchestrator",
    "Params",
    "default_params",
    "persisted_value",
    "relaunch_master",
    "restore_state",
    "wrap_main",
    "__version__",
]
