"""Relaunch with state — restart the master binary and carry state across.

A running program saves JSON-serializable state to a file under its cache
directory and re-executes its master binary with
``--dyre-state-persist=<file>``.  The next invocation captures that flag
into the persisted store, and ``restore_state`` reads the file back.

File layout::

    <cache_dir>/
        {uuid}.state.json
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NoReturn

from dyre.config import DyreSettings
from dyre.core.handoff import HandoffStrategy, ensure_executable, select_strategy
from dyre.core.paths import PathResolver, XdgPathResolver
from dyre.core.state_store import (
    MASTER_BINARY_KEY,
    PERSIST_STATE_KEY,
    open_store,
)
from dyre.models.params import Params

logger = logging.getLogger(__name__)

STATE_PERSIST_PREFIX = "--dyre-state-persist="


def save_state(state: Any, cache_dir: Path) -> Path:
    """Write *state* as JSON under *cache_dir* and return the file path."""
    cache_dir = Path(cache_dir)
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / f"{uuid.uuid4().hex}.state.json"
    path.write_text(json.dumps(state, sort_keys=True), encoding="utf-8")
    logger.debug("Saved relaunch state to %s", path)
    return path


def restore_state(
    params: Params,
    *,
    argv: Sequence[str] | None = None,
    settings: DyreSettings | None = None,
    resolver: PathResolver | None = None,
    remove: bool = True,
) -> Any | None:
    """Load the state saved by the previous process, if any.

    Returns ``None`` when no state file was passed along or it is gone.
    The file is deleted after reading unless *remove* is False.
    """
    store = open_store(params, argv=argv, settings=settings, resolver=resolver)
    value = store.get(PERSIST_STATE_KEY)
    if not value:
        return None

    path = Path(value)
    if not path.is_file():
        logger.warning("Persisted state file %s is missing", path)
        return None

    state = json.loads(path.read_text(encoding="utf-8"))
    if remove:
        path.unlink(missing_ok=True)
    return state


def relaunch_master(
    params: Params,
    state: Any = None,
    *,
    argv: Sequence[str] | None = None,
    settings: DyreSettings | None = None,
    resolver: PathResolver | None = None,
    strategy: HandoffStrategy | None = None,
) -> NoReturn:
    """Restart the master binary, optionally passing *state* along.

    The target is the ``masterBinary`` value captured at startup, or the
    running binary when none was given.  Existing state flags are dropped
    from the arguments; a new one is appended when *state* is not None.

    The startup handoff forwards arguments unchanged, so ``masterBinary``
    is only set when the host itself starts with
    ``--dyre-master-binary=<path>``.  Without it, a call made from inside
    the custom binary restarts the custom binary: a newer host binary is
    not picked up, and a changed config is only rebuilt on the following
    start.
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    store = open_store(params, argv=argv, settings=settings, resolver=resolver)

    master = store.get(MASTER_BINARY_KEY)
    target = Path(master) if master else (resolver or XdgPathResolver()).this_binary()

    args = [arg for arg in argv if not arg.startswith(STATE_PERSIST_PREFIX)]
    if state is not None:
        state_file = save_state(state, store.db_path.parent)
        args.append(f"{STATE_PERSIST_PREFIX}{state_file}")

    ensure_executable(target)
    strategy = strategy or select_strategy()
    logger.info("Relaunching master binary %s", target)
    strategy.transfer(target, args)
