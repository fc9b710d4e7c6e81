"""Persisted state — a project-namespaced key/value store backed by SQLite.

The store lives outside the process so that values captured before a
handoff are still readable once the process image has been replaced.

Lifecycle per invocation:
- ``clear()`` at startup, before anything else is recorded.
- ``put()`` for each recognized flag found on the command line.
- ``get()`` / ``items()`` from the host's main routine, in whichever
  process ends up running it.

Every call opens its own connection and commits immediately.  There is no
locking beyond SQLite's own: two invocations for the same project may
overwrite each other's entries.
"""

from __future__ import annotations

import logging
import sqlite3
import sys
from collections.abc import Sequence
from pathlib import Path

from dyre.config import DyreSettings
from dyre.config import settings as default_settings
from dyre.core.paths import PathResolver, resolve_paths
from dyre.models.params import Params

logger = logging.getLogger(__name__)

PERSIST_STATE_KEY = "persistState"
MASTER_BINARY_KEY = "masterBinary"

# Flag prefix -> key it is stored under
FLAG_KEYS: dict[str, str] = {
    "--dyre-state-persist=": PERSIST_STATE_KEY,
    "--dyre-master-binary=": MASTER_BINARY_KEY,
}

STATE_DB_NAME = "state.db"


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_STATE = """
CREATE TABLE IF NOT EXISTS persisted_state (
    namespace  TEXT NOT NULL,
    key        TEXT NOT NULL,
    value      TEXT NOT NULL,
    PRIMARY KEY (namespace, key)
);
"""


class StateStore:
    """Named key/value store scoped to one project.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created if it does not exist.
    namespace:
        Scope for every key; normally the project name.
    """

    def __init__(self, db_path: Path, namespace: str) -> None:
        self._db_path = Path(db_path)
        self.namespace = namespace
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_STATE)
            conn.commit()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every key in this namespace."""
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM persisted_state WHERE namespace = ?",
                (self.namespace,),
            )
            conn.commit()
        logger.debug("Cleared persisted state for %s", self.namespace)

    def put(self, key: str, value: str) -> None:
        """Set *key* to *value*, replacing any previous value."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO persisted_state (namespace, key, value)
                VALUES (?, ?, ?)
                ON CONFLICT(namespace, key) DO UPDATE SET value = excluded.value
                """,
                (self.namespace, key, value),
            )
            conn.commit()
        logger.debug("Persisted %s.%s", self.namespace, key)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return the value for *key*, or ``None`` if unset."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM persisted_state WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            ).fetchone()
        return row[0] if row else None

    def items(self) -> dict[str, str]:
        """Return every key/value pair in this namespace."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key, value FROM persisted_state WHERE namespace = ? ORDER BY key",
                (self.namespace,),
            ).fetchall()
        return {key: value for key, value in rows}

    # ------------------------------------------------------------------
    # Flag capture
    # ------------------------------------------------------------------

    def store_flag_values(self, argv: Sequence[str]) -> dict[str, str]:
        """Store the suffix of the first argument matching each flag prefix.

        Returns the pairs that were stored.  Flags that do not appear
        leave their key unset.
        """
        stored: dict[str, str] = {}
        for prefix, key in FLAG_KEYS.items():
            value = flag_value(argv, prefix)
            if value is not None:
                self.put(key, value)
                stored[key] = value
        return stored


def flag_value(argv: Sequence[str], prefix: str) -> str | None:
    """Return the suffix of the first argument starting with *prefix*."""
    for arg in argv:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def state_db_path(cache_dir: Path, settings: DyreSettings | None = None) -> Path:
    """Where the state database lives for a given cache directory."""
    if settings is not None and settings.state_path is not None:
        return settings.state_path
    return Path(cache_dir) / STATE_DB_NAME


def open_store(
    params: Params,
    *,
    argv: Sequence[str] | None = None,
    settings: DyreSettings | None = None,
    resolver: PathResolver | None = None,
) -> StateStore:
    """Open the store the orchestrator uses for *params* and *argv*.

    The location goes through ``resolve_paths``, so debug mode, the
    ``Params.cache_dir`` override and a custom resolver all apply.
    """
    settings = settings or default_settings
    argv = sys.argv[1:] if argv is None else list(argv)
    paths = resolve_paths(params, argv, resolver=resolver, settings=settings)
    return StateStore(state_db_path(paths.cache_dir, settings), params.project_name)


def persisted_value(
    params: Params,
    key: str,
    *,
    argv: Sequence[str] | None = None,
    settings: DyreSettings | None = None,
    resolver: PathResolver | None = None,
) -> str | None:
    """Read one persisted value for the project described by *params*.

    Intended for the host's main routine, after ``wrap_main`` has
    repopulated the store for this invocation.
    """
    store = open_store(params, argv=argv, settings=settings, resolver=resolver)
    return store.get(key)
