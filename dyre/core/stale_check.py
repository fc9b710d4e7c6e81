"""Staleness policy — decides whether the custom binary must be rebuilt.

The rule keeps three separate triggers, gated on the config source
existing:

    rebuild = config exists AND (custom < config OR custom < this OR forced)

The ``custom < this`` branch catches a host binary that was upgraded after
the custom binary was built.  An absent timestamp sorts before every
present one, so a missing custom binary always triggers a rebuild.
"""

from __future__ import annotations

from pathlib import Path

FORCE_FLAG = "--force-reconf"


def modification_time(path: Path) -> float | None:
    """Return the file's mtime, or ``None`` if it does not exist."""
    try:
        if not path.is_file():
            return None
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


def _older(a: float | None, b: float | None) -> bool:
    """``a < b`` with ``None`` ordered before every timestamp."""
    if b is None:
        return False
    if a is None:
        return True
    return a < b


def should_rebuild(
    this_time: float | None,
    temp_time: float | None,
    conf_time: float | None,
    forced: bool,
) -> bool:
    """Return whether the custom binary should be recompiled."""
    if conf_time is None:
        return False
    return _older(temp_time, conf_time) or _older(temp_time, this_time) or forced
