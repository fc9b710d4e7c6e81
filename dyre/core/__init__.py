"""Dyre engine: staleness policy, compiler invocation, handoff, launch."""

from dyre.core.compiler import Compiler, GhcCompiler, TemplateCompiler, compile_config
from dyre.core.handoff import (
    ExecHandoff,
    HandoffError,
    HandoffStrategy,
    SpawnHandoff,
    handoff,
    select_strategy,
)
from dyre.core.launch import launch_main
from dyre.core.orchestrator import Orchestrator, wrap_main
from dyre.core.paths import PathResolver, XdgPathResolver, resolve_paths
from dyre.core.stale_check import should_rebuild
from dyre.core.state_store import StateStore, persisted_value

__all__ = [
    # compiler
    "Compiler",
    "GhcCompiler",
    "TemplateCompiler",
    "compile_config",
    # handoff
    "HandoffError",
    "HandoffStrategy",
    "ExecHandoff",
    "SpawnHandoff",
    "handoff",
    "select_strategy",
    # paths
    "PathResolver",
    "XdgPathResolver",
    "resolve_paths",
    # state
    "StateStore",
    "persisted_value",
    # sequence
    "should_rebuild",
    "launch_main",
    "Orchestrator",
    "wrap_main",
]
