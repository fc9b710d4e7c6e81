"""Dyre CLI — Typer-based developer tool.

Provides the ``dyre`` command with subcommands for inspecting a project's
resolved paths and rebuild decision, forcing a build of the custom binary,
and clearing persisted state.

All output uses Rich for formatted terminal display.
"""
