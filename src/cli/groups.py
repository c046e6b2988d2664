"""Shared help-panel groups for the plugin CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Logging options for the invocation.",
    sort_key=0,
)

generation_group = Group(
    "Generation",
    help="Selection and cache runtime options (the plugin parameter overrides these).",
    sort_key=1,
)

output_group = Group(
    "Output",
    help="Configure where generated files are written.",
    sort_key=2,
)

__all__ = ["generation_group", "output_group", "session_group"]
