"""Main application setup for the cache manager plugin CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter
from cyclopts.config import Toml

from cli.commands.plugin import plugin_command
from cli.commands.version import get_version
from cli.groups import session_group

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"

_HELP_EPILOGUE = """
Examples:
  protoc --go-cache-manager_out=. orders.proto       Run as a protoc plugin
  protoc-gen-go-cache-manager render set.binpb -o gen Render from a descriptor set
  protoc-gen-go-cache-manager describe set.binpb      List candidate services

Environment Variables:
  CACHEGEN_LOG_LEVEL        Log level (DEBUG, INFO, WARNING, ERROR)
  CACHEGEN_MARKER_SUFFIX    Service name suffix selecting services (default: Cache)
  CACHEGEN_RUNTIME_IMPORT   Go import path of the cache runtime
  CACHEGEN_RUNTIME_PACKAGE  Go package name of the cache runtime
  CACHEGEN_PATHS            Output path mode (import, source_relative)
"""

app = App(
    name="protoc-gen-go-cache-manager",
    help="Generate Go cache managers for protobuf services ending in 'Cache'.",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(show_default=True, show_env_var=True),
    config=[
        Toml("cachegen.toml", must_exist=False, search_parents=True),
        Toml(
            "pyproject.toml",
            root_keys=("tool", "cachegen"),
            must_exist=False,
            search_parents=True,
        ),
    ],
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level (logs go to stderr).",
            env_var="CACHEGEN_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the plugin response.

    Raises
    ------
    ValueError
        Raised when the log level is unsupported.
    """
    if level not in LOG_LEVELS:
        msg = f"Unsupported log level {level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=level, stream=sys.stderr, format=LOG_FORMAT)


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Configure logging, then dispatch to the selected command.

    Without arguments the plugin mode runs, which is how protoc invokes it.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    configure_logging(session.log_level.upper())
    command, bound, _ignored = app.parse_args(tokens)
    return command(*bound.args, **bound.kwargs)


app.default(plugin_command)
app.command("cli.commands.render:render_command", name="render")
app.command("cli.commands.describe:describe_command", name="describe")
app.command("cli.commands.version:version_command", name="version")


def main() -> None:
    """Run the plugin CLI."""
    raise SystemExit(app.meta())


__all__ = ["app", "configure_logging", "main"]
