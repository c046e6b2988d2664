"""Tests for CLI wiring and exit codes."""

from __future__ import annotations

from pathlib import Path

import pytest

from cachegen.errors import ConfigError, DescriptorError, GenerationError, RequestDecodeError
from cli.app import app, configure_logging
from cli.exit_codes import ExitCode
from tests.test_helpers.protos import descriptor_set


def test_default_command_is_plugin_mode() -> None:
    """Without arguments the plugin command is selected."""
    command, bound, _ignored = app.parse_args([], exit_on_error=False)
    assert command.__name__ == "plugin_command"
    assert bound.args == ()


def test_render_arguments_parse(tmp_path: Path) -> None:
    """Render options bind to the command and the options dataclass."""
    path = tmp_path / "set.binpb"
    path.write_bytes(descriptor_set().SerializeToString())
    command, bound, _ignored = app.parse_args(
        ["render", str(path), "--out", str(tmp_path / "gen"), "--marker-suffix", "Memo"],
        exit_on_error=False,
    )
    assert command.__name__ == "render_command"
    assert bound.arguments["descriptor_set"] == path
    assert bound.arguments["out"] == tmp_path / "gen"
    assert bound.arguments["options"].marker_suffix == "Memo"


def test_configure_logging_rejects_unknown_level() -> None:
    """Unsupported levels are rejected."""
    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging("TRACE")


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (RequestDecodeError("x"), ExitCode.PARSE_ERROR),
        (DescriptorError("x"), ExitCode.DESCRIPTOR_ERROR),
        (ConfigError("x"), ExitCode.CONFIG_ERROR),
        (GenerationError("a.proto", ValueError("x")), ExitCode.GENERATION_ERROR),
        (FileNotFoundError("x"), ExitCode.CONFIG_ERROR),
        (RuntimeError("x"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_from_exception(exc: BaseException, expected: ExitCode) -> None:
    """Errors map onto the exit code taxonomy."""
    assert ExitCode.from_exception(exc) is expected


def test_generation_error_message() -> None:
    """Generation errors name the failing file and the cause."""
    error = GenerationError("orders.proto", DescriptorError("Service without a name."))
    assert str(error) == "generating file orders.proto: Service without a name."
