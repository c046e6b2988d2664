"""protoc plugin mode: CodeGeneratorRequest on stdin, response on stdout."""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO

from cachegen.config import resolve_config
from cachegen.errors import CacheGenError
from cachegen.generator import generate
from cli.exit_codes import ExitCode
from obs.tracing import SCOPE_CLI, stage_span
from protoc_plugin.decode import build_request, load_request
from protoc_plugin.encode import encode_response, error_response

_LOGGER = logging.getLogger(__name__)


def run_plugin(stdin: BinaryIO, stdout: BinaryIO) -> int:
    """Run one plugin invocation over binary streams.

    A failure is reported through the response ``error`` field and a
    non-zero exit code; no generated file is returned in that case.

    Parameters
    ----------
    stdin
        Stream holding the serialized ``CodeGeneratorRequest``.
    stdout
        Stream receiving the serialized ``CodeGeneratorResponse``.

    Returns
    -------
    int
        Exit status code.
    """
    data = stdin.read()
    with stage_span("cachegen.plugin", stage="plugin", scope_name=SCOPE_CLI):
        try:
            proto_request = load_request(data)
            config = resolve_config(proto_request.parameter)
            request = build_request(proto_request, config)
            response = generate(request, config)
        except CacheGenError as exc:
            _LOGGER.error("Cache manager generation failed: %s", exc)
            stdout.write(error_response(str(exc)))
            stdout.flush()
            return ExitCode.from_exception(exc)
    stdout.write(encode_response(response))
    stdout.flush()
    _LOGGER.info("Wrote %d generated files.", len(response.files))
    return ExitCode.SUCCESS


def plugin_command() -> int:
    """Run as a protoc plugin (reads stdin, writes stdout).

    Returns
    -------
    int
        Exit status code.
    """
    return run_plugin(sys.stdin.buffer, sys.stdout.buffer)


__all__ = ["plugin_command", "run_plugin"]
