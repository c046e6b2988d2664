"""Describe which services of a descriptor set receive cache managers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from cachegen.errors import CacheGenError
from cachegen.naming import manager_name, output_filename
from cachegen.selection import candidate_services
from cli.exit_codes import ExitCode
from cli.options import DEFAULT_GENERATION_OPTIONS, GenerationOptions, load_generation_request
from serde_msgspec import StructBaseStrict, dumps_json

_LOGGER = logging.getLogger(__name__)


class ServiceSummary(StructBaseStrict, frozen=True):
    """Candidate service and the manager it produces."""

    name: str
    manager: str
    methods: tuple[str, ...] = ()


class FileSummary(StructBaseStrict, frozen=True):
    """Generation outcome for one proto file."""

    path: str
    package_name: str
    output: str | None = None
    candidates: tuple[ServiceSummary, ...] = ()
    skipped: tuple[str, ...] = ()


def describe_command(
    descriptor_set: Annotated[
        Path,
        Parameter(validator=validators.Path(exists=True, dir_okay=False)),
    ],
    options: Annotated[GenerationOptions, Parameter(name="*")] = DEFAULT_GENERATION_OPTIONS,
    *,
    file: Annotated[
        tuple[str, ...],
        Parameter(name="--file", help="Proto file name to describe (repeatable)."),
    ] = (),
) -> int:
    """Print a JSON summary of candidate services without generating code.

    Returns
    -------
    int
        Exit status code.
    """
    try:
        request, config = load_generation_request(descriptor_set, files=file, options=options)
    except CacheGenError as exc:
        _LOGGER.error("Could not load descriptor set: %s", exc)
        return ExitCode.from_exception(exc)
    summaries: list[FileSummary] = []
    for proto in request.files:
        if not proto.generate:
            continue
        candidates = candidate_services(proto, config.policy)
        selected = {service.name for service in candidates}
        summaries.append(
            FileSummary(
                path=proto.path,
                package_name=proto.package_name,
                output=output_filename(proto.filename_prefix) if candidates else None,
                candidates=tuple(
                    ServiceSummary(
                        name=service.name,
                        manager=manager_name(service.name),
                        methods=tuple(method.name for method in service.methods),
                    )
                    for service in candidates
                ),
                skipped=tuple(
                    service.name for service in proto.services if service.name not in selected
                ),
            )
        )
    sys.stdout.write(dumps_json(summaries, pretty=True).decode("utf-8") + "\n")
    return ExitCode.SUCCESS


__all__ = ["FileSummary", "ServiceSummary", "describe_command"]
