"""Render cache managers from a FileDescriptorSet on disk."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter, validators

from cachegen.errors import CacheGenError
from cachegen.generator import generate
from cli.exit_codes import ExitCode
from cli.groups import output_group
from cli.options import DEFAULT_GENERATION_OPTIONS, GenerationOptions, load_generation_request

_LOGGER = logging.getLogger(__name__)


def render_command(
    descriptor_set: Annotated[
        Path,
        Parameter(validator=validators.Path(exists=True, dir_okay=False)),
    ],
    options: Annotated[GenerationOptions, Parameter(name="*")] = DEFAULT_GENERATION_OPTIONS,
    *,
    out: Annotated[
        Path,
        Parameter(
            name=["--out", "-o"],
            help="Directory receiving the generated files.",
            group=output_group,
        ),
    ] = Path(),
    file: Annotated[
        tuple[str, ...],
        Parameter(
            name="--file",
            help="Proto file name to generate (repeatable; default: every file in the set).",
            group=output_group,
        ),
    ] = (),
) -> int:
    """Generate cache managers for a descriptor set.

    The descriptor set is produced by ``protoc --descriptor_set_out``; pass
    ``--include_imports --include_source_info`` so message types resolve and
    comments are carried over.

    Returns
    -------
    int
        Exit status code.
    """
    try:
        request, config = load_generation_request(descriptor_set, files=file, options=options)
        response = generate(request, config)
    except CacheGenError as exc:
        _LOGGER.error("Cache manager generation failed: %s", exc)
        return ExitCode.from_exception(exc)
    for generated in response.files:
        target = out / generated.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        sys.stdout.write(f"{target}\n")
    if not response.files:
        _LOGGER.warning("No service ending in %r found.", config.policy.marker_suffix)
    return ExitCode.SUCCESS


__all__ = ["render_command"]
