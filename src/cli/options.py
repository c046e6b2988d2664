"""Shared generation options for descriptor-set commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Literal

from cyclopts import Parameter

from cachegen.config import resolve_config
from cli.groups import generation_group
from protoc_plugin.decode import load_descriptor_set, request_from_descriptor_set

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cachegen.config import GeneratorConfig
    from cachegen.descriptors import GenerationRequest


@dataclass(frozen=True)
class GenerationOptions:
    """Generator configuration parameters."""

    parameter: Annotated[
        str,
        Parameter(
            name="--parameter",
            help="Plugin parameter string, as passed through --go-cache-manager_opt.",
            group=generation_group,
        ),
    ] = ""
    marker_suffix: Annotated[
        str | None,
        Parameter(
            name="--marker-suffix",
            help="Service name suffix selecting services for generation.",
            env_var="CACHEGEN_MARKER_SUFFIX",
            group=generation_group,
        ),
    ] = None
    runtime_import: Annotated[
        str | None,
        Parameter(
            name="--runtime-import",
            help="Go import path of the cache runtime package.",
            env_var="CACHEGEN_RUNTIME_IMPORT",
            group=generation_group,
        ),
    ] = None
    runtime_package: Annotated[
        str | None,
        Parameter(
            name="--runtime-package",
            help="Go package name used to reference the cache runtime.",
            env_var="CACHEGEN_RUNTIME_PACKAGE",
            group=generation_group,
        ),
    ] = None
    paths: Annotated[
        Literal["import", "source_relative"] | None,
        Parameter(
            name="--paths",
            help="Output path mode.",
            env_var="CACHEGEN_PATHS",
            group=generation_group,
        ),
    ] = None

    def overrides(self) -> dict[str, str]:
        """Return the explicitly set options keyed by plugin parameter name."""
        values = {
            "marker_suffix": self.marker_suffix,
            "runtime_import": self.runtime_import,
            "runtime_package": self.runtime_package,
            "paths": self.paths,
        }
        return {key: value for key, value in values.items() if value is not None}


DEFAULT_GENERATION_OPTIONS = GenerationOptions()


def load_generation_request(
    descriptor_set: Path,
    *,
    files: Sequence[str],
    options: GenerationOptions,
) -> tuple[GenerationRequest, GeneratorConfig]:
    """Read a descriptor set and resolve the request and configuration.

    Returns
    -------
    tuple[GenerationRequest, GeneratorConfig]
        Decoded request and its resolved configuration.
    """
    config = resolve_config(options.parameter, overrides=options.overrides())
    proto_set = load_descriptor_set(descriptor_set.read_bytes())
    request = request_from_descriptor_set(
        proto_set,
        config,
        files_to_generate=files,
        parameter=options.parameter,
    )
    return request, config


__all__ = ["DEFAULT_GENERATION_OPTIONS", "GenerationOptions", "load_generation_request"]
