"""Generator configuration: selection policy, runtime binding and path mode.

Values resolve with the precedence defaults < environment < plugin parameter.
The plugin parameter is the comma separated ``key=value`` string protoc
forwards from ``--go-cache-manager_opt``. It also accepts the protoc-gen-go
options ``M<proto file>=<go package>``, ``module=`` and ``annotate_code``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Final

import msgspec

from cachegen.errors import ConfigError
from serde_msgspec import StructBaseStrict
from utils.env_utils import env_enum, env_text

_LOGGER = logging.getLogger(__name__)

DEFAULT_MARKER_SUFFIX: Final[str] = "Cache"
DEFAULT_RUNTIME_IMPORT: Final[str] = "github.com/NSXBet/go-cache-manager/pkg/gocachemanager"
DEFAULT_RUNTIME_PACKAGE: Final[str] = "gocachemanager"

ENV_MARKER_SUFFIX: Final[str] = "CACHEGEN_MARKER_SUFFIX"
ENV_RUNTIME_IMPORT: Final[str] = "CACHEGEN_RUNTIME_IMPORT"
ENV_RUNTIME_PACKAGE: Final[str] = "CACHEGEN_RUNTIME_PACKAGE"
ENV_PATHS: Final[str] = "CACHEGEN_PATHS"


class PathsMode(StrEnum):
    """Output placement modes, matching protoc-gen-go's ``paths`` option."""

    IMPORT = "import"
    SOURCE_RELATIVE = "source_relative"


class CandidatePolicy(StructBaseStrict, frozen=True):
    """Selection rule for services that receive a cache manager."""

    marker_suffix: str = DEFAULT_MARKER_SUFFIX


class RuntimeBinding(StructBaseStrict, frozen=True):
    """Symbols of the Go cache runtime referenced by generated code."""

    import_path: str = DEFAULT_RUNTIME_IMPORT
    package: str = DEFAULT_RUNTIME_PACKAGE
    handle_type: str = "CacheManager"
    constructor: str = "NewCacheManager"
    option_type: str = "CacheOption"
    fetch_method: str = "Get"
    refresh_method: str = "Refresh"

    def qualified(self, symbol: str) -> str:
        """Return ``symbol`` qualified with the runtime package name."""
        return f"{self.package}.{symbol}"


class GeneratorConfig(StructBaseStrict, frozen=True):
    """Resolved configuration for one generation run.

    ``go_import_map`` holds the ``M<proto file>=<go package>`` parameter
    entries, and ``module`` the ``module=`` prefix stripped from output names
    in import mode.
    """

    policy: CandidatePolicy = msgspec.field(default_factory=CandidatePolicy)
    runtime: RuntimeBinding = msgspec.field(default_factory=RuntimeBinding)
    paths: PathsMode = PathsMode.IMPORT
    module: str = ""
    go_import_map: dict[str, str] = msgspec.field(default_factory=dict)


_PARAMETER_KEYS: Final[frozenset[str]] = frozenset(
    {"paths", "marker_suffix", "runtime_import", "runtime_package", "module", "annotate_code"}
)
_IMPORT_MAP_PREFIX: Final[str] = "M"


def parse_parameter(parameter: str) -> dict[str, str]:
    """Parse a protoc plugin parameter string.

    Follows protoc-gen-go: an entry without ``=`` is a key with an empty
    value, ``M<proto file>`` entries map a proto file to a Go package, and
    keys this plugin does not know are ignored with a warning.

    Parameters
    ----------
    parameter
        Comma separated ``key=value`` pairs. Blank entries are ignored.

    Returns
    -------
    dict[str, str]
        Parsed options keyed by option name.
    """
    options: dict[str, str] = {}
    for raw_entry in parameter.split(","):
        entry = raw_entry.strip()
        if not entry:
            continue
        key, _sep, value = entry.partition("=")
        key = key.strip()
        if not key:
            continue
        if key not in _PARAMETER_KEYS and not key.startswith(_IMPORT_MAP_PREFIX):
            _LOGGER.warning("Ignoring unknown plugin parameter %r.", key)
            continue
        options[key] = value.strip()
    return options


def _paths_mode(value: str) -> PathsMode:
    try:
        return PathsMode(value)
    except ValueError as exc:
        msg = f"Unsupported paths mode {value!r}; expected 'import' or 'source_relative'."
        raise ConfigError(msg) from exc


def resolve_config(
    parameter: str = "",
    *,
    overrides: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Resolve the generator configuration for a run.

    Parameters
    ----------
    parameter
        Plugin parameter string from the compilation request.
    overrides
        Extra options applied after the environment and before the parameter,
        for example values from a CLI config file.

    Returns
    -------
    GeneratorConfig
        Resolved configuration.

    Raises
    ------
    ConfigError
        Raised when an option value is invalid, or ``module=`` is combined
        with source-relative output paths.
    """
    options: dict[str, str] = {}
    marker = env_text(ENV_MARKER_SUFFIX)
    if marker is not None:
        options["marker_suffix"] = marker
    runtime_import = env_text(ENV_RUNTIME_IMPORT)
    if runtime_import is not None:
        options["runtime_import"] = runtime_import
    runtime_package = env_text(ENV_RUNTIME_PACKAGE)
    if runtime_package is not None:
        options["runtime_package"] = runtime_package
    paths = env_enum(ENV_PATHS, PathsMode)
    if paths is not None:
        options["paths"] = paths.value
    if overrides:
        options.update(overrides)
    options.update(parse_parameter(parameter))

    marker_suffix = options.get("marker_suffix", DEFAULT_MARKER_SUFFIX)
    if not marker_suffix:
        msg = "marker_suffix must not be empty."
        raise ConfigError(msg)
    runtime = RuntimeBinding(
        import_path=options.get("runtime_import") or DEFAULT_RUNTIME_IMPORT,
        package=options.get("runtime_package") or DEFAULT_RUNTIME_PACKAGE,
    )
    paths_mode = _paths_mode(options.get("paths", PathsMode.IMPORT.value))
    module = options.get("module", "").rstrip("/")
    if module and paths_mode is PathsMode.SOURCE_RELATIVE:
        msg = "module= cannot be combined with paths=source_relative."
        raise ConfigError(msg)
    config = GeneratorConfig(
        policy=CandidatePolicy(marker_suffix=marker_suffix),
        runtime=runtime,
        paths=paths_mode,
        module=module,
        go_import_map={
            key.removeprefix(_IMPORT_MAP_PREFIX): value
            for key, value in options.items()
            if key.startswith(_IMPORT_MAP_PREFIX)
        },
    )
    _LOGGER.debug("Resolved generator config: %s", config)
    return config


__all__ = [
    "DEFAULT_MARKER_SUFFIX",
    "DEFAULT_RUNTIME_IMPORT",
    "DEFAULT_RUNTIME_PACKAGE",
    "CandidatePolicy",
    "GeneratorConfig",
    "PathsMode",
    "RuntimeBinding",
    "parse_parameter",
    "resolve_config",
]
