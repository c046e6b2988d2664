"""Version reporting for the plugin CLI."""

from __future__ import annotations

import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from cachegen.config import resolve_config
from cachegen.errors import CacheGenError
from cli.exit_codes import ExitCode
from serde_msgspec import StructBaseStrict, dumps_json

DISTRIBUTION = "protoc-gen-go-cache-manager"
_DEV_VERSION = "0.0.0-dev"
_RUNTIME_DEPENDENCIES = ("cyclopts", "msgspec", "opentelemetry-api", "protobuf")

_LOGGER = logging.getLogger(__name__)


class VersionInfo(StructBaseStrict, frozen=True):
    """Plugin version and the defaults generated code is bound to."""

    version: str
    marker_suffix: str
    runtime_import: str
    runtime_package: str
    paths: str
    python: str
    dependencies: dict[str, str | None]


def get_version() -> str:
    """Return the installed plugin version, or ``0.0.0-dev`` from a checkout."""
    return _package_version(DISTRIBUTION) or _DEV_VERSION


def get_version_info() -> VersionInfo:
    """Describe this plugin build and its environment-resolved defaults.

    Returns
    -------
    VersionInfo
        Version payload.

    Raises
    ------
    ConfigError
        Raised when a ``CACHEGEN_*`` environment value is invalid.
    """
    config = resolve_config()
    return VersionInfo(
        version=get_version(),
        marker_suffix=config.policy.marker_suffix,
        runtime_import=config.runtime.import_path,
        runtime_package=config.runtime.package,
        paths=config.paths.value,
        python=sys.version.split()[0],
        dependencies={name: _package_version(name) for name in _RUNTIME_DEPENDENCIES},
    )


def version_command() -> int:
    """Print the plugin version and generation defaults as JSON.

    Returns
    -------
    int
        Exit status code.
    """
    try:
        info = get_version_info()
    except CacheGenError as exc:
        _LOGGER.error("Could not resolve generator defaults: %s", exc)
        return ExitCode.from_exception(exc)
    sys.stdout.write(dumps_json(info, pretty=True).decode() + "\n")
    return ExitCode.SUCCESS


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["VersionInfo", "get_version", "get_version_info", "version_command"]
