"""Environment variable resolution utilities."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import overload

_LOGGER = logging.getLogger(__name__)


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_text(
    name: str,
    *,
    default: str | None = None,
    strip: bool = True,
    allow_empty: bool = False,
) -> str | None:
    """Return an environment variable string with optional normalization.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Default value if not set or empty (unless allow_empty is True).
    strip
        Whether to strip whitespace from the value.
    allow_empty
        Whether to return empty strings instead of the default.

    Returns
    -------
    str | None
        Parsed value, or default/None when missing.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip() if strip else raw
    if not value and not allow_empty:
        return default
    return value


@overload
def env_enum[TEnum: Enum](name: str, enum_type: type[TEnum]) -> TEnum | None: ...


@overload
def env_enum[TEnum: Enum](name: str, enum_type: type[TEnum], *, default: TEnum) -> TEnum: ...


def env_enum[TEnum: Enum](
    name: str,
    enum_type: type[TEnum],
    *,
    default: TEnum | None = None,
) -> TEnum | None:
    """Parse environment variable as enum value.

    Parameters
    ----------
    name
        Environment variable name.
    enum_type
        Enum class to convert to.
    default
        Default value if not set or invalid.

    Returns
    -------
    TEnum | None
        Parsed enum value or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    value_lower = raw.lower()
    try:
        return enum_type(value_lower)
    except (ValueError, KeyError, TypeError):
        for member in enum_type:
            if member.name.lower() == value_lower:
                return member
        _LOGGER.warning("Ignoring invalid value %r for %s.", raw, name)
        return default


__all__ = ["env_enum", "env_text", "env_value"]
