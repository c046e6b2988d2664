"""Identifier naming policy for generated cache managers.

All functions are pure string transforms. They are total over valid
identifiers and map the empty string to the empty string where noted.
"""

from __future__ import annotations

from typing import Final

OUTPUT_SUFFIX: Final[str] = "_cache_manager.pb.go"

GO_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)


def manager_name(service_name: str) -> str:
    """Return the aggregate manager type name for a service.

    Returns
    -------
    str
        ``service_name + "Manager"``, or ``""`` for an empty name.
    """
    if not service_name:
        return ""
    return f"{service_name}Manager"


def private_field_name(name: str) -> str:
    """Return ``name`` with its first character lower-cased."""
    if not name:
        return ""
    return name[0].lower() + name[1:]


def composite_field_name(private_name: str, method_name: str) -> str:
    """Return the struct field holding the cache handle of one method."""
    return f"{private_name}_{method_name}"


def handle_field_name(service_name: str, method_name: str) -> str:
    """Return the handle field name of ``method_name`` within a service manager."""
    return composite_field_name(private_field_name(manager_name(service_name)), method_name)


def constructor_name(manager: str) -> str:
    return f"New{manager}"


def update_fn_name(method_name: str) -> str:
    return f"update{method_name}Fn"


def cache_logical_name(method_name: str) -> str:
    """Return the runtime cache name for a method (lower-cased method name)."""
    return method_name.lower()


def getter_name(method_name: str) -> str:
    return f"Get{method_name}"


def refresher_name(method_name: str) -> str:
    return f"Refresh{method_name}"


def output_filename(filename_prefix: str) -> str:
    """Return the generated file name for a proto file's output prefix."""
    return f"{filename_prefix}{OUTPUT_SUFFIX}"


def go_camel_case(name: str) -> str:
    """Convert a proto identifier into a Go identifier.

    Follows protoc-gen-go: ``.`` before a lower-case letter is dropped and
    otherwise becomes ``_``; a leading ``_`` (or one after ``.``) becomes
    ``X``; ``_`` before a lower-case letter is dropped; every word starts
    upper case.

    Parameters
    ----------
    name
        Proto identifier, possibly dotted for nested types.

    Returns
    -------
    str
        Go identifier.
    """
    out: list[str] = []
    i = 0
    size = len(name)
    while i < size:
        char = name[i]
        next_lower = i + 1 < size and _is_ascii_lower(name[i + 1])
        if char == "." and next_lower:
            pass
        elif char == ".":
            out.append("_")
        elif char == "_" and (i == 0 or name[i - 1] == "."):
            out.append("X")
        elif char == "_" and next_lower:
            pass
        elif char.isascii() and char.isdigit():
            out.append(char)
        else:
            out.append(char.upper() if _is_ascii_lower(char) else char)
            while i + 1 < size and _is_ascii_lower(name[i + 1]):
                i += 1
                out.append(name[i])
        i += 1
    return "".join(out)


def go_sanitized(name: str) -> str:
    """Return ``name`` as a valid Go identifier.

    Characters outside letters and digits become ``_``; the result gets a
    leading ``_`` when it is a Go keyword or does not start with a letter.
    """
    sanitized = "".join(char if char.isalnum() else "_" for char in name)
    if sanitized in GO_KEYWORDS or not sanitized[:1].isalpha():
        return f"_{sanitized}"
    return sanitized


def _is_ascii_lower(char: str) -> bool:
    return "a" <= char <= "z"


__all__ = [
    "OUTPUT_SUFFIX",
    "cache_logical_name",
    "composite_field_name",
    "constructor_name",
    "getter_name",
    "go_camel_case",
    "go_sanitized",
    "handle_field_name",
    "manager_name",
    "output_filename",
    "private_field_name",
    "refresher_name",
    "update_fn_name",
]
