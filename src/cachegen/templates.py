"""Go source templates for cache manager declarations.

Each function returns one gofmt-formatted fragment. Declaration fragments
start with a blank separator line and end with a newline, so a generated file
is the plain concatenation of its fragments.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Final

from cachegen.naming import (
    cache_logical_name,
    constructor_name,
    getter_name,
    handle_field_name,
    manager_name,
    refresher_name,
    update_fn_name,
)

if TYPE_CHECKING:
    from cachegen.config import RuntimeBinding
    from cachegen.descriptors import Comments, MethodDescriptor, ServiceDescriptor

GENERATED_MARKER: Final[str] = "// Code generated by protoc-gen-go-cache-manager. DO NOT EDIT."
REFRESH_PREAMBLE: Final[str] = "// Eagerly refresh the cache for the method that:"
RECEIVER: Final[str] = "cm"


def _block(lines: Iterable[str]) -> str:
    return "\n" + "\n".join(lines) + "\n"


def _aligned(pairs: Sequence[tuple[str, str]], *, indent: str, sep: str, end: str = "") -> list[str]:
    # gofmt pads the left column of consecutive lines to a common width.
    width = max((len(left) for left, _ in pairs), default=0)
    return [f"{indent}{(left + sep).ljust(width + len(sep))} {right}{end}" for left, right in pairs]


def handle_type(method: MethodDescriptor, runtime: RuntimeBinding) -> str:
    """Return the Go type of a method's cache handle."""
    handle = runtime.qualified(runtime.handle_type)
    return f"*{handle}[*{method.input_type}, *{method.output_type}]"


def update_fn_type(method: MethodDescriptor) -> str:
    return f"func(context.Context, *{method.input_type}) (*{method.output_type}, error)"


def import_line(runtime: RuntimeBinding) -> str:
    """Return the runtime import spec, aliased when the path base differs."""
    base = runtime.import_path.rstrip("/").rsplit("/", 1)[-1]
    if base == runtime.package:
        return f'"{runtime.import_path}"'
    return f'{runtime.package} "{runtime.import_path}"'


def file_header(source_path: str, package_name: str, runtime: RuntimeBinding) -> str:
    """Return the generated marker, package clause and fixed import block."""
    lines = [
        GENERATED_MARKER,
        f"// source: {source_path}",
        "",
        f"package {package_name}",
        "",
        "import (",
        '\t"context"',
        '\t"fmt"',
        "",
        f"\t{import_line(runtime)}",
        ")",
    ]
    return "\n".join(lines) + "\n"


def unused_import_guard() -> str:
    """Keep the fixed imports referenced when no method uses them."""
    return _block(
        [
            "var (",
            "\t_ = context.Background",
            "\t_ = fmt.Errorf",
            ")",
        ]
    )


def service_type_comment(service: ServiceDescriptor) -> list[str]:
    if not service.comments.has_leading:
        return []
    header = f"// {manager_name(service.name)} for every operation related to this service:"
    return [header, *service.comments.go_lines()]


def constructor_comment(service: ServiceDescriptor) -> list[str]:
    if not service.comments.has_leading:
        return []
    name = constructor_name(manager_name(service.name))
    return [f"// {name} is the constructor method for this service:", *service.comments.go_lines()]


def strip_comment_markers(comments: Comments) -> list[str]:
    """Return comment lines without their leading ``//`` marker and trailing whitespace."""
    stripped: list[str] = []
    for line in comments.go_lines():
        text = line.removeprefix("//").removeprefix(" ")
        stripped.append(text.rstrip())
    return stripped


def getter_comment(method: MethodDescriptor) -> list[str]:
    """Return the doc comment of a Get wrapper: ``Get`` + the stripped comment."""
    if not method.comments.has_leading:
        return []
    first, *rest = strip_comment_markers(method.comments)
    return [f"// Get{first}", *(f"// {text}" if text else "//" for text in rest)]


def refresher_comment(method: MethodDescriptor) -> list[str]:
    if not method.comments.has_leading:
        return []
    return [REFRESH_PREAMBLE, *method.comments.go_lines()]


def manager_struct(service: ServiceDescriptor, runtime: RuntimeBinding) -> str:
    """Return the aggregate manager type declaration.

    Returns
    -------
    str
        Struct with one cache handle field per method, in declaration order.
    """
    fields = [
        (handle_field_name(service.name, method.name), handle_type(method, runtime))
        for method in service.methods
    ]
    lines = [
        *service_type_comment(service),
        f"type {manager_name(service.name)} struct {{",
        *_aligned(fields, indent="\t", sep=""),
        "}",
    ]
    return _block(lines)


def _constructor_call(method: MethodDescriptor, runtime: RuntimeBinding) -> list[str]:
    field = handle_field_name(method.service_name, method.name)
    builder = runtime.qualified(runtime.constructor)
    output = method.output_type
    return [
        f"\t{field}, err := {builder}[*{method.input_type}, *{output}](",
        f'\t\t"{cache_logical_name(method.name)}",',
        f"\t\tfunc() *{output} {{ return &{output}{{}} }},",
        f"\t\t{update_fn_name(method.name)},",
        "\t\toptions...,",
        "\t)",
        "\tif err != nil {",
        f'\t\treturn nil, fmt.Errorf("creating cache manager %s: %w", "{method.name}", err)',
        "\t}",
        "",
    ]


def manager_constructor(service: ServiceDescriptor, runtime: RuntimeBinding) -> str:
    """Return the ``New<Manager>`` constructor declaration.

    Each handle is built in method order and the first failure returns
    ``nil`` with the error wrapped by the failing method's name.

    Returns
    -------
    str
        Constructor declaration.
    """
    manager = manager_name(service.name)
    params = [
        f"\t{update_fn_name(method.name)} {update_fn_type(method)},"
        for method in service.methods
    ]
    body: list[str] = []
    for method in service.methods:
        body.extend(_constructor_call(method, runtime))
    fields = [
        (handle_field_name(service.name, method.name), handle_field_name(service.name, method.name))
        for method in service.methods
    ]
    if fields:
        literal = [
            f"\treturn &{manager}{{",
            *_aligned(fields, indent="\t\t", sep=":", end=","),
            "\t}, nil",
        ]
    else:
        literal = [f"\treturn &{manager}{{}}, nil"]
    lines = [
        *constructor_comment(service),
        f"func {constructor_name(manager)}(",
        *params,
        f"\toptions ...{runtime.qualified(runtime.option_type)},",
        f") (*{manager}, error) {{",
        *body,
        *literal,
        "}",
    ]
    return _block(lines)


def _delegating_method(
    method: MethodDescriptor,
    *,
    name: str,
    target: str,
    comment: list[str],
) -> str:
    manager = manager_name(method.service_name)
    field = handle_field_name(method.service_name, method.name)
    lines = [
        *comment,
        f"func ({RECEIVER} *{manager}) {name}(",
        "\tctx context.Context,",
        f"\tinput *{method.input_type},",
        f") (*{method.output_type}, error) {{",
        f"\treturn {RECEIVER}.{field}.{target}(ctx, input)",
        "}",
    ]
    return _block(lines)


def getter_method(method: MethodDescriptor, runtime: RuntimeBinding) -> str:
    """Return the fetch-through-cache wrapper ``Get<Method>``."""
    return _delegating_method(
        method,
        name=getter_name(method.name),
        target=runtime.fetch_method,
        comment=getter_comment(method),
    )


def refresher_method(method: MethodDescriptor, runtime: RuntimeBinding) -> str:
    """Return the force-refresh wrapper ``Refresh<Method>``."""
    return _delegating_method(
        method,
        name=refresher_name(method.name),
        target=runtime.refresh_method,
        comment=refresher_comment(method),
    )


__all__ = [
    "GENERATED_MARKER",
    "REFRESH_PREAMBLE",
    "constructor_comment",
    "file_header",
    "getter_comment",
    "getter_method",
    "handle_type",
    "import_line",
    "manager_constructor",
    "manager_struct",
    "refresher_comment",
    "refresher_method",
    "service_type_comment",
    "strip_comment_markers",
    "unused_import_guard",
    "update_fn_type",
]
