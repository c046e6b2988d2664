"""Decode protoc descriptors into the generator's descriptor model.

Go naming follows protoc-gen-go: identifiers go through ``go_camel_case``,
message identifiers are relative to their own file's proto package, and the
Go package and import path come from the ``go_package`` file option.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable, Mapping, Sequence

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from cachegen.config import GeneratorConfig, PathsMode
from cachegen.descriptors import (
    Comments,
    FileDescriptor,
    GenerationRequest,
    MethodDescriptor,
    ServiceDescriptor,
)
from cachegen.errors import DescriptorError, RequestDecodeError
from cachegen.naming import go_camel_case, go_sanitized

_LOGGER = logging.getLogger(__name__)

# Field numbers used in SourceCodeInfo location paths.
_FILE_SERVICE_FIELD = 6
_SERVICE_METHOD_FIELD = 2

type SourcePath = tuple[int, ...]


def load_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Parse a serialized ``CodeGeneratorRequest``.

    Raises
    ------
    RequestDecodeError
        Raised when the payload is not a valid request.
    """
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as exc:
        msg = f"Invalid CodeGeneratorRequest: {exc}"
        raise RequestDecodeError(msg) from exc
    return request


def load_descriptor_set(data: bytes) -> descriptor_pb2.FileDescriptorSet:
    """Parse a serialized ``FileDescriptorSet``.

    Raises
    ------
    RequestDecodeError
        Raised when the payload is not a valid descriptor set.
    """
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except DecodeError as exc:
        msg = f"Invalid FileDescriptorSet: {exc}"
        raise RequestDecodeError(msg) from exc
    return descriptor_set


def _walk_messages(
    prefix: str,
    messages: Iterable[descriptor_pb2.DescriptorProto],
) -> Iterable[str]:
    for message in messages:
        name = f"{prefix}.{message.name}" if prefix else message.name
        yield name
        yield from _walk_messages(name, message.nested_type)


def message_index(files: Iterable[descriptor_pb2.FileDescriptorProto]) -> dict[str, str]:
    """Map fully-qualified message names to Go identifiers.

    Identifiers are never qualified with a Go package, so a message declared
    under another ``go_package`` is referenced by its bare name.
    ``build_files`` logs a warning for such methods.

    Returns
    -------
    dict[str, str]
        ``".pkg.Outer.Inner"`` -> ``"Outer_Inner"`` for every message.
    """
    index: dict[str, str] = {}
    for file in files:
        for relative in _walk_messages("", file.message_type):
            index[_qualified(file, relative)] = go_camel_case(relative)
    return index


def message_owners(files: Iterable[descriptor_pb2.FileDescriptorProto]) -> dict[str, str]:
    """Map fully-qualified message names to the proto file declaring them."""
    return {
        _qualified(file, relative): file.name
        for file in files
        for relative in _walk_messages("", file.message_type)
    }


def _qualified(file: descriptor_pb2.FileDescriptorProto, relative: str) -> str:
    return f".{file.package}.{relative}" if file.package else f".{relative}"


def _warn_foreign_messages(
    file: descriptor_pb2.FileDescriptorProto,
    import_path: str,
    owner_paths: Mapping[str, str],
    marker_suffix: str,
) -> None:
    foreign = sorted(
        {
            type_name
            for service in file.service
            if go_camel_case(service.name).endswith(marker_suffix)
            for method in service.method
            for type_name in (method.input_type, method.output_type)
            if owner_paths.get(type_name, import_path) != import_path
        }
    )
    for type_name in foreign:
        _LOGGER.warning(
            "%s uses %s from Go package %s; generated code references it unqualified.",
            file.name,
            type_name,
            owner_paths[type_name],
        )


def _split_go_package(value: str) -> tuple[str, str]:
    if ";" in value:
        import_path, name = value.split(";", 1)
        return import_path, name
    return value, ""


def go_package(
    file: descriptor_pb2.FileDescriptorProto,
    mapping: str | None = None,
) -> tuple[str, str]:
    """Return the Go import path and package name of a proto file.

    Parameters
    ----------
    file
        Proto file descriptor.
    mapping
        Value of an ``M<file>=<go package>`` plugin parameter for this file.
        Its parts take precedence over the ``go_package`` option.

    Returns
    -------
    tuple[str, str]
        ``(import_path, package_name)``.
    """
    option = file.options.go_package if file.options.HasField("go_package") else ""
    option_path, option_name = _split_go_package(option)
    mapped_path, mapped_name = _split_go_package(mapping or "")
    import_path = mapped_path or option_path
    name = mapped_name or option_name
    if not import_path:
        import_path = posixpath.dirname(file.name)
        stem = posixpath.splitext(posixpath.basename(file.name))[0]
        name = name or file.package.replace(".", "_") or stem
    elif not name:
        name = posixpath.basename(import_path.rstrip("/"))
    return import_path, go_sanitized(name)


def filename_prefix(
    file: descriptor_pb2.FileDescriptorProto,
    import_path: str,
    paths: PathsMode,
    module: str = "",
) -> str:
    """Return the generated filename prefix for a proto file.

    Raises
    ------
    DescriptorError
        Raised when an import-mode prefix lies outside ``module``.
    """
    stem = posixpath.splitext(file.name)[0]
    if paths is PathsMode.SOURCE_RELATIVE:
        return stem
    prefix = posixpath.join(import_path, posixpath.basename(stem))
    if not module:
        return prefix
    trim = module.rstrip("/") + "/"
    if not prefix.startswith(trim):
        msg = f"{file.name}: generated file {prefix!r} does not match prefix {module!r}."
        raise DescriptorError(msg)
    return prefix.removeprefix(trim)


def _leading_comments(file: descriptor_pb2.FileDescriptorProto) -> dict[SourcePath, str]:
    return {
        tuple(location.path): location.leading_comments
        for location in file.source_code_info.location
        if location.leading_comments
    }


def _message_ident(index: Mapping[str, str], type_name: str, context: str) -> str:
    ident = index.get(type_name)
    if ident is None:
        msg = f"Unknown message type {type_name!r} referenced by {context}."
        raise DescriptorError(msg)
    return ident


def _service(
    service: descriptor_pb2.ServiceDescriptorProto,
    service_index: int,
    *,
    comments: Mapping[SourcePath, str],
    index: Mapping[str, str],
) -> ServiceDescriptor:
    service_name = go_camel_case(service.name)
    service_path: SourcePath = (_FILE_SERVICE_FIELD, service_index)
    methods: list[MethodDescriptor] = []
    for method_index, method in enumerate(service.method):
        context = f"{service.name}.{method.name}"
        methods.append(
            MethodDescriptor(
                name=go_camel_case(method.name),
                input_type=_message_ident(index, method.input_type, context),
                output_type=_message_ident(index, method.output_type, context),
                service_name=service_name,
                comments=Comments(
                    leading=comments.get((*service_path, _SERVICE_METHOD_FIELD, method_index), "")
                ),
            )
        )
    return ServiceDescriptor(
        name=service_name,
        methods=tuple(methods),
        comments=Comments(leading=comments.get(service_path, "")),
    )


def build_files(
    proto_files: Sequence[descriptor_pb2.FileDescriptorProto],
    files_to_generate: Iterable[str],
    config: GeneratorConfig,
) -> tuple[FileDescriptor, ...]:
    """Convert proto file descriptors into generator file descriptors.

    Parameters
    ----------
    proto_files
        Every file of the request, dependencies included.
    files_to_generate
        Names of the files flagged for generation.
    config
        Generator configuration: output path mode, ``module`` prefix and
        ``M`` import mappings.

    Returns
    -------
    tuple[FileDescriptor, ...]
        Files in request order.
    """
    flagged = frozenset(files_to_generate)
    index = message_index(proto_files)
    packages = {
        proto.name: go_package(proto, config.go_import_map.get(proto.name))
        for proto in proto_files
    }
    owner_paths = {
        name: packages[owner][0] for name, owner in message_owners(proto_files).items()
    }
    files: list[FileDescriptor] = []
    for proto in proto_files:
        import_path, package_name = packages[proto.name]
        generate = proto.name in flagged
        if generate:
            _warn_foreign_messages(proto, import_path, owner_paths, config.policy.marker_suffix)
        comments = _leading_comments(proto)
        services = tuple(
            _service(service, position, comments=comments, index=index)
            for position, service in enumerate(proto.service)
        )
        module = config.module if generate else ""
        prefix = filename_prefix(proto, import_path, config.paths, module)
        files.append(
            FileDescriptor(
                path=proto.name,
                package_name=package_name,
                import_path=import_path,
                filename_prefix=prefix,
                generate=generate,
                services=services,
            )
        )
    _LOGGER.debug("Decoded %d proto files (%d flagged).", len(files), len(flagged))
    return tuple(files)


def _compiler_version(request: plugin_pb2.CodeGeneratorRequest) -> str | None:
    if not request.HasField("compiler_version"):
        return None
    version = request.compiler_version
    text = f"{version.major}.{version.minor}.{version.patch}"
    if version.suffix:
        text = f"{text}-{version.suffix}"
    return text


def build_request(
    request: plugin_pb2.CodeGeneratorRequest,
    config: GeneratorConfig,
) -> GenerationRequest:
    """Convert a ``CodeGeneratorRequest`` into a ``GenerationRequest``.

    Returns
    -------
    GenerationRequest
        Decoded request with every proto file; only ``file_to_generate``
        entries are flagged for generation.
    """
    return GenerationRequest(
        files=build_files(request.proto_file, request.file_to_generate, config),
        parameter=request.parameter,
        compiler_version=_compiler_version(request),
    )


def request_from_descriptor_set(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    config: GeneratorConfig,
    *,
    files_to_generate: Sequence[str] = (),
    parameter: str = "",
) -> GenerationRequest:
    """Build a ``GenerationRequest`` from a ``FileDescriptorSet``.

    Parameters
    ----------
    descriptor_set
        Descriptor set, ideally produced with ``--include_imports`` and
        ``--include_source_info``.
    config
        Generator configuration.
    files_to_generate
        Proto file names to generate. Every file in the set when empty.
    parameter
        Parameter string recorded on the request.

    Returns
    -------
    GenerationRequest
        Decoded request.

    Raises
    ------
    DescriptorError
        Raised when a requested file is not part of the descriptor set.
    """
    names = [file.name for file in descriptor_set.file]
    missing = sorted(set(files_to_generate) - set(names))
    if missing:
        msg = f"Files not found in descriptor set: {', '.join(missing)}."
        raise DescriptorError(msg)
    targets = files_to_generate or names
    return GenerationRequest(
        files=build_files(descriptor_set.file, targets, config),
        parameter=parameter,
    )


__all__ = [
    "build_files",
    "build_request",
    "filename_prefix",
    "go_package",
    "load_descriptor_set",
    "load_request",
    "message_index",
    "message_owners",
    "request_from_descriptor_set",
]
