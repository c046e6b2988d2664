"""Emission of cache manager declarations for candidate services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cachegen.config import GeneratorConfig
from cachegen.descriptors import GeneratedFile
from cachegen.errors import DescriptorError
from cachegen.naming import output_filename
from cachegen.selection import candidate_services
from cachegen.templates import (
    file_header,
    getter_method,
    manager_constructor,
    manager_struct,
    refresher_method,
    unused_import_guard,
)

if TYPE_CHECKING:
    from cachegen.config import RuntimeBinding
    from cachegen.descriptors import FileDescriptor, MethodDescriptor, ServiceDescriptor

_LOGGER = logging.getLogger(__name__)
_DEFAULT_CONFIG = GeneratorConfig()


def _check_method(service: ServiceDescriptor, method: MethodDescriptor) -> None:
    if not method.name:
        msg = f"Service {service.name!r} has a method without a name."
        raise DescriptorError(msg)
    if not method.input_type or not method.output_type:
        msg = f"Method {service.name}.{method.name} is missing its input or output type."
        raise DescriptorError(msg)
    if method.service_name != service.name:
        msg = (
            f"Method {method.name!r} refers to service {method.service_name!r} "
            f"but is declared in {service.name!r}."
        )
        raise DescriptorError(msg)


def check_service(service: ServiceDescriptor) -> None:
    """Validate the identifiers a candidate service needs for emission.

    Raises
    ------
    DescriptorError
        Raised when a service or method identifier or a message type is empty,
        or a method's owning service does not match.
    """
    if not service.name:
        msg = "Service without a name."
        raise DescriptorError(msg)
    for method in service.methods:
        _check_method(service, method)


def emit_service(service: ServiceDescriptor, runtime: RuntimeBinding) -> tuple[str, ...]:
    """Return the declarations for one candidate service.

    The order is: manager type, constructor, then a ``Get``/``Refresh`` pair
    for each method in declaration order.

    Returns
    -------
    tuple[str, ...]
        Declaration fragments.
    """
    check_service(service)
    fragments = [manager_struct(service, runtime), manager_constructor(service, runtime)]
    for method in service.methods:
        fragments.append(getter_method(method, runtime))
        fragments.append(refresher_method(method, runtime))
    return tuple(fragments)


def emit_file(
    file: FileDescriptor,
    config: GeneratorConfig = _DEFAULT_CONFIG,
) -> GeneratedFile | None:
    """Generate the cache manager file for a proto file.

    Parameters
    ----------
    file
        Decoded proto file.
    config
        Generator configuration.

    Returns
    -------
    GeneratedFile | None
        Generated file, or ``None`` when the file has no candidate service.
    """
    services = candidate_services(file, config.policy)
    if not services:
        _LOGGER.debug("No cache services in %s.", file.path)
        return None
    fragments = [file_header(file.path, file.package_name, config.runtime)]
    if not any(service.methods for service in services):
        fragments.append(unused_import_guard())
    for service in services:
        _LOGGER.debug(
            "Emitting %s for %s (%d methods).",
            service.name,
            file.path,
            len(service.methods),
        )
        fragments.extend(emit_service(service, config.runtime))
    return GeneratedFile(
        name=output_filename(file.filename_prefix),
        package_name=file.package_name,
        fragments=tuple(fragments),
    )


__all__ = ["check_service", "emit_file", "emit_service"]
