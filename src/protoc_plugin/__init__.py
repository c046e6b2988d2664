"""protoc plugin transport: request decoding and response encoding."""

from __future__ import annotations

from protoc_plugin.decode import (
    build_request,
    load_descriptor_set,
    load_request,
    request_from_descriptor_set,
)
from protoc_plugin.encode import encode_response, error_response

__all__ = [
    "build_request",
    "encode_response",
    "error_response",
    "load_descriptor_set",
    "load_request",
    "request_from_descriptor_set",
]
