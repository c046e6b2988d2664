"""Encode generation results as a ``CodeGeneratorResponse``."""

from __future__ import annotations

from google.protobuf.compiler import plugin_pb2

from cachegen.descriptors import GenerationResponse

SUPPORTED_FEATURES = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL


def to_proto_response(response: GenerationResponse) -> plugin_pb2.CodeGeneratorResponse:
    """Return the protobuf message for a generation response."""
    message = plugin_pb2.CodeGeneratorResponse(supported_features=SUPPORTED_FEATURES)
    if response.error is not None:
        message.error = response.error
        return message
    for generated in response.files:
        message.file.add(name=generated.name, content=generated.content)
    return message


def encode_response(response: GenerationResponse) -> bytes:
    """Serialize a generation response for protoc."""
    return to_proto_response(response).SerializeToString()


def error_response(message: str) -> bytes:
    """Serialize a response that reports ``message`` as the plugin error.

    protoc prints the error and fails the compilation; no file is written.
    """
    return encode_response(GenerationResponse(error=message))


__all__ = ["SUPPORTED_FEATURES", "encode_response", "error_response", "to_proto_response"]
