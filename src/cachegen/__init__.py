"""Cache manager code generation for protobuf services."""

from __future__ import annotations

from cachegen.config import CandidatePolicy, GeneratorConfig, PathsMode, RuntimeBinding
from cachegen.descriptors import (
    Comments,
    FileDescriptor,
    GeneratedFile,
    GenerationRequest,
    GenerationResponse,
    MethodDescriptor,
    ServiceDescriptor,
)
from cachegen.emitter import emit_file
from cachegen.errors import CacheGenError, ConfigError, DescriptorError, GenerationError
from cachegen.generator import generate
from cachegen.selection import has_candidate, is_candidate

__all__ = [
    "CacheGenError",
    "CandidatePolicy",
    "Comments",
    "ConfigError",
    "DescriptorError",
    "FileDescriptor",
    "GeneratedFile",
    "GenerationError",
    "GenerationRequest",
    "GenerationResponse",
    "GeneratorConfig",
    "MethodDescriptor",
    "PathsMode",
    "RuntimeBinding",
    "ServiceDescriptor",
    "emit_file",
    "generate",
    "has_candidate",
    "is_candidate",
]
