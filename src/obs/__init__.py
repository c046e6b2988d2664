"""Observability helpers for cache manager generation."""

from __future__ import annotations

from obs.tracing import (
    SCOPE_CLI,
    SCOPE_GENERATOR,
    get_tracer,
    normalize_attributes,
    record_exception,
    set_span_attributes,
    stage_span,
)

__all__ = [
    "SCOPE_CLI",
    "SCOPE_GENERATOR",
    "get_tracer",
    "normalize_attributes",
    "record_exception",
    "set_span_attributes",
    "stage_span",
]
